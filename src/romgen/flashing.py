"""Flash placement of build outputs and probe-rs flashing commands."""

from __future__ import annotations

from dataclasses import dataclass

from romgen.catalog import mcu_flash_base, mcu_info

METADATA_OFFSET = 0xC000
IMAGE_OFFSET = 0x10000


@dataclass(frozen=True, slots=True)
class FlashPlan:
    chip_id: str
    flash_base: int
    metadata_address: int
    image_address: int

    def commands(
        self,
        *,
        metadata_file: str = "metadata.bin",
        image_file: str = "image_data.bin",
    ) -> tuple[tuple[str, ...], ...]:
        return (
            self._download(metadata_file, self.metadata_address),
            self._download(image_file, self.image_address),
            ("probe-rs", "reset", "--chip", self.chip_id),
        )

    def to_script(
        self,
        *,
        metadata_file: str = "metadata.bin",
        image_file: str = "image_data.bin",
    ) -> str:
        lines = [
            "# Download metadata and image data and then flash to device:",
            *(
                " ".join(argv)
                for argv in self.commands(metadata_file=metadata_file, image_file=image_file)
            ),
        ]
        return "\n".join(lines) + "\n"

    def _download(self, path: str, address: int) -> tuple[str, ...]:
        return (
            "probe-rs",
            "download",
            "--chip",
            self.chip_id,
            "--binary-format",
            "bin",
            "--base-address",
            f"0x{address:x}",
            path,
        )


def flash_plan(mcu_variant: str) -> FlashPlan:
    variant = mcu_info(mcu_variant)
    base = mcu_flash_base(variant.family)
    return FlashPlan(
        chip_id=variant.chip_id,
        flash_base=base,
        metadata_address=base + METADATA_OFFSET,
        image_address=base + IMAGE_OFFSET,
    )


def image_capacity(mcu_variant: str) -> int:
    """Bytes of flash available to the image after the image offset."""
    return mcu_info(mcu_variant).flash_bytes - IMAGE_OFFSET
