"""Image synthesis: layout, header packing and metadata serialization."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping, Sequence

from romgen.catalog import BoardInfo
from romgen.config import RomConfig
from romgen.flashing import IMAGE_OFFSET, METADATA_OFFSET
from romgen.models import BuildOutput, FileSpec, FirmwareProperties
from romgen.synth.header import FORMAT_VERSION, pack_header, payload_offset
from romgen.synth.layout import SetLayout, plan_sets, render_sets
from romgen.synth.metadata import METADATA_VERSION, BuildMetadata


def planned_image_size(specs: Sequence[FileSpec], board: BoardInfo) -> int:
    layouts = plan_sets(specs, board)
    offset = payload_offset(len(layouts), len(specs))
    return offset + sum(layout.size for layout in layouts)


def synthesize(
    *,
    config: RomConfig,
    specs: Sequence[FileSpec],
    files: Mapping[int, bytes],
    board: BoardInfo,
    properties: FirmwareProperties,
    generator: Mapping[str, str],
) -> BuildOutput:
    """Lay out stored files for *board* and describe the result.

    Callers validate readiness first; this only raises ``SynthesisError``
    when an internal layout invariant does not hold.
    """
    by_id = {spec.id: spec for spec in specs}
    layouts = plan_sets(specs, board)
    header = pack_header(properties, board, layouts, by_id)
    image = header + render_sets(layouts, by_id, files, board)

    metadata = BuildMetadata(
        generator=dict(generator),
        description=config.description,
        categories=config.categories,
        properties=properties.to_dict(),
        board={
            "name": board.name,
            "mcu_family": board.mcu_family,
            "rom_pins": board.rom_pins,
            "slot_size": board.slot_size,
        },
        image={
            "format_version": FORMAT_VERSION,
            "size": len(image),
            "payload_offset": len(header),
            "sha256": hashlib.sha256(image).hexdigest(),
        },
        flash={"metadata_offset": METADATA_OFFSET, "image_offset": IMAGE_OFFSET},
        sets=tuple(_set_record(layout) for layout in layouts),
        files=tuple(_file_record(spec, files[spec.id]) for spec in specs),
    )
    return BuildOutput(firmware_image=image, metadata=metadata.to_cbor())


def _set_record(layout: SetLayout) -> dict[str, object]:
    return {
        "id": layout.set_id,
        "type": layout.set_type.value,
        "description": layout.description,
        "offset": layout.offset,
        "size": layout.size,
        "file_ids": list(layout.file_ids),
    }


def _file_record(spec: FileSpec, data: bytes) -> dict[str, object]:
    return {
        "id": spec.id,
        "set_id": spec.set_id,
        "source": spec.source,
        "extract": spec.extract,
        "description": spec.description,
        "rom_type": spec.rom_type,
        "rom_size": spec.rom_size,
        "size_handling": spec.size_handling.value,
        "cs1": spec.cs1.value if spec.cs1 else None,
        "cs2": spec.cs2.value if spec.cs2 else None,
        "cs3": spec.cs3.value if spec.cs3 else None,
        "license": spec.license,
        "sha256": hashlib.sha256(data).hexdigest(),
    }


__all__ = [
    "METADATA_VERSION",
    "BuildMetadata",
    "planned_image_size",
    "synthesize",
]
