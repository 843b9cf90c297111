"""Core typed dataclasses for file specs, licenses and build properties."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from romgen.errors import ConfigError

U16_MAX = 0xFFFF


class SizeHandling(StrEnum):
    """How retrieved bytes are reconciled with the expected ROM size."""

    EXACT = "exact"
    PAD = "pad"
    TRUNCATE = "truncate"
    DUPLICATE = "duplicate"


class SetType(StrEnum):
    SINGLE = "single"
    BANKED = "banked"
    MULTI = "multi"


class CsLogic(StrEnum):
    ACTIVE_LOW = "active_low"
    ACTIVE_HIGH = "active_high"
    IGNORE = "ignore"


class ServeAlg(StrEnum):
    DEFAULT = "default"
    TWO_CS_ONE_ADDR = "two_cs_one_addr"
    ADDR_ON_CS = "addr_on_cs"


@dataclass(frozen=True, slots=True)
class FileSpec:
    id: int
    source: str
    rom_type: str
    rom_size: int
    set_id: int
    set_type: SetType
    size_handling: SizeHandling = SizeHandling.EXACT
    extract: str | None = None
    description: str | None = None
    license: str | None = None
    cs1: CsLogic | None = None
    cs2: CsLogic | None = None
    cs3: CsLogic | None = None
    set_description: str | None = None

    def chip_selects(self) -> dict[str, CsLogic | None]:
        return {"cs1": self.cs1, "cs2": self.cs2, "cs3": self.cs3}


@dataclass(frozen=True, slots=True)
class License:
    id: int
    file_id: int
    url: str


@dataclass(frozen=True, slots=True)
class LicenseStatus:
    id: int
    file_id: int
    url: str
    accepted: bool

    @property
    def license(self) -> License:
        return License(id=self.id, file_id=self.file_id, url=self.url)


@dataclass(frozen=True, slots=True)
class FileData:
    id: int
    data: bytes


@dataclass(frozen=True, slots=True)
class FirmwareVersion:
    major: int = 0
    minor: int = 0
    patch: int = 0
    build: int = 0

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.major, self.minor, self.patch, self.build)

    def __str__(self) -> str:
        return ".".join(str(part) for part in self.as_tuple())


@dataclass(frozen=True, slots=True)
class FirmwareProperties:
    """Build-time parameters that do not depend on file content."""

    version: FirmwareVersion
    board: str
    serve_alg: str = ServeAlg.DEFAULT.value
    boot_logging: bool = True
    mcu_variant: str | None = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> FirmwareProperties:
        """Build properties from the host mapping shape.

        ``{"version": {"major": 0, ...}, "board": "...", "serve_alg": "...",
        "boot_logging": true, "mcu_variant": "..."}``
        """
        raw_version = payload.get("version", {})
        if not isinstance(raw_version, Mapping):
            raise ConfigError("Invalid firmware properties `version` value.")
        version_parts: dict[str, int] = {}
        for key in ("major", "minor", "patch", "build"):
            value = raw_version.get(key, 0)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"Invalid firmware version `{key}` value.")
            version_parts[key] = value

        board = payload.get("board")
        if not isinstance(board, str) or not board:
            raise ConfigError("Invalid firmware properties `board` value.")
        serve_alg = payload.get("serve_alg", ServeAlg.DEFAULT.value)
        if not isinstance(serve_alg, str):
            raise ConfigError("Invalid firmware properties `serve_alg` value.")
        boot_logging = payload.get("boot_logging", True)
        if not isinstance(boot_logging, bool):
            raise ConfigError("Invalid firmware properties `boot_logging` value.")
        mcu_variant = payload.get("mcu_variant")
        if mcu_variant is not None and not isinstance(mcu_variant, str):
            raise ConfigError("Invalid firmware properties `mcu_variant` value.")

        return cls(
            version=FirmwareVersion(**version_parts),
            board=board,
            serve_alg=serve_alg,
            boot_logging=boot_logging,
            mcu_variant=mcu_variant or None,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "version": {
                "major": self.version.major,
                "minor": self.version.minor,
                "patch": self.version.patch,
                "build": self.version.build,
            },
            "board": self.board,
            "serve_alg": str(self.serve_alg),
            "boot_logging": self.boot_logging,
            "mcu_variant": self.mcu_variant,
        }


@dataclass(frozen=True, slots=True)
class BuildOutput:
    firmware_image: bytes
    metadata: bytes


__all__ = [
    "BuildOutput",
    "CsLogic",
    "FileData",
    "FileSpec",
    "FirmwareProperties",
    "FirmwareVersion",
    "License",
    "LicenseStatus",
    "ServeAlg",
    "SetType",
    "SizeHandling",
    "U16_MAX",
]
