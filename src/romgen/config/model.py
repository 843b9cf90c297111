"""Configuration document typed model."""

from __future__ import annotations

from dataclasses import dataclass

from romgen.models import CsLogic, SetType, SizeHandling

CONFIG_VERSION = 1


@dataclass(frozen=True, slots=True)
class RomEntry:
    file: str
    rom_type: str
    extract: str | None = None
    size_handling: SizeHandling = SizeHandling.EXACT
    cs1: CsLogic | None = None
    cs2: CsLogic | None = None
    cs3: CsLogic | None = None
    license: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class RomSetEntry:
    set_type: SetType
    roms: tuple[RomEntry, ...]
    description: str | None = None


@dataclass(frozen=True, slots=True)
class RomConfig:
    description: str
    rom_sets: tuple[RomSetEntry, ...]
    version: int = CONFIG_VERSION
    categories: tuple[str, ...] = ()
    board: str | None = None
    mcu: str | None = None
