"""Resolve a configuration document into ordered file specs and licenses."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from romgen.catalog import board_info, mcu_info, rom_type_info
from romgen.config import RomConfig
from romgen.errors import CatalogError, ConfigError
from romgen.models import FileSpec, License

T = TypeVar("T")


def resolve_file_specs(config: RomConfig) -> tuple[tuple[FileSpec, ...], tuple[License, ...]]:
    """Derive file specs and licenses in document order.

    File ids count up from 0 across all sets; license ids count up from 0
    over the licensed files in file-id order. Unknown ROM types, boards or
    MCU variants named by the document raise ``ConfigError``.
    """
    if config.board is not None:
        _resolve_name(board_info, config.board, key="board")
    if config.mcu is not None:
        _resolve_name(mcu_info, config.mcu, key="mcu")

    specs: list[FileSpec] = []
    licenses: list[License] = []
    for set_id, rom_set in enumerate(config.rom_sets):
        for rom in rom_set.roms:
            rom_type = _resolve_name(rom_type_info, rom.rom_type, key="type")
            file_id = len(specs)
            specs.append(
                FileSpec(
                    id=file_id,
                    source=rom.file,
                    extract=rom.extract,
                    size_handling=rom.size_handling,
                    rom_type=rom_type.name,
                    rom_size=rom_type.size_bytes,
                    set_id=set_id,
                    set_type=rom_set.set_type,
                    set_description=rom_set.description,
                    description=rom.description,
                    license=rom.license,
                    cs1=rom.cs1,
                    cs2=rom.cs2,
                    cs3=rom.cs3,
                )
            )
            if rom.license is not None:
                licenses.append(License(id=len(licenses), file_id=file_id, url=rom.license))
    return tuple(specs), tuple(licenses)


def _resolve_name(lookup: Callable[[str], T], name: str, *, key: str) -> T:
    try:
        return lookup(name)
    except CatalogError as exc:
        raise ConfigError(
            f"Configuration references an unknown {key}: {name}",
            hint=exc.hint,
            context={"operation": "resolve_file_specs", "key": key, "name": name},
        ) from exc
