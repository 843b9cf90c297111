"""Configuration document parser and serializer."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path
from typing import Any, TypeVar

from romgen.config.model import CONFIG_VERSION, RomConfig, RomEntry, RomSetEntry
from romgen.errors import ConfigError
from romgen.models import CsLogic, SetType, SizeHandling

_EnumT = TypeVar("_EnumT", bound=StrEnum)

_SIZE_HANDLING_ALIASES = {
    "default": SizeHandling.EXACT,
    "none": SizeHandling.EXACT,
}


def parse_config(raw: str | bytes) -> RomConfig:
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError("Invalid configuration JSON.", hint=str(exc)) from exc
    if not isinstance(payload, dict):
        raise ConfigError("Invalid configuration payload type.")
    return config_from_dict(payload)


def read_config(path: str | Path) -> RomConfig:
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(
            "Configuration file does not exist.",
            context={"path": str(config_path)},
        ) from exc
    return parse_config(raw)


def config_from_dict(payload: Mapping[str, Any]) -> RomConfig:
    version = payload.get("version", CONFIG_VERSION)
    if not isinstance(version, int) or isinstance(version, bool):
        raise ConfigError("Invalid configuration `version` value.")
    if version != CONFIG_VERSION:
        raise ConfigError(
            "Unsupported configuration version.",
            hint=f"Only version {CONFIG_VERSION} documents are supported.",
            context={"version": str(version)},
        )

    rom_sets_raw = payload.get("rom_sets")
    if not isinstance(rom_sets_raw, list) or not rom_sets_raw:
        raise ConfigError(
            "Invalid configuration `rom_sets` value.",
            hint="Declare at least one ROM set.",
        )
    rom_sets = tuple(_parse_rom_set(item, index) for index, item in enumerate(rom_sets_raw))

    categories_raw = payload.get("categories", [])
    if not isinstance(categories_raw, list) or not all(
        isinstance(item, str) for item in categories_raw
    ):
        raise ConfigError("Invalid configuration `categories` value.")

    return RomConfig(
        version=version,
        description=_optional_str(payload, "description") or "",
        categories=tuple(categories_raw),
        board=_optional_str(payload, "board"),
        mcu=_optional_str(payload, "mcu"),
        rom_sets=rom_sets,
    )


def serialize_config(config: RomConfig) -> str:
    payload: dict[str, Any] = {
        "version": config.version,
        "description": config.description,
        "categories": list(config.categories),
        "rom_sets": [
            _drop_none(
                {
                    "type": rom_set.set_type.value,
                    "description": rom_set.description,
                    "roms": [_rom_payload(rom) for rom in rom_set.roms],
                }
            )
            for rom_set in config.rom_sets
        ],
    }
    if config.board is not None:
        payload["board"] = config.board
    if config.mcu is not None:
        payload["mcu"] = config.mcu
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"


def _rom_payload(rom: RomEntry) -> dict[str, Any]:
    return _drop_none(
        {
            "file": rom.file,
            "type": rom.rom_type,
            "extract": rom.extract,
            "size_handling": rom.size_handling.value,
            "cs1": rom.cs1.value if rom.cs1 else None,
            "cs2": rom.cs2.value if rom.cs2 else None,
            "cs3": rom.cs3.value if rom.cs3 else None,
            "license": rom.license,
            "description": rom.description,
        }
    )


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


def _parse_rom_set(item: Any, index: int) -> RomSetEntry:
    if not isinstance(item, dict):
        raise ConfigError("Invalid ROM set entry.", context={"set": str(index)})
    set_type = _required_enum(item, "type", SetType, where=f"rom_sets[{index}]")
    roms_raw = item.get("roms")
    if not isinstance(roms_raw, list) or not roms_raw:
        raise ConfigError(
            "Invalid ROM set `roms` value.",
            hint="Each ROM set needs at least one ROM.",
            context={"set": str(index)},
        )
    roms = tuple(
        _parse_rom(rom, where=f"rom_sets[{index}].roms[{rom_index}]")
        for rom_index, rom in enumerate(roms_raw)
    )
    return RomSetEntry(
        set_type=set_type,
        roms=roms,
        description=_optional_str(item, "description", where=f"rom_sets[{index}]"),
    )


def _parse_rom(item: Any, *, where: str) -> RomEntry:
    if not isinstance(item, dict):
        raise ConfigError("Invalid ROM entry.", context={"entry": where})
    size_handling = _size_handling(item.get("size_handling"), where=where)
    return RomEntry(
        file=_required_str(item, "file", where=where),
        rom_type=_required_str(item, "type", where=where),
        extract=_optional_str(item, "extract", where=where),
        size_handling=size_handling,
        cs1=_optional_enum(item, "cs1", CsLogic, where=where),
        cs2=_optional_enum(item, "cs2", CsLogic, where=where),
        cs3=_optional_enum(item, "cs3", CsLogic, where=where),
        license=_optional_str(item, "license", where=where),
        description=_optional_str(item, "description", where=where),
    )


def _size_handling(value: Any, *, where: str) -> SizeHandling:
    if value is None:
        return SizeHandling.EXACT
    if isinstance(value, str) and value in _SIZE_HANDLING_ALIASES:
        return _SIZE_HANDLING_ALIASES[value]
    return _required_enum({"size_handling": value}, "size_handling", SizeHandling, where=where)


def _required_str(payload: Mapping[str, Any], key: str, *, where: str = "") -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"Invalid configuration `{key}` value.", context={"entry": where})
    return value


def _optional_str(payload: Mapping[str, Any], key: str, *, where: str = "") -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(
            f"Invalid configuration `{key}` value.",
            context={"entry": where, "value": str(value)},
        )
    return value or None


def _required_enum(
    payload: Mapping[str, Any],
    key: str,
    enum_type: type[_EnumT],
    *,
    where: str,
) -> _EnumT:
    value = payload.get(key)
    try:
        return enum_type(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        raise ConfigError(
            f"Invalid configuration `{key}` value.",
            hint=f"Expected one of: {allowed}.",
            context={"entry": where, "value": str(value)},
        ) from exc


def _optional_enum(
    payload: Mapping[str, Any],
    key: str,
    enum_type: type[_EnumT],
    *,
    where: str,
) -> _EnumT | None:
    if payload.get(key) is None:
        return None
    return _required_enum(payload, key, enum_type, where=where)
