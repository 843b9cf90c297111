"""Read-only lookups over the MCU, ROM type and board reference tables."""

from __future__ import annotations

from romgen.catalog.data import (
    BOARDS,
    CATALOG_VERSION,
    MCU_FAMILY_FLASH_BASE,
    MCU_VARIANTS,
    ROM_TYPES,
)
from romgen.catalog.model import (
    AddressPin,
    BoardInfo,
    ControlLine,
    DataPin,
    McuInfo,
    PowerPin,
    ProgrammingPin,
    RomTypeInfo,
    ValuePrettyPair,
)
from romgen.errors import CatalogError


def mcus() -> list[str]:
    return [variant.name for variant in MCU_VARIANTS]


def mcu_info(name: str) -> McuInfo:
    for variant in MCU_VARIANTS:
        if variant.name.lower() == name.lower():
            return variant
    raise CatalogError(
        f"Unknown MCU variant: {name}",
        hint="Choose one of the names returned by mcus().",
        context={"operation": "mcu_info", "name": name},
    )


def rom_types() -> list[str]:
    return [rom_type.name for rom_type in ROM_TYPES]


def rom_type_info(name: str) -> RomTypeInfo:
    for rom_type in ROM_TYPES:
        if rom_type.name == name:
            return rom_type
    raise CatalogError(
        f"Unknown ROM type: {name}",
        hint="Choose one of the names returned by rom_types().",
        context={"operation": "rom_type_info", "name": name},
    )


def rom_type_index(name: str) -> int:
    """Stable position of a ROM type in the catalog, used as its image code."""
    for index, rom_type in enumerate(ROM_TYPES):
        if rom_type.name == name:
            return index
    raise CatalogError(
        f"Unknown ROM type: {name}",
        context={"operation": "rom_type_index", "name": name},
    )


def boards() -> list[str]:
    return [board.name for board in BOARDS]


def board_info(name: str) -> BoardInfo:
    for board in BOARDS:
        if board.name == name.lower():
            return board
    raise CatalogError(
        f"Unknown board: {name}",
        hint="Choose one of the names returned by boards().",
        context={"operation": "board_info", "name": name},
    )


def mcu_families() -> list[str]:
    return sorted(MCU_FAMILY_FLASH_BASE)


def boards_for_mcu_family(family: str) -> list[ValuePrettyPair]:
    _ensure_family(family, operation="boards_for_mcu_family")
    return [
        ValuePrettyPair(value=board.name, pretty=board.description)
        for board in BOARDS
        if board.mcu_family == family
    ]


def mcus_for_mcu_family(family: str) -> list[ValuePrettyPair]:
    _ensure_family(family, operation="mcus_for_mcu_family")
    return [
        ValuePrettyPair(value=variant.name, pretty=f"{variant.name} ({variant.flash_kb}KB flash)")
        for variant in MCU_VARIANTS
        if variant.family == family
    ]


def mcu_flash_base(family: str) -> int:
    _ensure_family(family, operation="mcu_flash_base")
    return MCU_FAMILY_FLASH_BASE[family]


def mcu_chip_id(variant: str) -> str:
    return mcu_info(variant).chip_id


def _ensure_family(family: str, *, operation: str) -> None:
    if family not in MCU_FAMILY_FLASH_BASE:
        raise CatalogError(
            f"Unknown MCU family: {family}",
            hint=f"Known families: {', '.join(mcu_families())}.",
            context={"operation": operation, "name": family},
        )


__all__ = [
    "AddressPin",
    "BoardInfo",
    "CATALOG_VERSION",
    "ControlLine",
    "DataPin",
    "McuInfo",
    "PowerPin",
    "ProgrammingPin",
    "RomTypeInfo",
    "ValuePrettyPair",
    "board_info",
    "boards",
    "boards_for_mcu_family",
    "mcu_chip_id",
    "mcu_families",
    "mcu_flash_base",
    "mcu_info",
    "mcus",
    "mcus_for_mcu_family",
    "rom_type_index",
    "rom_type_info",
    "rom_types",
]
