"""Readiness checks run before an image is synthesized.

Every check runs on every call and all failures are collected, so the
report can be shown to the user as a complete checklist.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal, TypeVar

from romgen.catalog import BoardInfo, McuInfo, board_info, mcu_info, rom_type_info
from romgen.config import RomConfig
from romgen.errors import CatalogError
from romgen.flashing import image_capacity
from romgen.licenses import LicenseGate
from romgen.models import U16_MAX, CsLogic, FileSpec, FirmwareProperties, ServeAlg, SetType
from romgen.store import FileStore
from romgen.synth import planned_image_size
from romgen.synth.header import MAX_TABLE_ENTRIES

T = TypeVar("T")

SetViolationReason = Literal[
    "set_size",
    "chip_select_missing",
    "chip_select_unexpected",
    "chip_select_conflict",
    "rom_pins",
    "address_lines",
    "unsupported_set_type",
]

SET_SIZE_LIMITS = {
    SetType.SINGLE: (1, 1),
    SetType.BANKED: (2, 4),
    SetType.MULTI: (2, 3),
}


@dataclass(frozen=True, slots=True)
class SetViolation:
    set_id: int
    reason: SetViolationReason
    detail: str
    file_id: int | None = None


@dataclass(frozen=True, slots=True)
class PropertyViolation:
    key: str
    detail: str


@dataclass(frozen=True, slots=True)
class ValidationReport:
    missing_licenses: tuple[int, ...] = ()
    missing_files: tuple[int, ...] = ()
    set_violations: tuple[SetViolation, ...] = ()
    property_errors: tuple[PropertyViolation, ...] = ()

    @property
    def ok(self) -> bool:
        return not (
            self.missing_licenses
            or self.missing_files
            or self.set_violations
            or self.property_errors
        )

    def summary(self) -> dict[str, str]:
        return {
            "missing_licenses": ",".join(str(item) for item in self.missing_licenses),
            "missing_files": ",".join(str(item) for item in self.missing_files),
            "set_violations": "; ".join(item.detail for item in self.set_violations),
            "property_errors": "; ".join(item.detail for item in self.property_errors),
        }

    def to_dict(self) -> dict[str, object]:
        return {
            "ok": self.ok,
            "missing_licenses": list(self.missing_licenses),
            "missing_files": list(self.missing_files),
            "set_violations": [
                {
                    "set_id": item.set_id,
                    "reason": item.reason,
                    "detail": item.detail,
                    "file_id": item.file_id,
                }
                for item in self.set_violations
            ],
            "property_errors": [
                {"key": item.key, "detail": item.detail} for item in self.property_errors
            ],
        }


def validate_build(
    *,
    config: RomConfig,
    specs: Sequence[FileSpec],
    licenses: LicenseGate,
    store: FileStore,
    properties: FirmwareProperties,
) -> ValidationReport:
    """Check every build precondition without touching builder state."""
    property_errors: list[PropertyViolation] = []
    board = _check_board(config, properties, property_errors)
    mcu = _check_mcu(config, properties, board, property_errors)
    _check_properties(properties, property_errors)
    _check_table_limits(specs, property_errors)
    if board is not None and mcu is not None:
        size = planned_image_size(specs, board)
        capacity = image_capacity(mcu.name)
        if size > capacity:
            property_errors.append(
                PropertyViolation(
                    key="mcu_variant",
                    detail=(
                        f"Image needs {size} bytes but {mcu.name} has {capacity} bytes "
                        "of image flash."
                    ),
                )
            )

    return ValidationReport(
        missing_licenses=licenses.missing(),
        missing_files=tuple(spec.id for spec in specs if spec.id not in store),
        set_violations=tuple(check_sets(specs, board=board, mcu=mcu)),
        property_errors=tuple(property_errors),
    )


def check_sets(
    specs: Sequence[FileSpec],
    *,
    board: BoardInfo | None,
    mcu: McuInfo | None,
) -> list[SetViolation]:
    """Set consistency rules; board and MCU rules only run when those resolved."""
    members: dict[int, list[FileSpec]] = {}
    for spec in specs:
        members.setdefault(spec.set_id, []).append(spec)

    violations: list[SetViolation] = []
    for set_id in sorted(members):
        set_specs = members[set_id]
        set_type = set_specs[0].set_type
        low, high = SET_SIZE_LIMITS[set_type]
        if not low <= len(set_specs) <= high:
            violations.append(
                SetViolation(
                    set_id=set_id,
                    reason="set_size",
                    detail=(
                        f"Set {set_id} is '{set_type}' and needs {low}..{high} ROMs, "
                        f"found {len(set_specs)}."
                    ),
                )
            )
        for spec in set_specs:
            violations.extend(_check_chip_selects(spec))
            if board is not None:
                violations.extend(_check_rom_fits_board(spec, board))
        if set_type is SetType.MULTI:
            violations.extend(_check_multi_cs1(set_id, set_specs))
        violations.extend(_check_set_support(set_id, set_type, board=board, mcu=mcu))
    return violations


def _check_chip_selects(spec: FileSpec) -> list[SetViolation]:
    rom_type = rom_type_info(spec.rom_type)
    configurable = rom_type.configurable_lines()
    violations: list[SetViolation] = []
    for line, value in spec.chip_selects().items():
        if line in configurable and value is None:
            violations.append(
                SetViolation(
                    set_id=spec.set_id,
                    file_id=spec.id,
                    reason="chip_select_missing",
                    detail=f"File {spec.id} ({rom_type.name}) needs a {line} setting.",
                )
            )
        elif line not in configurable and value is not None:
            violations.append(
                SetViolation(
                    set_id=spec.set_id,
                    file_id=spec.id,
                    reason="chip_select_unexpected",
                    detail=f"File {spec.id} ({rom_type.name}) has no configurable {line}.",
                )
            )
    return violations


def _check_rom_fits_board(spec: FileSpec, board: BoardInfo) -> list[SetViolation]:
    rom_type = rom_type_info(spec.rom_type)
    if rom_type.rom_pins != board.rom_pins:
        return [
            SetViolation(
                set_id=spec.set_id,
                file_id=spec.id,
                reason="rom_pins",
                detail=(
                    f"File {spec.id} is a {rom_type.rom_pins} pin ROM but {board.name} "
                    f"is a {board.rom_pins} pin board."
                ),
            )
        ]
    if rom_type.num_addr_lines > board.slot_log2:
        return [
            SetViolation(
                set_id=spec.set_id,
                file_id=spec.id,
                reason="address_lines",
                detail=(
                    f"File {spec.id} needs {rom_type.num_addr_lines} address lines but "
                    f"{board.name} routes {board.slot_log2}."
                ),
            )
        ]
    return []


def _check_multi_cs1(set_id: int, set_specs: Sequence[FileSpec]) -> list[SetViolation]:
    levels = {spec.cs1 for spec in set_specs if spec.cs1 is not None}
    if CsLogic.IGNORE in levels:
        return [
            SetViolation(
                set_id=set_id,
                reason="chip_select_conflict",
                detail=f"Set {set_id} is 'multi' so cs1 cannot be 'ignore'.",
            )
        ]
    if len(levels) > 1:
        return [
            SetViolation(
                set_id=set_id,
                reason="chip_select_conflict",
                detail=f"Set {set_id} is 'multi' so all ROMs must share one cs1 level.",
            )
        ]
    return []


def _check_set_support(
    set_id: int,
    set_type: SetType,
    *,
    board: BoardInfo | None,
    mcu: McuInfo | None,
) -> list[SetViolation]:
    violations: list[SetViolation] = []
    if set_type is SetType.MULTI and board is not None and not board.supports_multi_rom_sets:
        violations.append(
            SetViolation(
                set_id=set_id,
                reason="unsupported_set_type",
                detail=f"Board {board.name} does not support multi-ROM sets.",
            )
        )
    if set_type is SetType.MULTI and mcu is not None and not mcu.supports_multi_rom_sets:
        violations.append(
            SetViolation(
                set_id=set_id,
                reason="unsupported_set_type",
                detail=f"MCU {mcu.name} does not support multi-ROM sets.",
            )
        )
    if set_type is SetType.BANKED and mcu is not None and not mcu.supports_banked_roms:
        violations.append(
            SetViolation(
                set_id=set_id,
                reason="unsupported_set_type",
                detail=f"MCU {mcu.name} does not support banked ROMs.",
            )
        )
    return violations


def _check_board(
    config: RomConfig,
    properties: FirmwareProperties,
    errors: list[PropertyViolation],
) -> BoardInfo | None:
    board = _lookup(board_info, properties.board, key="board", errors=errors)
    if board is not None and config.board is not None and board.name != config.board.lower():
        errors.append(
            PropertyViolation(
                key="board",
                detail=f"Configuration targets board {config.board}, not {board.name}.",
            )
        )
    return board


def _check_mcu(
    config: RomConfig,
    properties: FirmwareProperties,
    board: BoardInfo | None,
    errors: list[PropertyViolation],
) -> McuInfo | None:
    name = properties.mcu_variant or config.mcu
    if name is None:
        return None
    mcu = _lookup(mcu_info, name, key="mcu_variant", errors=errors)
    if mcu is None:
        return None
    if properties.mcu_variant and config.mcu and mcu.name.lower() != config.mcu.lower():
        errors.append(
            PropertyViolation(
                key="mcu_variant",
                detail=f"Configuration targets MCU {config.mcu}, not {mcu.name}.",
            )
        )
    if board is not None and mcu.family != board.mcu_family:
        errors.append(
            PropertyViolation(
                key="mcu_variant",
                detail=(
                    f"MCU {mcu.name} is {mcu.family} but board {board.name} "
                    f"needs {board.mcu_family}."
                ),
            )
        )
    return mcu


def _check_table_limits(specs: Sequence[FileSpec], errors: list[PropertyViolation]) -> None:
    set_count = len({spec.set_id for spec in specs})
    if set_count > MAX_TABLE_ENTRIES or len(specs) > MAX_TABLE_ENTRIES:
        errors.append(
            PropertyViolation(
                key="rom_sets",
                detail=(
                    f"Image tables hold at most {MAX_TABLE_ENTRIES} sets and "
                    f"{MAX_TABLE_ENTRIES} ROMs, found {set_count} sets and {len(specs)} ROMs."
                ),
            )
        )


def _check_properties(properties: FirmwareProperties, errors: list[PropertyViolation]) -> None:
    if properties.serve_alg not in {member.value for member in ServeAlg}:
        errors.append(
            PropertyViolation(
                key="serve_alg",
                detail=f"Unknown serve algorithm: {properties.serve_alg}",
            )
        )
    for part, value in zip(
        ("major", "minor", "patch", "build"),
        properties.version.as_tuple(),
        strict=True,
    ):
        if not 0 <= value <= U16_MAX:
            errors.append(
                PropertyViolation(
                    key="version",
                    detail=f"Version {part} must be between 0 and {U16_MAX}, got {value}.",
                )
            )


def _lookup(
    lookup: Callable[[str], T],
    name: str,
    *,
    key: str,
    errors: list[PropertyViolation],
) -> T | None:
    try:
        return lookup(name)
    except CatalogError:
        errors.append(PropertyViolation(key=key, detail=f"Unknown {key}: {name}"))
        return None
