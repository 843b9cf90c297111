"""Lay ROM bytes out in the order the board's GPIO wiring reads them.

The emulator samples the address port and uses the raw port value as an
index into the ROM slot, then drives the stored byte straight onto the
data port. Both the address and the data lines are wired in board-specific
order, so the logical ROM contents are scrambled accordingly when the
image is built.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from romgen.catalog import BoardInfo
from romgen.errors import SynthesisError
from romgen.models import FileSpec, SetType


@dataclass(frozen=True, slots=True)
class SetLayout:
    set_id: int
    set_type: SetType
    file_ids: tuple[int, ...]
    offset: int
    size: int
    description: str | None = None


def bit_positions(pins: Sequence[int], *, width: int, kind: str) -> tuple[int, ...]:
    """Map each logical line to its bit position relative to the lowest wired pin."""
    base = min(pins)
    positions = tuple(pin - base for pin in pins)
    if sorted(positions) != list(range(width)):
        raise SynthesisError(
            f"Board {kind} pins do not form a contiguous bit range.",
            context={"operation": "layout", "pins": ",".join(str(pin) for pin in pins)},
        )
    return positions


def scatter(value: int, positions: Sequence[int]) -> int:
    result = 0
    for line, position in enumerate(positions):
        if value & (1 << line):
            result |= 1 << position
    return result


def data_table(board: BoardInfo) -> bytes:
    """Translation table taking a logical data byte to its port value."""
    positions = bit_positions(board.data_pins, width=8, kind="data")
    return bytes(scatter(value, positions) for value in range(256))


def address_index(board: BoardInfo) -> list[int]:
    """Physical slot index for every logical address in a slot."""
    positions = bit_positions(board.addr_pins, width=board.slot_log2, kind="address")
    return [scatter(address, positions) for address in range(board.slot_size)]


def plan_sets(specs: Sequence[FileSpec], board: BoardInfo) -> tuple[SetLayout, ...]:
    """Assign each set a payload-relative offset, one slot per member ROM."""
    members: dict[int, list[FileSpec]] = {}
    for spec in specs:
        members.setdefault(spec.set_id, []).append(spec)

    layouts: list[SetLayout] = []
    offset = 0
    for set_id in sorted(members):
        set_specs = sorted(members[set_id], key=lambda item: item.id)
        size = len(set_specs) * board.slot_size
        layouts.append(
            SetLayout(
                set_id=set_id,
                set_type=set_specs[0].set_type,
                file_ids=tuple(spec.id for spec in set_specs),
                offset=offset,
                size=size,
                description=set_specs[0].set_description,
            )
        )
        offset += size
    return tuple(layouts)


def render_slot(
    spec: FileSpec,
    rom: bytes,
    board: BoardInfo,
    *,
    index: Sequence[int],
    table: bytes,
) -> bytes:
    if len(rom) != spec.rom_size:
        raise SynthesisError(
            "Stored ROM bytes do not match the expected ROM size.",
            context={
                "operation": "build",
                "file_id": str(spec.id),
                "expected": str(spec.rom_size),
                "actual": str(len(rom)),
            },
        )
    if spec.rom_size > board.slot_size:
        raise SynthesisError(
            "ROM is larger than the board's addressable slot.",
            context={
                "operation": "build",
                "file_id": str(spec.id),
                "rom_size": str(spec.rom_size),
                "slot_size": str(board.slot_size),
            },
        )
    translated = rom.translate(table)
    slot = bytearray(board.slot_size)
    # Smaller ROMs ignore the upper address lines, so their contents repeat.
    for address, physical in enumerate(index):
        slot[physical] = translated[address % spec.rom_size]
    return bytes(slot)


def render_sets(
    layouts: Sequence[SetLayout],
    specs: Mapping[int, FileSpec],
    files: Mapping[int, bytes],
    board: BoardInfo,
) -> bytes:
    index = address_index(board)
    table = data_table(board)
    payload = bytearray()
    for layout in layouts:
        if len(payload) != layout.offset:
            raise SynthesisError(
                "Set payload offset does not match the planned layout.",
                context={"operation": "build", "set_id": str(layout.set_id)},
            )
        for file_id in layout.file_ids:
            rom = files.get(file_id)
            if rom is None:
                raise SynthesisError(
                    "File bytes disappeared between validation and layout.",
                    context={"operation": "build", "file_id": str(file_id)},
                )
            payload += render_slot(specs[file_id], rom, board, index=index, table=table)
    return bytes(payload)
