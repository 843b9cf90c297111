"""Firmware image header and set/ROM tables (format version 1).

All fields are little-endian::

    header (40 bytes)
      4s   magic b"RGFW"
      u16  format version
      u16  table end (header + set table + ROM table)
      4u16 firmware version major, minor, patch, build
      u8   serve algorithm code
      u8   boot logging (0/1)
      u8   set count
      u8   ROM count
      u32  payload offset (table end rounded up to PAYLOAD_ALIGN)
      16s  board name, NUL padded

    set entry (12 bytes)
      u32  payload-relative offset
      u32  size
      u8   set type code
      u8   ROM count
      u8   first ROM table index
      u8   slot size log2

    ROM entry (12 bytes)
      u16  file id
      u8   ROM type catalog index
      u8   cs1, cs2, cs3 codes
      u16  reserved
      u32  ROM size

Zero padding follows up to the payload offset.
"""

from __future__ import annotations

import struct
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from romgen.catalog import BoardInfo, rom_type_index
from romgen.errors import SynthesisError
from romgen.models import CsLogic, FileSpec, FirmwareProperties, ServeAlg, SetType
from romgen.synth.layout import SetLayout

MAGIC = b"RGFW"
FORMAT_VERSION = 1
PAYLOAD_ALIGN = 0x100
BOARD_NAME_LEN = 16
MAX_TABLE_ENTRIES = 0xFF

HEADER_STRUCT = struct.Struct("<4sHH4HBBBBI16s")
SET_ENTRY_STRUCT = struct.Struct("<IIBBBB")
ROM_ENTRY_STRUCT = struct.Struct("<HBBBBHI")

SERVE_ALG_CODES = {
    ServeAlg.DEFAULT: 0,
    ServeAlg.TWO_CS_ONE_ADDR: 1,
    ServeAlg.ADDR_ON_CS: 2,
}
SET_TYPE_CODES = {
    SetType.SINGLE: 0,
    SetType.BANKED: 1,
    SetType.MULTI: 2,
}
CS_CODES = {
    None: 0,
    CsLogic.ACTIVE_LOW: 1,
    CsLogic.ACTIVE_HIGH: 2,
    CsLogic.IGNORE: 3,
}


@dataclass(frozen=True, slots=True)
class ImageHeader:
    version: tuple[int, int, int, int]
    serve_alg: int
    boot_logging: bool
    set_count: int
    rom_count: int
    table_end: int
    payload_offset: int
    board: str
    format_version: int = FORMAT_VERSION


def table_end(set_count: int, rom_count: int) -> int:
    return HEADER_STRUCT.size + set_count * SET_ENTRY_STRUCT.size + rom_count * ROM_ENTRY_STRUCT.size


def payload_offset(set_count: int, rom_count: int) -> int:
    end = table_end(set_count, rom_count)
    return (end + PAYLOAD_ALIGN - 1) // PAYLOAD_ALIGN * PAYLOAD_ALIGN


def pack_header(
    properties: FirmwareProperties,
    board: BoardInfo,
    layouts: Sequence[SetLayout],
    specs: Mapping[int, FileSpec],
) -> bytes:
    """Return header, set table, ROM table and padding up to the payload offset."""
    rom_count = sum(len(layout.file_ids) for layout in layouts)
    if len(layouts) > MAX_TABLE_ENTRIES or rom_count > MAX_TABLE_ENTRIES:
        raise SynthesisError(
            "Too many ROM sets or ROMs for the image tables.",
            context={"operation": "build", "sets": str(len(layouts)), "roms": str(rom_count)},
        )
    board_name = board.name.encode("ascii")
    if len(board_name) > BOARD_NAME_LEN:
        raise SynthesisError(
            "Board name does not fit the image header.",
            context={"operation": "build", "board": board.name},
        )
    end = table_end(len(layouts), rom_count)
    offset = payload_offset(len(layouts), rom_count)

    out = bytearray(
        HEADER_STRUCT.pack(
            MAGIC,
            FORMAT_VERSION,
            end,
            *properties.version.as_tuple(),
            SERVE_ALG_CODES[ServeAlg(properties.serve_alg)],
            1 if properties.boot_logging else 0,
            len(layouts),
            rom_count,
            offset,
            board_name,
        )
    )

    first_rom = 0
    for layout in layouts:
        out += SET_ENTRY_STRUCT.pack(
            layout.offset,
            layout.size,
            SET_TYPE_CODES[layout.set_type],
            len(layout.file_ids),
            first_rom,
            board.slot_log2,
        )
        first_rom += len(layout.file_ids)

    for layout in layouts:
        for file_id in layout.file_ids:
            spec = specs[file_id]
            out += ROM_ENTRY_STRUCT.pack(
                spec.id,
                rom_type_index(spec.rom_type),
                CS_CODES[spec.cs1],
                CS_CODES[spec.cs2],
                CS_CODES[spec.cs3],
                0,
                spec.rom_size,
            )

    out += bytes(offset - len(out))
    return bytes(out)


def unpack_header(image: bytes) -> ImageHeader:
    if len(image) < HEADER_STRUCT.size:
        raise SynthesisError("Image is shorter than its header.")
    (
        magic,
        format_version,
        end,
        major,
        minor,
        patch,
        build,
        serve_alg,
        boot_logging,
        set_count,
        rom_count,
        offset,
        board_name,
    ) = HEADER_STRUCT.unpack_from(image)
    if magic != MAGIC:
        raise SynthesisError("Image header magic does not match.", context={"magic": magic.hex()})
    return ImageHeader(
        version=(major, minor, patch, build),
        serve_alg=serve_alg,
        boot_logging=bool(boot_logging),
        set_count=set_count,
        rom_count=rom_count,
        table_end=end,
        payload_offset=offset,
        board=board_name.rstrip(b"\x00").decode("ascii"),
        format_version=format_version,
    )
