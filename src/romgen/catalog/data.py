"""Static reference tables for supported MCUs, ROM types and boards."""

from __future__ import annotations

from romgen.catalog.model import (
    AddressPin,
    BoardInfo,
    ControlLine,
    DataPin,
    McuInfo,
    PowerPin,
    ProgrammingPin,
    RomTypeInfo,
)

CATALOG_VERSION = "1.0.0"

MCU_FAMILY_FLASH_BASE = {
    "STM32F4": 0x0800_0000,
    "RP2350": 0x1000_0000,
}

MCU_VARIANTS: tuple[McuInfo, ...] = (
    McuInfo(
        name="F401RB",
        family="STM32F4",
        flash_kb=128,
        ram_kb=64,
        max_sysclk_mhz=84,
        chip_id="STM32F401RBTx",
    ),
    McuInfo(
        name="F401RE",
        family="STM32F4",
        flash_kb=512,
        ram_kb=96,
        max_sysclk_mhz=84,
        chip_id="STM32F401RETx",
        supports_banked_roms=True,
        supports_multi_rom_sets=True,
    ),
    McuInfo(
        name="F411RE",
        family="STM32F4",
        flash_kb=512,
        ram_kb=128,
        max_sysclk_mhz=100,
        chip_id="STM32F411RETx",
        supports_banked_roms=True,
        supports_multi_rom_sets=True,
    ),
    McuInfo(
        name="F446RE",
        family="STM32F4",
        flash_kb=512,
        ram_kb=128,
        max_sysclk_mhz=180,
        chip_id="STM32F446RETx",
        supports_banked_roms=True,
        supports_multi_rom_sets=True,
    ),
    McuInfo(
        name="F405RG",
        family="STM32F4",
        flash_kb=1024,
        ram_kb=128,
        ccm_ram_kb=64,
        max_sysclk_mhz=168,
        chip_id="STM32F405RGTx",
        supports_usb_dfu=True,
        supports_banked_roms=True,
        supports_multi_rom_sets=True,
    ),
    McuInfo(
        name="RP2350",
        family="RP2350",
        flash_kb=2048,
        ram_kb=520,
        max_sysclk_mhz=150,
        chip_id="RP235x",
        supports_usb_dfu=True,
        supports_banked_roms=True,
        supports_multi_rom_sets=True,
    ),
)

# Physical package pins, indexed by logical line.
_ADDR_24 = (8, 7, 6, 5, 4, 3, 2, 1, 23, 22, 19, 18, 21)
_DATA_24 = (9, 10, 11, 13, 14, 15, 16, 17)
_POWER_24 = (PowerPin("vcc", 24), PowerPin("gnd", 12))

_ADDR_28 = (10, 9, 8, 7, 6, 5, 4, 3, 25, 24, 21, 23, 2, 26, 27, 1)
_DATA_28 = (11, 12, 13, 15, 16, 17, 18, 19)
_POWER_28 = (PowerPin("vcc", 28), PowerPin("gnd", 14))


def _rom(
    name: str,
    *,
    rom_pins: int,
    address: tuple[int, ...],
    control: tuple[ControlLine, ...],
    programming: tuple[ProgrammingPin, ...] | None = None,
) -> RomTypeInfo:
    data = _DATA_24 if rom_pins == 24 else _DATA_28
    power = _POWER_24 if rom_pins == 24 else _POWER_28
    return RomTypeInfo(
        name=name,
        size_bytes=1 << len(address),
        rom_pins=rom_pins,
        address_pins=tuple(AddressPin(line, pin) for line, pin in enumerate(address)),
        data_pins=tuple(DataPin(line, pin) for line, pin in enumerate(data)),
        control_lines=control,
        power_pins=power,
        programming_pins=programming,
    )


ROM_TYPES: tuple[RomTypeInfo, ...] = (
    _rom(
        "2316",
        rom_pins=24,
        address=(8, 7, 6, 5, 4, 3, 2, 1, 23, 22, 19),
        control=(
            ControlLine("cs1", 20, True),
            ControlLine("cs2", 18, True),
            ControlLine("cs3", 21, True),
        ),
    ),
    _rom(
        "2332",
        rom_pins=24,
        address=_ADDR_24[:12],
        control=(ControlLine("cs1", 20, True), ControlLine("cs2", 21, True)),
    ),
    _rom(
        "2364",
        rom_pins=24,
        address=_ADDR_24,
        control=(ControlLine("cs1", 20, True),),
    ),
    _rom(
        "2716",
        rom_pins=24,
        address=_ADDR_24[:11],
        control=(ControlLine("ce", 18, False), ControlLine("oe", 20, False)),
        programming=(ProgrammingPin("vpp", 21, "Vcc"),),
    ),
    _rom(
        "2732",
        rom_pins=24,
        address=_ADDR_24[:11] + (21,),
        control=(ControlLine("ce", 18, False), ControlLine("oe", 20, False)),
        programming=(ProgrammingPin("vpp", 20, "ChipSelect"),),
    ),
    _rom(
        "2764",
        rom_pins=28,
        address=_ADDR_28[:13],
        control=(ControlLine("ce", 20, False), ControlLine("oe", 22, False)),
        programming=(ProgrammingPin("vpp", 1, "Vcc"), ProgrammingPin("pgm", 27, "High")),
    ),
    _rom(
        "27128",
        rom_pins=28,
        address=_ADDR_28[:14],
        control=(ControlLine("ce", 20, False), ControlLine("oe", 22, False)),
        programming=(ProgrammingPin("vpp", 1, "Vcc"), ProgrammingPin("pgm", 27, "High")),
    ),
    _rom(
        "27256",
        rom_pins=28,
        address=_ADDR_28[:15],
        control=(ControlLine("ce", 20, False), ControlLine("oe", 22, False)),
        programming=(ProgrammingPin("vpp", 1, "Vcc"),),
    ),
    _rom(
        "27512",
        rom_pins=28,
        address=_ADDR_28,
        control=(ControlLine("ce", 20, False), ControlLine("oe", 22, False)),
        programming=(ProgrammingPin("vpp", 22, "ChipSelect"),),
    ),
)

# Board pin numbers are GPIO numbers within the named port.
BOARDS: tuple[BoardInfo, ...] = (
    BoardInfo(
        name="ice-24-d",
        description="Ice 24 pin, revision D",
        mcu_family="STM32F4",
        rom_pins=24,
        data_pins=(0, 1, 2, 3, 7, 6, 5, 4),
        addr_pins=(7, 6, 5, 4, 3, 2, 1, 0, 8, 9, 11, 12, 10),
        sel_pins=(0, 1, 2),
        pin_status=13,
        port_data="PORT_A",
        port_addr="PORT_C",
        port_cs="PORT_C",
        port_sel="PORT_B",
        port_status="PORT_B",
        sel_jumper_pull=1,
    ),
    BoardInfo(
        name="ice-24-e",
        description="Ice 24 pin, revision E",
        mcu_family="STM32F4",
        rom_pins=24,
        data_pins=(7, 6, 5, 4, 3, 2, 1, 0),
        addr_pins=(0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12),
        sel_pins=(0, 1, 2, 7),
        pin_status=15,
        port_data="PORT_A",
        port_addr="PORT_C",
        port_cs="PORT_C",
        port_sel="PORT_B",
        port_status="PORT_B",
    ),
    BoardInfo(
        name="ice-24-f",
        description="Ice 24 pin, revision F, multi-ROM capable",
        mcu_family="STM32F4",
        rom_pins=24,
        data_pins=(0, 1, 2, 3, 4, 5, 6, 7),
        addr_pins=(7, 6, 5, 4, 3, 2, 1, 0, 8, 9, 11, 12, 10),
        sel_pins=(0, 1, 2, 7),
        pin_status=15,
        port_data="PORT_A",
        port_addr="PORT_C",
        port_cs="PORT_C",
        port_sel="PORT_B",
        port_status="PORT_B",
        pin_x1=14,
        pin_x2=15,
        x_jumper_pull=1,
        supports_multi_rom_sets=True,
    ),
    BoardInfo(
        name="ice-24-g",
        description="Ice 24 pin, revision G, USB",
        mcu_family="STM32F4",
        rom_pins=24,
        data_pins=(0, 1, 2, 3, 4, 5, 6, 7),
        addr_pins=(7, 6, 5, 4, 3, 2, 1, 0, 8, 9, 11, 12, 10),
        sel_pins=(0, 1, 2, 7),
        pin_status=15,
        port_data="PORT_A",
        port_addr="PORT_C",
        port_cs="PORT_C",
        port_sel="PORT_B",
        port_status="PORT_B",
        pin_x1=14,
        pin_x2=15,
        x_jumper_pull=1,
        has_usb=True,
        supports_multi_rom_sets=True,
    ),
    BoardInfo(
        name="fire-24-a",
        description="Fire 24 pin, revision A",
        mcu_family="RP2350",
        rom_pins=24,
        data_pins=(0, 1, 2, 3, 4, 5, 6, 7),
        addr_pins=(8, 9, 10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20),
        sel_pins=(24, 25, 26, 27),
        pin_status=29,
        port_data="PORT_0",
        port_addr="PORT_0",
        port_cs="PORT_0",
        port_sel="PORT_0",
        port_status="PORT_0",
        pin_x1=21,
        pin_x2=22,
        has_usb=True,
        supports_multi_rom_sets=True,
    ),
    BoardInfo(
        name="fire-28-a",
        description="Fire 28 pin, revision A",
        mcu_family="RP2350",
        rom_pins=28,
        data_pins=(0, 1, 2, 3, 4, 5, 6, 7),
        addr_pins=(8, 9, 10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23),
        sel_pins=(26, 27),
        pin_status=29,
        port_data="PORT_0",
        port_addr="PORT_0",
        port_cs="PORT_0",
        port_sel="PORT_0",
        port_status="PORT_0",
        has_usb=True,
    ),
)
