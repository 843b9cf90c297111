"""Catalog typed model for MCU variants, ROM types and boards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ProgrammingPinState = Literal["Vcc", "High", "Low", "ChipSelect"]


@dataclass(frozen=True, slots=True)
class McuInfo:
    name: str
    family: str
    flash_kb: int
    ram_kb: int
    max_sysclk_mhz: int
    chip_id: str
    ccm_ram_kb: int | None = None
    supports_usb_dfu: bool = False
    supports_banked_roms: bool = False
    supports_multi_rom_sets: bool = False

    @property
    def flash_bytes(self) -> int:
        return self.flash_kb * 1024


@dataclass(frozen=True, slots=True)
class AddressPin:
    line: int
    pin: int


@dataclass(frozen=True, slots=True)
class DataPin:
    line: int
    pin: int


@dataclass(frozen=True, slots=True)
class ControlLine:
    name: str
    pin: int
    configurable: bool


@dataclass(frozen=True, slots=True)
class ProgrammingPin:
    name: str
    pin: int
    read_state: ProgrammingPinState


@dataclass(frozen=True, slots=True)
class PowerPin:
    name: str
    pin: int


@dataclass(frozen=True, slots=True)
class RomTypeInfo:
    name: str
    size_bytes: int
    rom_pins: int
    address_pins: tuple[AddressPin, ...]
    data_pins: tuple[DataPin, ...]
    control_lines: tuple[ControlLine, ...]
    power_pins: tuple[PowerPin, ...] = ()
    programming_pins: tuple[ProgrammingPin, ...] | None = None

    @property
    def num_addr_lines(self) -> int:
        return len(self.address_pins)

    def configurable_lines(self) -> tuple[str, ...]:
        """Names of control lines whose active level is set per ROM, e.g. ``cs1``."""
        return tuple(line.name for line in self.control_lines if line.configurable)


@dataclass(frozen=True, slots=True)
class BoardInfo:
    name: str
    description: str
    mcu_family: str
    rom_pins: int
    data_pins: tuple[int, ...]
    addr_pins: tuple[int, ...]
    sel_pins: tuple[int, ...]
    pin_status: int
    port_data: str
    port_addr: str
    port_cs: str
    port_sel: str
    port_status: str
    pin_x1: int | None = None
    pin_x2: int | None = None
    sel_jumper_pull: int = 0
    x_jumper_pull: int = 0
    has_usb: bool = False
    supports_multi_rom_sets: bool = False

    @property
    def slot_log2(self) -> int:
        """Address bits routed to the MCU, so each ROM slot spans ``2 ** slot_log2`` bytes."""
        return len(self.addr_pins)

    @property
    def slot_size(self) -> int:
        return 1 << self.slot_log2


@dataclass(frozen=True, slots=True)
class ValuePrettyPair:
    value: str
    pretty: str
