import itertools
from dataclasses import replace
from typing import Any

import pytest

from romgen import (
    Builder,
    FileData,
    FirmwareProperties,
    FirmwareVersion,
    License,
    ValidationFailure,
)


def test_fresh_builder_reports_everything_missing(
    banked_config: dict[str, Any],
    fire_28_properties: FirmwareProperties,
) -> None:
    builder = Builder.from_dict(banked_config)

    with pytest.raises(ValidationFailure) as excinfo:
        builder.build_validation(fire_28_properties)

    assert excinfo.value.missing_licenses == (0,)
    assert excinfo.value.missing_files == (0, 1)
    assert excinfo.value.report.set_violations == ()
    assert excinfo.value.report.property_errors == ()
    assert excinfo.value.code == "E_VALIDATION"
    assert excinfo.value.to_dict()["report"]["missing_files"] == [0, 1]


def test_validation_passes_once_ready(
    banked_config: dict[str, Any],
    fire_28_properties: FirmwareProperties,
) -> None:
    builder = Builder.from_dict(banked_config)
    builder.accept_license(License(id=0, file_id=0, url="https://example/license"))
    builder.add_file(FileData(id=0, data=b"\x00" * 65536))
    builder.add_file(FileData(id=1, data=b"\x00" * 65536))

    builder.build_validation(fire_28_properties)

    assert builder.validate(fire_28_properties).ok


def test_validation_and_build_agree_for_every_readiness_combination(
    ice_24_properties: FirmwareProperties,
) -> None:
    config = {
        "description": "Two licensed singles",
        "rom_sets": [_licensed_single(index) for index in range(2)],
    }

    for flags in itertools.product([False, True], repeat=4):
        accepted = flags[:2]
        present = flags[2:]
        builder = Builder.from_dict(config)
        for index in range(2):
            if accepted[index]:
                builder.accept_license(builder.licenses()[index].license)
            if present[index]:
                builder.add_file(FileData(id=index, data=bytes([index]) * 8192))

        report = builder.validate(ice_24_properties)

        assert report.missing_licenses == tuple(i for i in range(2) if not accepted[i])
        assert report.missing_files == tuple(i for i in range(2) if not present[i])
        assert report.ok == all(flags)
        if all(flags):
            builder.build(ice_24_properties)
        else:
            with pytest.raises(ValidationFailure):
                builder.build(ice_24_properties)


def test_validation_does_not_change_builder_state(
    banked_config: dict[str, Any],
    fire_28_properties: FirmwareProperties,
) -> None:
    builder = Builder.from_dict(banked_config)
    builder.add_file(FileData(id=1, data=b"\x00" * 65536))
    before = (builder.file_specs(), builder.licenses())

    for _ in range(3):
        with pytest.raises(ValidationFailure):
            builder.build(fire_28_properties)

    assert (builder.file_specs(), builder.licenses()) == before
    assert builder.validate(fire_28_properties).missing_files == (0,)


def test_set_size_violations() -> None:
    report = _report(
        [
            {"type": "single", "roms": [_rom_2364(), _rom_2364()]},
            {"type": "banked", "roms": [_rom_2364()]},
            {"type": "multi", "roms": [_rom_2364()] * 4},
        ],
        board="ice-24-f",
    )

    assert [(item.set_id, item.reason) for item in report.set_violations] == [
        (0, "set_size"),
        (1, "set_size"),
        (2, "set_size"),
    ]
    assert report.missing_files == (0, 1, 2, 3, 4, 5, 6)


def test_chip_select_violations() -> None:
    report = _report(
        [
            {"type": "single", "roms": [{"file": "a.bin", "type": "2364"}]},
            {"type": "single", "roms": [_rom_2364(cs2="active_high")]},
            {"type": "single", "roms": [{"file": "b.bin", "type": "2316", "cs1": "active_low"}]},
        ],
        board="ice-24-d",
    )

    assert [(item.file_id, item.reason) for item in report.set_violations] == [
        (0, "chip_select_missing"),
        (1, "chip_select_unexpected"),
        (2, "chip_select_missing"),
        (2, "chip_select_missing"),
    ]


def test_multi_sets_need_a_shared_cs1_level() -> None:
    mixed = _report(
        [{"type": "multi", "roms": [_rom_2364(), _rom_2364(cs1="active_high")]}],
        board="ice-24-f",
    )
    ignored = _report(
        [{"type": "multi", "roms": [_rom_2364(cs1="ignore"), _rom_2364(cs1="ignore")]}],
        board="ice-24-f",
    )
    shared = _report(
        [{"type": "multi", "roms": [_rom_2364(), _rom_2364()]}],
        board="ice-24-f",
    )

    assert [item.reason for item in mixed.set_violations] == ["chip_select_conflict"]
    assert [item.reason for item in ignored.set_violations] == ["chip_select_conflict"]
    assert shared.set_violations == ()


def test_board_and_mcu_support_for_set_types() -> None:
    multi = {"type": "multi", "roms": [_rom_2364(), _rom_2364()]}
    banked = {"type": "banked", "roms": [_rom_2364(), _rom_2364()]}

    no_multi_board = _report([multi], board="ice-24-e")
    no_banked_mcu = _report([banked], board="ice-24-d", mcu_variant="F401RB")

    assert [item.reason for item in no_multi_board.set_violations] == ["unsupported_set_type"]
    assert [item.reason for item in no_banked_mcu.set_violations] == ["unsupported_set_type"]
    assert "F401RB" in no_banked_mcu.set_violations[0].detail


def test_rom_must_fit_the_board_socket() -> None:
    report = _report(
        [{"type": "single", "roms": [{"file": "a.bin", "type": "27512"}]}],
        board="ice-24-d",
    )

    assert [item.reason for item in report.set_violations] == ["rom_pins"]


def test_property_errors_are_collected_together() -> None:
    builder = Builder.from_dict(
        {"description": "x", "rom_sets": [{"type": "single", "roms": [_rom_2364()]}]}
    )
    properties = FirmwareProperties(
        version=FirmwareVersion(major=70000, minor=-1),
        board="ice-24-d",
        serve_alg="fast",
        mcu_variant="RP2350",
    )

    report = builder.validate(properties)

    assert sorted(item.key for item in report.property_errors) == [
        "mcu_variant",
        "serve_alg",
        "version",
        "version",
    ]
    assert report.missing_files == (0,)


def test_unknown_board_is_a_property_error() -> None:
    report = _report([{"type": "single", "roms": [_rom_2364()]}], board="ice-99-z")

    assert [item.key for item in report.property_errors] == ["board"]
    assert report.set_violations == ()


def test_configured_board_must_match_build_board() -> None:
    builder = Builder.from_dict(
        {
            "description": "x",
            "board": "ice-24-e",
            "rom_sets": [{"type": "single", "roms": [_rom_2364()]}],
        }
    )
    properties = FirmwareProperties(version=FirmwareVersion(), board="ice-24-d")

    report = builder.validate(properties)

    assert [item.key for item in report.property_errors] == ["board"]
    assert builder.validate(replace(properties, board="ICE-24-E")).property_errors == ()


def test_image_must_fit_mcu_flash() -> None:
    sets = [{"type": "single", "roms": [_rom_2364()]} for _ in range(8)]

    too_big = _report(sets, board="ice-24-d", mcu_variant="F401RB")
    fits = _report(sets, board="ice-24-d", mcu_variant="F411RE")

    assert [item.key for item in too_big.property_errors] == ["mcu_variant"]
    assert fits.property_errors == ()


def test_table_limits_are_checked_before_build(ice_24_properties: FirmwareProperties) -> None:
    config = {
        "description": "Too many sets",
        "rom_sets": [
            {"type": "single", "roms": [{"file": f"rom{index}.bin", "type": "2716"}]}
            for index in range(256)
        ],
    }
    builder = Builder.from_dict(config)
    for index in range(256):
        builder.add_file(FileData(id=index, data=bytes(2048)))

    report = builder.validate(ice_24_properties)

    assert [item.key for item in report.property_errors] == ["rom_sets"]
    assert report.missing_files == ()
    with pytest.raises(ValidationFailure):
        builder.build(ice_24_properties)


def test_table_limits_allow_the_maximum(ice_24_properties: FirmwareProperties) -> None:
    config = {
        "description": "Full tables",
        "rom_sets": [
            {"type": "single", "roms": [{"file": f"rom{index}.bin", "type": "2716"}]}
            for index in range(255)
        ],
    }
    builder = Builder.from_dict(config)
    for index in range(255):
        builder.add_file(FileData(id=index, data=bytes([index]) * 2048))

    builder.build_validation(ice_24_properties)
    output = builder.build(ice_24_properties)

    assert len(output.firmware_image) > 255 * 8192


def _report(
    rom_sets: list[dict[str, Any]],
    *,
    board: str,
    mcu_variant: str | None = None,
) -> Any:
    builder = Builder.from_dict({"description": "checks", "rom_sets": rom_sets})
    properties = FirmwareProperties(
        version=FirmwareVersion(),
        board=board,
        mcu_variant=mcu_variant,
    )
    return builder.validate(properties)


def _rom_2364(**chip_selects: str) -> dict[str, Any]:
    rom: dict[str, Any] = {"file": "https://example/rom.bin", "type": "2364", "cs1": "active_low"}
    rom.update(chip_selects)
    return rom


def _licensed_single(index: int) -> dict[str, Any]:
    rom = _rom_2364()
    rom["license"] = f"https://example/license-{index}"
    return {"type": "single", "roms": [rom]}
