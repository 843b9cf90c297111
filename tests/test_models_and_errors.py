import pytest

from romgen import (
    CatalogError,
    ConfigError,
    FirmwareProperties,
    FirmwareVersion,
    LicenseMismatchError,
    SizeMismatchError,
    SynthesisError,
    UnknownFileIdError,
    UnknownLicenseError,
    ValidationFailure,
    ValidationReport,
)
from romgen.errors import ErrorCode


def test_error_codes_are_stable_and_machine_readable() -> None:
    errors = [
        ConfigError("bad document"),
        CatalogError("unknown board"),
        UnknownLicenseError("unknown license"),
        LicenseMismatchError("wrong url"),
        UnknownFileIdError("unknown file"),
        SizeMismatchError("wrong size"),
        ValidationFailure(ValidationReport(missing_files=(1,))),
        SynthesisError("bad layout"),
    ]
    assert [error.code for error in errors] == [
        ErrorCode.CONFIG.value,
        ErrorCode.CATALOG.value,
        ErrorCode.LICENSE.value,
        ErrorCode.LICENSE.value,
        ErrorCode.FILE.value,
        ErrorCode.FILE.value,
        ErrorCode.VALIDATION.value,
        ErrorCode.SYNTHESIS.value,
    ]


def test_error_to_dict_includes_hint_and_context() -> None:
    error = ConfigError("bad document", hint="fix it", context={"key": "board"})

    payload = error.to_dict()

    assert payload["code"] == "E_CONFIG"
    assert payload["hint"] == "fix it"
    assert payload["context"] == {"key": "board"}
    assert "Hint: fix it" in str(error)


def test_validation_failure_summarizes_report() -> None:
    failure = ValidationFailure(ValidationReport(missing_licenses=(0, 2), missing_files=(1,)))

    assert failure.missing_licenses == (0, 2)
    assert failure.missing_files == (1,)
    assert failure.context["missing_licenses"] == "0,2"
    assert failure.to_dict()["report"] == {
        "ok": False,
        "missing_licenses": [0, 2],
        "missing_files": [1],
        "set_violations": [],
        "property_errors": [],
    }


def test_firmware_properties_from_dict() -> None:
    properties = FirmwareProperties.from_dict(
        {
            "version": {"major": 0, "minor": 5, "patch": 1},
            "board": "ice-24-d",
            "serve_alg": "two_cs_one_addr",
            "boot_logging": False,
            "mcu_variant": "F411RE",
        }
    )

    assert properties.version == FirmwareVersion(major=0, minor=5, patch=1, build=0)
    assert str(properties.version) == "0.5.1.0"
    assert properties.serve_alg == "two_cs_one_addr"
    assert not properties.boot_logging
    assert properties.mcu_variant == "F411RE"
    assert FirmwareProperties.from_dict(properties.to_dict()) == properties


def test_firmware_properties_from_dict_rejects_bad_values() -> None:
    with pytest.raises(ConfigError):
        FirmwareProperties.from_dict({"version": {}, "board": ""})
    with pytest.raises(ConfigError):
        FirmwareProperties.from_dict({"version": {"major": "1"}, "board": "ice-24-d"})
    with pytest.raises(ConfigError):
        FirmwareProperties.from_dict({"version": {}, "board": "ice-24-d", "boot_logging": 1})
    with pytest.raises(ConfigError):
        FirmwareProperties.from_dict({"version": [], "board": "ice-24-d"})
