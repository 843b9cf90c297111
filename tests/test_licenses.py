from typing import Any

import pytest

from romgen import (
    Builder,
    License,
    LicenseError,
    LicenseMismatchError,
    UnknownLicenseError,
)
from romgen.licenses import LicenseGate

LICENSE_URL = "https://example/license"


def test_licenses_are_numbered_over_licensed_files() -> None:
    builder = Builder.from_dict(
        {
            "description": "Three singles",
            "rom_sets": [
                _single_set("https://example/a.bin", license="https://example/a-license"),
                _single_set("https://example/b.bin"),
                _single_set("https://example/c.bin", license="https://example/c-license"),
            ],
        }
    )

    statuses = builder.licenses()

    assert [(status.id, status.file_id, status.url) for status in statuses] == [
        (0, 0, "https://example/a-license"),
        (1, 2, "https://example/c-license"),
    ]
    assert not any(status.accepted for status in statuses)


def test_accept_license_marks_only_that_license(banked_config: dict[str, Any]) -> None:
    builder = Builder.from_dict(banked_config)

    builder.accept_license(License(id=0, file_id=0, url=LICENSE_URL))

    assert [status.accepted for status in builder.licenses()] == [True]
    assert builder.licenses()[0].license == License(id=0, file_id=0, url=LICENSE_URL)


def test_accept_license_is_idempotent(banked_config: dict[str, Any]) -> None:
    builder = Builder.from_dict(banked_config)
    license = License(id=0, file_id=0, url=LICENSE_URL)

    builder.accept_license(license)
    builder.accept_license(license)

    assert builder.licenses()[0].accepted
    records = builder.logger.records_for_operation("accept_license")
    assert [record["message"] for record in records] == ["License accepted.", "License was already accepted."]


def test_accept_unknown_license_raises(banked_config: dict[str, Any]) -> None:
    builder = Builder.from_dict(banked_config)

    with pytest.raises(UnknownLicenseError) as excinfo:
        builder.accept_license(License(id=99, file_id=0, url=LICENSE_URL))

    assert excinfo.value.code == "E_LICENSE"
    assert not builder.licenses()[0].accepted


def test_accept_license_with_wrong_file_or_url_raises(banked_config: dict[str, Any]) -> None:
    builder = Builder.from_dict(banked_config)

    with pytest.raises(LicenseMismatchError):
        builder.accept_license(License(id=0, file_id=1, url=LICENSE_URL))
    with pytest.raises(LicenseMismatchError) as excinfo:
        builder.accept_license(License(id=0, file_id=0, url="https://example/other"))

    assert isinstance(excinfo.value, LicenseError)
    assert excinfo.value.context["expected_url"] == LICENSE_URL
    assert not builder.licenses()[0].accepted
    assert [record["level"] for record in builder.logger.records] == ["error", "error"]


def test_license_gate_tracks_files() -> None:
    gate = LicenseGate([License(id=0, file_id=3, url=LICENSE_URL)])

    assert gate.license_for_file(3) == License(id=0, file_id=3, url=LICENSE_URL)
    assert gate.license_for_file(1) is None
    assert gate.is_satisfied(1)
    assert not gate.is_satisfied(3)
    assert gate.missing() == (0,)

    assert gate.accept(License(id=0, file_id=3, url=LICENSE_URL))
    assert gate.is_satisfied(3)
    assert gate.missing() == ()


def test_accept_license_takes_status_from_licenses(banked_config: dict[str, Any]) -> None:
    builder = Builder.from_dict(banked_config)

    builder.accept_license(builder.licenses()[0])

    assert builder.licenses()[0].accepted


def _single_set(source: str, *, license: str | None = None) -> dict[str, Any]:
    rom: dict[str, Any] = {"file": source, "type": "2364", "cs1": "active_low"}
    if license is not None:
        rom["license"] = license
    return {"type": "single", "roms": [rom]}
