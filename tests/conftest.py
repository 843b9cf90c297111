"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from romgen import FirmwareProperties, FirmwareVersion


@pytest.fixture
def banked_config() -> dict[str, Any]:
    """One banked set of two 64KB ROMs; only the first needs a license."""
    return {
        "version": 1,
        "description": "Banked 27512 pair",
        "categories": ["test", "banked"],
        "rom_sets": [
            {
                "type": "banked",
                "description": "Two banks",
                "roms": [
                    {
                        "file": "https://example/rom0.bin",
                        "type": "27512",
                        "license": "https://example/license",
                        "description": "Bank 0",
                    },
                    {"file": "https://example/rom1.zip", "extract": "rom1.bin", "type": "27512"},
                ],
            }
        ],
    }


@pytest.fixture
def single_config() -> dict[str, Any]:
    """A single 2364 character ROM."""
    return {
        "version": 1,
        "description": "Character ROM",
        "rom_sets": [
            {
                "type": "single",
                "roms": [
                    {"file": "https://example/char.bin", "type": "2364", "cs1": "active_low"},
                ],
            }
        ],
    }


@pytest.fixture
def fire_28_properties() -> FirmwareProperties:
    return FirmwareProperties(
        version=FirmwareVersion(major=0, minor=5, patch=1, build=0),
        board="fire-28-a",
    )


@pytest.fixture
def ice_24_properties() -> FirmwareProperties:
    return FirmwareProperties(
        version=FirmwareVersion(major=0, minor=5, patch=1, build=0),
        board="ice-24-d",
    )
