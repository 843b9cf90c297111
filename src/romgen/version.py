"""Version information for the generator, catalog and metadata format."""

from __future__ import annotations

from dataclasses import dataclass

from romgen.catalog import CATALOG_VERSION
from romgen.synth.header import FORMAT_VERSION
from romgen.synth.metadata import METADATA_VERSION

__version__ = "0.1.0"


@dataclass(frozen=True, slots=True)
class VersionInfo:
    romgen: str
    catalog: str
    metadata_version: str
    image_format_version: str


def versions() -> VersionInfo:
    return VersionInfo(
        romgen=__version__,
        catalog=CATALOG_VERSION,
        metadata_version=str(METADATA_VERSION),
        image_format_version=str(FORMAT_VERSION),
    )
