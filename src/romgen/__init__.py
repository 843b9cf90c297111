"""Public package entrypoint for the ROM emulator firmware image generator."""

from .builder import Builder
from .errors import (
    CatalogError,
    ConfigError,
    FileError,
    LicenseError,
    LicenseMismatchError,
    RomGenError,
    SizeMismatchError,
    SynthesisError,
    UnknownFileIdError,
    UnknownLicenseError,
    ValidationError,
    ValidationFailure,
)
from .flashing import FlashPlan, flash_plan
from .models import (
    BuildOutput,
    CsLogic,
    FileData,
    FileSpec,
    FirmwareProperties,
    FirmwareVersion,
    License,
    LicenseStatus,
    ServeAlg,
    SetType,
    SizeHandling,
)
from .sizing import apply_size_handling
from .synth import BuildMetadata
from .validate import PropertyViolation, SetViolation, ValidationReport
from .version import VersionInfo, __version__, versions

__all__ = [
    "BuildMetadata",
    "BuildOutput",
    "Builder",
    "CatalogError",
    "ConfigError",
    "CsLogic",
    "FileData",
    "FileError",
    "FileSpec",
    "FirmwareProperties",
    "FirmwareVersion",
    "FlashPlan",
    "License",
    "LicenseError",
    "LicenseMismatchError",
    "LicenseStatus",
    "PropertyViolation",
    "RomGenError",
    "ServeAlg",
    "SetType",
    "SetViolation",
    "SizeHandling",
    "SizeMismatchError",
    "SynthesisError",
    "UnknownFileIdError",
    "UnknownLicenseError",
    "ValidationError",
    "ValidationFailure",
    "ValidationReport",
    "VersionInfo",
    "__version__",
    "apply_size_handling",
    "flash_plan",
    "versions",
]
