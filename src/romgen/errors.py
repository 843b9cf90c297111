"""Typed error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from romgen.validate import ValidationReport


class ErrorCode(StrEnum):
    """Stable error identifiers used across API surfaces."""

    CONFIG = "E_CONFIG"
    CATALOG = "E_CATALOG"
    LICENSE = "E_LICENSE"
    FILE = "E_FILE"
    VALIDATION = "E_VALIDATION"
    SYNTHESIS = "E_SYNTHESIS"


class RomGenError(Exception):
    """Base error class that carries code, optional hint, and context."""

    code: str
    hint: str | None
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.context:
            for k, v in self.context.items():
                if v:
                    parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ConfigError(RomGenError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.CONFIG, hint=hint, context=context)


class CatalogError(RomGenError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.CATALOG, hint=hint, context=context)


class LicenseError(RomGenError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.LICENSE, hint=hint, context=context)


class UnknownLicenseError(LicenseError):
    """No license with the given id, file id and URL was offered."""


class LicenseMismatchError(LicenseError):
    """The license id exists but was offered for a different file or URL."""


class FileError(RomGenError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.FILE, hint=hint, context=context)


class UnknownFileIdError(FileError):
    """The file id does not match any resolved file spec."""


class SizeMismatchError(FileError):
    """Retrieved bytes cannot be reconciled with the expected ROM size."""


class ValidationError(RomGenError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.VALIDATION, hint=hint, context=context)


class ValidationFailure(ValidationError):
    """Aggregate readiness failure carrying the full checklist."""

    report: ValidationReport

    def __init__(self, report: ValidationReport) -> None:
        super().__init__(
            "Builder is not ready to build.",
            hint="Accept the listed licenses, add the listed files and fix set violations.",
            context=report.summary(),
        )
        self.report = report

    @property
    def missing_licenses(self) -> tuple[int, ...]:
        return self.report.missing_licenses

    @property
    def missing_files(self) -> tuple[int, ...]:
        return self.report.missing_files

    def to_dict(self) -> dict[str, object]:
        payload = super().to_dict()
        payload["report"] = self.report.to_dict()
        return payload


class SynthesisError(RomGenError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.SYNTHESIS, hint=hint, context=context)


__all__ = [
    "CatalogError",
    "ConfigError",
    "ErrorCode",
    "FileError",
    "LicenseError",
    "LicenseMismatchError",
    "RomGenError",
    "SizeMismatchError",
    "SynthesisError",
    "UnknownFileIdError",
    "UnknownLicenseError",
    "ValidationError",
    "ValidationFailure",
]
