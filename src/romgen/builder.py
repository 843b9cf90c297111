"""Builder session: resolve file specs, gate licenses, collect files, build."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from romgen.catalog import board_info
from romgen.config import RomConfig, config_from_dict, parse_config, read_config
from romgen.errors import FileError, LicenseError, UnknownFileIdError, ValidationFailure
from romgen.licenses import LicenseGate
from romgen.models import (
    BuildOutput,
    FileData,
    FileSpec,
    FirmwareProperties,
    License,
    LicenseStatus,
)
from romgen.observability import StructuredLogger
from romgen.resolve import resolve_file_specs
from romgen.store import FileStore
from romgen.synth import synthesize
from romgen.validate import ValidationReport, validate_build
from romgen.version import __version__


@dataclass(slots=True)
class Builder:
    """One independent build session over a configuration document.

    ``accept_license`` and ``add_file`` may be called in any order and any
    number of times. ``validate``/``build_validation`` and ``build`` read the
    current state and never change it, so missing items can be fixed and the
    build retried on the same instance.
    """

    config: RomConfig
    logger: StructuredLogger = field(default_factory=StructuredLogger)
    _specs: tuple[FileSpec, ...] = field(init=False, repr=False)
    _specs_by_id: dict[int, FileSpec] = field(init=False, repr=False)
    _licenses: LicenseGate = field(init=False, repr=False)
    _files: FileStore = field(init=False, repr=False)

    def __post_init__(self) -> None:
        specs, licenses = resolve_file_specs(self.config)
        self._specs = specs
        self._specs_by_id = {spec.id: spec for spec in specs}
        self._licenses = LicenseGate(licenses)
        self._files = FileStore()

    @classmethod
    def from_json(cls, raw: str | bytes) -> Builder:
        return cls(parse_config(raw))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Builder:
        return cls(config_from_dict(payload))

    @classmethod
    def from_path(cls, path: str | Path) -> Builder:
        return cls(read_config(path))

    def description(self) -> str:
        return self.config.description

    def categories(self) -> tuple[str, ...]:
        return self.config.categories

    def file_specs(self) -> tuple[FileSpec, ...]:
        return self._specs

    def licenses(self) -> tuple[LicenseStatus, ...]:
        return self._licenses.statuses()

    def accept_license(self, license: License | LicenseStatus) -> None:
        try:
            changed = self._licenses.accept(license)
        except LicenseError as exc:
            self._log_error("accept_license", exc, license_id=license.id)
            raise
        self.logger.log(
            operation="accept_license",
            license_id=license.id,
            file_id=license.file_id,
            message="License accepted." if changed else "License was already accepted.",
        )

    def add_file(self, file: FileData) -> None:
        spec = self._specs_by_id.get(file.id)
        try:
            if spec is None:
                raise UnknownFileIdError(
                    f"Unknown file id {file.id}.",
                    hint="Add files using the ids returned by file_specs().",
                    context={"operation": "add_file", "file_id": str(file.id)},
                )
            stored = self._files.add(spec, file.data)
        except FileError as exc:
            self._log_error("add_file", exc, file_id=file.id)
            raise
        self.logger.log(
            operation="add_file",
            file_id=spec.id,
            set_id=spec.set_id,
            message="File stored.",
            extra={"received": len(file.data), "stored": len(stored)},
        )

    def validate(self, properties: FirmwareProperties) -> ValidationReport:
        return validate_build(
            config=self.config,
            specs=self._specs,
            licenses=self._licenses,
            store=self._files,
            properties=properties,
        )

    def build_validation(self, properties: FirmwareProperties) -> None:
        report = self.validate(properties)
        if not report.ok:
            raise ValidationFailure(report)

    def build(self, properties: FirmwareProperties) -> BuildOutput:
        report = self.validate(properties)
        if not report.ok:
            self.logger.log(
                operation="build",
                level="warning",
                message="Build blocked by validation failures.",
                extra=report.to_dict(),
            )
            raise ValidationFailure(report)

        output = synthesize(
            config=self.config,
            specs=self._specs,
            files=self._files.snapshot(),
            board=board_info(properties.board),
            properties=properties,
            generator={"name": "romgen", "version": __version__},
        )
        self.logger.log(
            operation="build",
            message="Firmware image built.",
            extra={
                "image_bytes": len(output.firmware_image),
                "metadata_bytes": len(output.metadata),
            },
        )
        return output

    def _log_error(
        self,
        operation: str,
        exc: LicenseError | FileError,
        *,
        file_id: int | None = None,
        license_id: int | None = None,
    ) -> None:
        self.logger.log(
            operation=operation,
            level="error",
            file_id=file_id,
            license_id=license_id,
            message=exc.args[0],
            extra={"code": exc.code},
        )
