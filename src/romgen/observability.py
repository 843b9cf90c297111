"""In-memory structured log of builder operations, exportable as JSON lines."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class StructuredLogger:
    records: list[dict[str, Any]] = field(default_factory=list)

    def log(
        self,
        *,
        operation: str,
        message: str,
        file_id: int | None = None,
        license_id: int | None = None,
        set_id: int | None = None,
        level: str = "info",
        extra: dict[str, Any] | None = None,
    ) -> None:
        record: dict[str, Any] = {
            "level": level,
            "operation": operation,
            "file_id": file_id,
            "license_id": license_id,
            "set_id": set_id,
            "message": message,
        }
        if extra is not None:
            record["extra"] = extra
        self.records.append(record)

    def records_for_operation(self, operation: str) -> list[dict[str, Any]]:
        return [record for record in self.records if record.get("operation") == operation]

    def records_for_file(self, file_id: int) -> list[dict[str, Any]]:
        return [record for record in self.records if record.get("file_id") == file_id]

    def failures(self) -> list[dict[str, Any]]:
        """Records logged at warning or error level, in order."""
        return [record for record in self.records if record["level"] in {"warning", "error"}]

    def to_json_lines(self, path: str | Path) -> Path:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        lines = [json.dumps(record, sort_keys=True) for record in self.records]
        output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return output_path
