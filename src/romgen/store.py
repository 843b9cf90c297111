"""File store holding normalized ROM bytes keyed by file id."""

from __future__ import annotations

from romgen.models import FileSpec
from romgen.sizing import apply_size_handling


class FileStore:
    def __init__(self) -> None:
        self._files: dict[int, bytes] = {}

    def add(self, spec: FileSpec, data: bytes) -> bytes:
        """Normalize *data* for *spec* and store it, replacing any earlier bytes."""
        normalized = apply_size_handling(
            spec.size_handling,
            data,
            spec.rom_size,
            file_id=spec.id,
        )
        self._files[spec.id] = normalized
        return normalized

    def get(self, file_id: int) -> bytes | None:
        return self._files.get(file_id)

    def __contains__(self, file_id: object) -> bool:
        return file_id in self._files

    def snapshot(self) -> dict[int, bytes]:
        return dict(self._files)
