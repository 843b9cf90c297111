"""Versioned metadata record describing a built firmware image."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import cbor2

from romgen.errors import SynthesisError

METADATA_VERSION = 1


@dataclass(frozen=True, slots=True)
class BuildMetadata:
    generator: dict[str, str]
    description: str
    categories: tuple[str, ...]
    properties: dict[str, Any]
    board: dict[str, Any]
    image: dict[str, Any]
    flash: dict[str, int]
    sets: tuple[dict[str, Any], ...] = ()
    files: tuple[dict[str, Any], ...] = ()
    metadata_version: int = METADATA_VERSION

    def to_cbor(self, path: str | Path | None = None) -> bytes:
        encoded = cbor2.dumps(self._payload(), canonical=True)
        if path is not None:
            Path(path).write_bytes(encoded)
        return encoded

    def to_json(self, path: str | Path | None = None) -> str:
        encoded = json.dumps(self._payload(), indent=2, sort_keys=True) + "\n"
        if path is not None:
            Path(path).write_text(encoded, encoding="utf-8")
        return encoded

    @classmethod
    def from_cbor(cls, raw: bytes) -> BuildMetadata:
        try:
            payload = cbor2.loads(raw)
        except cbor2.CBORDecodeError as exc:
            raise SynthesisError("Metadata record is not valid CBOR.", hint=str(exc)) from exc
        if not isinstance(payload, dict):
            raise SynthesisError("Metadata record has invalid structure.")
        version = payload.get("metadata_version")
        if version != METADATA_VERSION:
            raise SynthesisError(
                "Unsupported metadata version.",
                context={"metadata_version": str(version)},
            )
        try:
            return cls(
                metadata_version=version,
                generator=dict(payload["generator"]),
                description=payload["description"],
                categories=tuple(payload["categories"]),
                properties=dict(payload["properties"]),
                board=dict(payload["board"]),
                image=dict(payload["image"]),
                flash=dict(payload["flash"]),
                sets=tuple(dict(item) for item in payload["sets"]),
                files=tuple(dict(item) for item in payload["files"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise SynthesisError(
                "Metadata record is missing required fields.",
                hint=str(exc),
            ) from exc

    def _payload(self) -> dict[str, object]:
        return {
            "metadata_version": self.metadata_version,
            "generator": dict(self.generator),
            "description": self.description,
            "categories": list(self.categories),
            "properties": self.properties,
            "board": self.board,
            "image": self.image,
            "flash": dict(self.flash),
            "sets": [dict(item) for item in self.sets],
            "files": [dict(item) for item in self.files],
        }
