"""License gate: which files need license acceptance and whether it was granted."""

from __future__ import annotations

from collections.abc import Iterable

from romgen.errors import LicenseMismatchError, UnknownLicenseError
from romgen.models import License, LicenseStatus


class LicenseGate:
    def __init__(self, licenses: Iterable[License]) -> None:
        self._licenses: dict[int, License] = {}
        self._by_file: dict[int, int] = {}
        for license in licenses:
            self._licenses[license.id] = license
            self._by_file[license.file_id] = license.id
        self._accepted: set[int] = set()

    def statuses(self) -> tuple[LicenseStatus, ...]:
        return tuple(
            LicenseStatus(
                id=license.id,
                file_id=license.file_id,
                url=license.url,
                accepted=license.id in self._accepted,
            )
            for license in sorted(self._licenses.values(), key=lambda item: item.id)
        )

    def accept(self, license: License | LicenseStatus) -> bool:
        """Mark *license* accepted; return False when it already was.

        Only ``id``, ``file_id`` and ``url`` are compared, so a ``LicenseStatus``
        returned by ``statuses()`` is accepted as well.
        """
        registered = self._licenses.get(license.id)
        if registered is None:
            raise UnknownLicenseError(
                f"Unknown license id {license.id}.",
                hint="Accept one of the licenses returned by licenses().",
                context={"operation": "accept_license", "license_id": str(license.id)},
            )
        if (registered.id, registered.file_id, registered.url) != (
            license.id,
            license.file_id,
            license.url,
        ):
            raise LicenseMismatchError(
                f"License {license.id} does not match the license that was offered.",
                hint="Accept the exact file id and URL returned by licenses().",
                context={
                    "operation": "accept_license",
                    "license_id": str(license.id),
                    "expected_file_id": str(registered.file_id),
                    "actual_file_id": str(license.file_id),
                    "expected_url": registered.url,
                    "actual_url": license.url,
                },
            )
        if license.id in self._accepted:
            return False
        self._accepted.add(license.id)
        return True

    def license_for_file(self, file_id: int) -> License | None:
        license_id = self._by_file.get(file_id)
        if license_id is None:
            return None
        return self._licenses[license_id]

    def is_satisfied(self, file_id: int) -> bool:
        license_id = self._by_file.get(file_id)
        return license_id is None or license_id in self._accepted

    def missing(self) -> tuple[int, ...]:
        return tuple(sorted(set(self._licenses) - self._accepted))
