"""Size-handling policy applied to retrieved ROM bytes."""

from __future__ import annotations

from romgen.errors import SizeMismatchError
from romgen.models import SizeHandling


def apply_size_handling(
    policy: SizeHandling,
    data: bytes,
    target_size: int,
    *,
    file_id: int | None = None,
) -> bytes:
    """Return *data* normalized to exactly *target_size* bytes under *policy*."""
    policy = SizeHandling(policy)
    actual = len(data)
    if actual == 0 and policy is not SizeHandling.PAD:
        raise _mismatch(policy, actual, target_size, file_id, "Retrieved file is empty.")
    if actual == target_size:
        return bytes(data)

    if policy is SizeHandling.PAD and actual < target_size:
        return bytes(data) + bytes(target_size - actual)
    if policy is SizeHandling.TRUNCATE and actual > target_size:
        return bytes(data[:target_size])
    if policy is SizeHandling.DUPLICATE and actual < target_size and target_size % actual == 0:
        return bytes(data) * (target_size // actual)

    raise _mismatch(
        policy,
        actual,
        target_size,
        file_id,
        "Retrieved file size does not satisfy the size handling policy.",
    )


def _mismatch(
    policy: SizeHandling,
    actual: int,
    target_size: int,
    file_id: int | None,
    message: str,
) -> SizeMismatchError:
    context = {
        "operation": "add_file",
        "size_handling": policy.value,
        "expected": str(target_size),
        "actual": str(actual),
    }
    if file_id is not None:
        context["file_id"] = str(file_id)
    return SizeMismatchError(message, hint=_hint_for(policy), context=context)


def _hint_for(policy: SizeHandling) -> str:
    if policy is SizeHandling.EXACT:
        return "Use size_handling 'pad', 'truncate' or 'duplicate' for files of a different size."
    if policy is SizeHandling.PAD:
        return "Padding only grows files; use 'truncate' for oversized files."
    if policy is SizeHandling.TRUNCATE:
        return "Truncation only shrinks files; use 'pad' for undersized files."
    return "Duplication needs a file size that divides the ROM size evenly."
