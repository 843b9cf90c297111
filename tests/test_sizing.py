import pytest

from romgen import SizeHandling, SizeMismatchError, apply_size_handling


def test_exact_accepts_only_matching_size() -> None:
    data = bytes(range(16))

    assert apply_size_handling(SizeHandling.EXACT, data, 16) == data
    with pytest.raises(SizeMismatchError):
        apply_size_handling(SizeHandling.EXACT, data, 32)
    with pytest.raises(SizeMismatchError):
        apply_size_handling(SizeHandling.EXACT, data, 8)


def test_pad_zero_fills_short_input_and_rejects_long_input() -> None:
    assert apply_size_handling(SizeHandling.PAD, b"\xaa" * 16, 16) == b"\xaa" * 16
    assert apply_size_handling(SizeHandling.PAD, b"\xaa\xbb", 6) == b"\xaa\xbb\x00\x00\x00\x00"
    with pytest.raises(SizeMismatchError):
        apply_size_handling(SizeHandling.PAD, b"\xaa" * 17, 16)


def test_truncate_drops_tail_and_rejects_short_input() -> None:
    assert apply_size_handling(SizeHandling.TRUNCATE, b"abcdef", 4) == b"abcd"
    with pytest.raises(SizeMismatchError):
        apply_size_handling(SizeHandling.TRUNCATE, b"ab", 4)


def test_duplicate_repeats_input_that_divides_target() -> None:
    assert apply_size_handling(SizeHandling.DUPLICATE, b"ab", 8) == b"abababab"
    with pytest.raises(SizeMismatchError):
        apply_size_handling(SizeHandling.DUPLICATE, b"abc", 8)
    with pytest.raises(SizeMismatchError):
        apply_size_handling(SizeHandling.DUPLICATE, b"a" * 16, 8)


def test_empty_input_is_rejected_unless_padding() -> None:
    for policy in (SizeHandling.EXACT, SizeHandling.TRUNCATE, SizeHandling.DUPLICATE):
        with pytest.raises(SizeMismatchError):
            apply_size_handling(policy, b"", 8)

    assert apply_size_handling(SizeHandling.PAD, b"", 8) == bytes(8)


def test_size_mismatch_reports_sizes_and_file_id() -> None:
    with pytest.raises(SizeMismatchError) as excinfo:
        apply_size_handling(SizeHandling.EXACT, b"abc", 4, file_id=7)

    assert excinfo.value.context["expected"] == "4"
    assert excinfo.value.context["actual"] == "3"
    assert excinfo.value.context["file_id"] == "7"
    assert excinfo.value.hint


def test_policy_accepts_plain_string_values() -> None:
    assert apply_size_handling("pad", b"a", 2) == b"a\x00"  # type: ignore[arg-type]
