import pytest

from ipcreceiver.subscription._types import Completed, Fragment, byte_count


def test_fragment_final_flag() -> None:
    assert Fragment("m", 3, 3, b"").is_final
    assert not Fragment("m", 2, 3, b"").is_final


def test_fragment_is_immutable() -> None:
    f = Fragment("m", 1, 1, b"x")
    with pytest.raises(AttributeError):
        f.chunk = 2  # type: ignore[misc]


def test_completed_equality_uses_payload() -> None:
    assert Completed("m", b"") != Completed("m", b"x")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "0 B"),
        (512, "512 B"),
        (2048, "2.0 KiB"),
        (3 * 1024 * 1024, "3.0 MiB"),
        (1.5 * 1024**3, "1.5 GiB"),
    ],
)
def test_byte_count(value: float, expected: str) -> None:
    assert byte_count(value) == expected
