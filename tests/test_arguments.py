import pytest

from chubc.arguments import (
    parse_seek_argument,
    parse_volume_argument,
    split_seek_argument,
    split_sign,
)
from chubc.errors import FormatError, RangeError
from chubc.models import SeekMode, VolumeMode


def test_split_sign() -> None:
    assert split_sign("-10") == ("-", "10")
    assert split_sign("+10") == ("+", "10")
    assert split_sign("10") == (None, "10")
    assert split_sign("") == (None, "")


@pytest.mark.parametrize(
    ("text", "mode"),
    [("-10", SeekMode.REWIND), ("+10", SeekMode.FORWARD), ("10", SeekMode.ABSOLUTE)],
)
def test_seek_sign_selects_mode(text: str, mode: SeekMode) -> None:
    assert split_seek_argument(text) == (mode, "10")


def test_parse_seek_argument() -> None:
    assert parse_seek_argument("-1:30") == (SeekMode.REWIND, 90)
    assert parse_seek_argument("+5") == (SeekMode.FORWARD, 5)
    assert parse_seek_argument("1:00:00") == (SeekMode.ABSOLUTE, 3600)


@pytest.mark.parametrize("text", ["", "-", "+", "--10", "+-10", "ten", "1:75", "+" + "9" * 5000])
def test_parse_seek_argument_rejects_malformed_time(text: str) -> None:
    with pytest.raises(FormatError):
        parse_seek_argument(text)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("0", (VolumeMode.ABSOLUTE, 0)),
        ("55", (VolumeMode.ABSOLUTE, 55)),
        ("100", (VolumeMode.ABSOLUTE, 100)),
        ("+5", (VolumeMode.RELATIVE, 5)),
        ("-5", (VolumeMode.RELATIVE, -5)),
        ("+100", (VolumeMode.RELATIVE, 100)),
        ("-100", (VolumeMode.RELATIVE, -100)),
    ],
)
def test_parse_volume_argument(text: str, expected: tuple[VolumeMode, int]) -> None:
    assert parse_volume_argument(text) == expected


@pytest.mark.parametrize("text", ["101", "1000", "+101", "-101"])
def test_parse_volume_argument_rejects_out_of_range(text: str) -> None:
    with pytest.raises(RangeError):
        parse_volume_argument(text)


@pytest.mark.parametrize(
    "text", ["", "+", "-", "loud", "5%", "1.5", "--5", "9" * 5000, "-" + "9" * 5000]
)
def test_parse_volume_argument_rejects_malformed_value(text: str) -> None:
    with pytest.raises(FormatError, match="invalid volume value"):
        parse_volume_argument(text)
