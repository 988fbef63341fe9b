import pytest

from rttrutil.utf8 import (
    ansi_to_utf8,
    find_invalid_utf8,
    is_valid_utf8,
    utf8_to_32,
    utf32_to_8,
)


def test_round_trip():
    text = "Grüße € 漢字 \U0001F600"
    assert utf8_to_32(utf32_to_8(text)) == text


def test_utf8_to_32_replaces_invalid():
    assert utf8_to_32(b"a\xffb") == "a\ufffdb"


def test_utf32_to_8_replaces_surrogate():
    assert utf32_to_8("x\ud800") == "x\ufffd".encode("utf-8")


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"abc\xffdef", 3),
        (b"ab\xe2\x82", 2),
        (b"\xc0\x80", 0),
        (b"\xed\xa0\x80", 0),
    ],
)
def test_find_invalid(data, expected):
    assert find_invalid_utf8(data) == expected


def test_find_invalid_on_valid_returns_length():
    data = "Grüße".encode("utf-8")
    assert find_invalid_utf8(data) == len(data)
    assert is_valid_utf8(data)


def test_is_valid_false():
    assert not is_valid_utf8(b"\xfc")


def test_ansi_keeps_valid_utf8():
    data = "Grüße".encode("utf-8")
    assert ansi_to_utf8(data) == data


def test_ansi_converts_latin():
    assert ansi_to_utf8(b"Gr\xfc\xdfe") == "Grüße".encode("utf-8")


@pytest.mark.parametrize(
    "byte, code_point",
    [(0x80, 0x20AC), (0x81, 0x0081), (0x9F, 0x0178), (0x8E, 0x017D), (0xFF, 0x00FF)],
)
def test_ansi_table(byte, code_point):
    assert ansi_to_utf8(bytes([byte])) == chr(code_point).encode("utf-8")


def test_ansi_result_always_valid():
    data = bytes(range(256))
    result = ansi_to_utf8(data)
    assert is_valid_utf8(result)
    assert len(result.decode("utf-8")) == len(data)