"""Tests for raw value utilities."""

import pytest

from mimedir.util import (
    convert_to_utf8,
    decode_raw,
    encode_raw,
    find_control_character,
    is_utf8,
    qname,
)


@pytest.mark.parametrize(
    "raw",
    [b"plain", "Zoë".encode(), b"caf\xc0", b"\xff\xfe\x00"],
    ids=("ascii", "utf8", "latin1", "binary"),
)
def test_decode_encode_raw(raw: bytes) -> None:
    """Test raw bytes survive decoding."""
    assert encode_raw(decode_raw(raw)) == raw


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("plain", True),
        ("Zoë 🎄", True),
        ("tab\tand\nnewline\r", True),
        ("bell\x07", False),
        ("delete\x7f", False),
        (decode_raw(b"caf\xc0"), False),
    ],
    ids=("ascii", "unicode", "whitespace", "control", "delete", "invalid"),
)
def test_is_utf8(value: str, expected: bool) -> None:
    """Test detecting values that are not valid UTF-8."""
    assert is_utf8(value) is expected


def test_find_control_character() -> None:
    """Test finding the first control character."""
    assert find_control_character("plain") is None
    assert find_control_character("a\x02b\x01") == "\x02"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Zoë", "Zoë"),
        (decode_raw(b"caf\xc0"), "cafÀ"),
        (decode_raw(b"Zo\xeb\x00"), "Zoë"),
        ("a\x01b", "ab"),
    ],
    ids=("valid", "latin1", "latin1-control", "control"),
)
def test_convert_to_utf8(value: str, expected: str) -> None:
    """Test coercing values to valid UTF-8."""
    assert convert_to_utf8(value) == expected
    assert is_utf8(convert_to_utf8(value))


def test_qname() -> None:
    """Test qualifying element names."""
    assert qname(None, "text") == "text"
    assert qname("urn:example", "text") == "{urn:example}text"


def test_encode_raw_lone_surrogate() -> None:
    """Test a surrogate that does not stand for a byte can't be encoded."""
    with pytest.raises(ValueError, match="no byte representation"):
        encode_raw("a\ud800b")


def test_convert_to_utf8_lone_surrogate() -> None:
    """Test surrogates that do not stand for a byte are removed."""
    assert convert_to_utf8("a\ud800b" + decode_raw(b"\xe9")) == "abé"
