import math

import pytest

from robotprefs.codec import decode_for_edit, encode_for_display, escape, unescape
from robotprefs.errors import CodecError
from robotprefs.values import PreferenceType, PreferenceValue


@pytest.mark.parametrize("raw", ["y", "YES", "t", "True", "on", "1"])
def test_boolean_true_spellings(raw):
    assert decode_for_edit(raw, PreferenceType.BOOLEAN) == PreferenceValue(
        PreferenceType.BOOLEAN, True
    )


@pytest.mark.parametrize("raw", ["n", "No", "F", "false", "OFF", "0"])
def test_boolean_false_spellings(raw):
    assert decode_for_edit(raw, "boolean").payload is False


def test_boolean_invalid():
    with pytest.raises(CodecError) as exc:
        decode_for_edit("maybe", PreferenceType.BOOLEAN)
    assert str(exc.value) == (
        "Invalid boolean value; expected one of yes, true, 1, no, false, 0"
    )
    assert exc.value.title == "Bad Value"


def test_number_parsing():
    assert decode_for_edit("3.14", PreferenceType.NUMBER).payload == 3.14
    assert decode_for_edit("-2e3", PreferenceType.NUMBER).payload == -2000.0
    with pytest.raises(CodecError, match="Invalid number value"):
        decode_for_edit("fast", PreferenceType.NUMBER)


@pytest.mark.parametrize(
    "value",
    [
        PreferenceValue(PreferenceType.NUMBER, 0.1),
        PreferenceValue(PreferenceType.NUMBER, -1e300),
        PreferenceValue(PreferenceType.NUMBER, float("inf")),
        PreferenceValue(PreferenceType.NUMBER, float("nan")),
        PreferenceValue(PreferenceType.BOOLEAN, True),
        PreferenceValue(PreferenceType.BOOLEAN, False),
    ],
)
def test_number_and_boolean_display_round_trip(value):
    assert decode_for_edit(encode_for_display(value), value.type) == value


def test_unescape_control_characters():
    assert unescape(r"a\nb\tc\rd\be\ff") == "a\nb\tc\rd\be\ff"


def test_unescape_unicode():
    assert unescape(r"hi\u0041") == "hiA"
    assert unescape(r"\u00e9t\u00e9") == "\u00e9t\u00e9"


def test_unescape_other_escapes_are_literal():
    assert unescape(r"\q\\\"") == 'q\\"'


def test_unescape_trailing_backslash_kept():
    assert unescape("abc\\") == "abc\\"


def test_unescape_incomplete_unicode_dropped():
    assert unescape(r"ab\u00") == "ab"


def test_unescape_bad_unicode():
    with pytest.raises(CodecError, match="ZZZZ"):
        unescape(r"\uZZZZ")


@pytest.mark.parametrize("text", ["", "plain", "tab\there", "ünïcödé", "a/b.c~d"])
def test_unescape_identity_without_backslash(text):
    assert unescape(text) == text


def test_string_decode_wraps_reason():
    with pytest.raises(CodecError) as exc:
        decode_for_edit(r"\uZZZZ", PreferenceType.STRING)
    assert str(exc.value).startswith("Invalid string: ")


def test_escape_is_readable_inverse():
    text = "line1\nline2\\end\x01"
    shown = escape(text)
    assert "\n" not in shown
    assert unescape(shown) == text


def test_array_adapters():
    value = decode_for_edit("1, 2.5, 3", PreferenceType.NUMBER_ARRAY)
    assert value == PreferenceValue(PreferenceType.NUMBER_ARRAY, (1.0, 2.5, 3.0))
    assert decode_for_edit("", PreferenceType.BOOLEAN_ARRAY).payload == ()
    strings = PreferenceValue(PreferenceType.STRING_ARRAY, ("a,b", "c"))
    assert decode_for_edit(encode_for_display(strings), strings.type) == strings


def test_unknown_type_name():
    with pytest.raises(ValueError):
        decode_for_edit("1", "Raw")


def test_nan_decodes_to_nan():
    assert math.isnan(decode_for_edit("nan", PreferenceType.NUMBER).payload)


def test_unescape_joins_surrogate_pair():
    text = unescape(r"smile \ud83d\ude00")
    assert text == "smile \U0001F600"
    assert text.encode("utf-8")


def test_unescape_unpaired_surrogate():
    with pytest.raises(CodecError):
        unescape(r"\ud83d!")
    with pytest.raises(CodecError) as exc:
        decode_for_edit(r"\ude00", PreferenceType.STRING)
    assert str(exc.value).startswith("Invalid string: ")


@pytest.mark.parametrize("raw", ["1_000", "1_0.5", "_1"])
def test_number_rejects_underscores(raw):
    with pytest.raises(CodecError, match="Invalid number value"):
        decode_for_edit(raw, PreferenceType.NUMBER)
