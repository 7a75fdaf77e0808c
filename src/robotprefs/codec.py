"""Conversion between user-entered text and typed preference values.

Each :class:`PreferenceType` maps to an adapter in :data:`TYPE_REGISTRY`.
Adapters parse raw text into a payload and format a payload back into the
text shown in an editor.  New tags only need a new adapter; the reconciler
and the registry never look at payload types.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Protocol

from .errors import CodecError
from .values import PreferenceType, PreferenceValue, element_type

_TRUE = frozenset({"y", "yes", "t", "true", "on", "1"})
_FALSE = frozenset({"n", "no", "f", "false", "off", "0"})

_HEX4 = re.compile(r"[0-9A-Fa-f]{4}")

_ESCAPES = {"r": "\r", "n": "\n", "t": "\t", "b": "\b", "f": "\f"}
_REVERSE_ESCAPES = {v: k for k, v in _ESCAPES.items()}


def _join_surrogates(text: str) -> str:
    # \uXXXX escapes are UTF-16 code units; pairs become one character
    try:
        return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
    except UnicodeDecodeError:
        raise CodecError("Unpaired surrogate in unicode escape") from None


def unescape(text: str) -> str:
    """Expand backslash escapes in *text*.

    ``\\r``, ``\\n``, ``\\t``, ``\\b`` and ``\\f`` produce control characters,
    ``\\uXXXX`` produces the UTF-16 code unit ``XXXX`` (surrogate pairs join
    into one character) and any other escaped character is kept literally.
    A trailing lone backslash is kept.
    """
    out: list[str] = []
    unicode: list[str] = []
    had_slash = False
    in_unicode = False
    saw_unicode = False
    for ch in text:
        if in_unicode:
            unicode.append(ch)
            if len(unicode) == 4:
                digits = "".join(unicode)
                if not _HEX4.fullmatch(digits):
                    raise CodecError(f"Unable to parse unicode value: {digits}")
                out.append(chr(int(digits, 16)))
                saw_unicode = True
                unicode.clear()
                in_unicode = False
                had_slash = False
            continue
        if had_slash:
            had_slash = False
            if ch == "u":
                in_unicode = True
            else:
                out.append(_ESCAPES.get(ch, ch))
            continue
        if ch == "\\":
            had_slash = True
            continue
        out.append(ch)
    if had_slash:
        out.append("\\")
    # an unfinished \u escape at the end of the text is dropped
    result = "".join(out)
    if saw_unicode:
        result = _join_surrogates(result)
    return result


def escape(text: str) -> str:
    """Inverse of :func:`unescape` for display in a single-line editor."""

    out: list[str] = []
    for ch in text:
        if ch == "\\":
            out.append("\\\\")
        elif ch in _REVERSE_ESCAPES:
            out.append("\\" + _REVERSE_ESCAPES[ch])
        elif ord(ch) < 0x20 or 0xD800 <= ord(ch) <= 0xDFFF:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return "".join(out)


####################
##### ADAPTERS #####
####################


class ValueAdapter(Protocol):
    """Parse and format payloads of a single type tag."""

    def parse(self, raw: str) -> Any:
        """Parse *raw* text; raise :class:`CodecError` when invalid."""

    def format(self, payload: Any) -> str:
        """Return the display text for *payload*."""


class BooleanAdapter:
    def parse(self, raw: str) -> bool:
        lower = raw.lower()
        if lower in _TRUE:
            return True
        if lower in _FALSE:
            return False
        raise CodecError(
            "Invalid boolean value; expected one of yes, true, 1, no, false, 0"
        )

    def format(self, payload: Any) -> str:
        return "true" if payload else "false"


class NumberAdapter:
    def parse(self, raw: str) -> float:
        if "_" in raw:
            raise CodecError("Invalid number value")
        try:
            return float(raw)
        except ValueError:
            raise CodecError("Invalid number value") from None

    def format(self, payload: Any) -> str:
        return repr(float(payload))


class StringAdapter:
    def parse(self, raw: str) -> str:
        try:
            return unescape(raw)
        except CodecError as exc:
            raise CodecError(f"Invalid string: {exc}") from exc

    def format(self, payload: Any) -> str:
        return escape(str(payload))


@dataclass(frozen=True)
class ArrayAdapter:
    """Comma separated list of element literals."""

    element: ValueAdapter

    def parse(self, raw: str) -> tuple[Any, ...]:
        if not raw.strip():
            return ()
        return tuple(self.element.parse(part.strip()) for part in raw.split(","))

    def format(self, payload: Any) -> str:
        parts = [self.element.format(p) for p in payload]
        if isinstance(self.element, StringAdapter):
            parts = [p.replace(",", "\\u002c") for p in parts]
        return ", ".join(parts)


TYPE_REGISTRY: dict[PreferenceType, ValueAdapter] = {
    PreferenceType.BOOLEAN: BooleanAdapter(),
    PreferenceType.NUMBER: NumberAdapter(),
    PreferenceType.STRING: StringAdapter(),
}
for _tag in PreferenceType:
    _elem = element_type(_tag)
    if _elem is not None:
        TYPE_REGISTRY[_tag] = ArrayAdapter(TYPE_REGISTRY[_elem])


def decode_for_edit(raw: str, type: PreferenceType | str) -> PreferenceValue:
    """Parse *raw* user text into a value tagged *type*."""

    tag = PreferenceType.from_name(type)
    adapter = TYPE_REGISTRY.get(tag)
    if adapter is None:
        raise CodecError(f"Unsupported type: {tag.value}")
    return PreferenceValue(tag, adapter.parse(raw))


def encode_for_display(value: PreferenceValue) -> str:
    """Return the editor text for *value*."""

    return TYPE_REGISTRY[value.type].format(value.payload)


__all__ = [
    "TYPE_REGISTRY",
    "ValueAdapter",
    "decode_for_edit",
    "encode_for_display",
    "escape",
    "unescape",
]
