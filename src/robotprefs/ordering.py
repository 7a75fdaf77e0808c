from __future__ import annotations

import re
from functools import cmp_to_key

_DIGITS = frozenset("0123456789")
_CHUNK = re.compile(r"[0-9]+|[^0-9]+")


def _chunks(text: str) -> list[str]:
    return _CHUNK.findall(text)


def _compare_digits(a: str, b: str) -> int:
    sa, sb = a.lstrip("0"), b.lstrip("0")
    if len(sa) != len(sb):
        return -1 if len(sa) < len(sb) else 1
    if sa != sb:
        return -1 if sa < sb else 1
    # equal value: fewer leading zeros first
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    return 0


def alphanum_compare(a: str, b: str) -> int:
    """Compare *a* and *b* treating digit runs as numbers.

    ``"item2"`` sorts before ``"item10"``; text runs compare case-insensitively.
    """
    ca, cb = _chunks(a), _chunks(b)
    for x, y in zip(ca, cb):
        if x[0] in _DIGITS and y[0] in _DIGITS:
            result = _compare_digits(x, y)
        else:
            fx, fy = x.casefold(), y.casefold()
            result = (fx > fy) - (fx < fy)
        if result:
            return result
    return (len(ca) > len(cb)) - (len(ca) < len(cb))


alphanum_key = cmp_to_key(alphanum_compare)


def item_sort_key(name: str):
    """Sort key for property-sheet item names.

    Names equal apart from case fall back to the raw name so the order does
    not depend on arrival order.
    """
    return alphanum_key(name.lower()), name


__all__ = ["alphanum_compare", "alphanum_key", "item_sort_key"]
