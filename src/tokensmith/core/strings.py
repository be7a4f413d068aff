"""
String utility functions for tokensmith.

Provides the lexical transforms that both the render-time compiler and the
live-preview runtime must apply identically.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

_UPPERCASE = re.compile(r"([A-Z])")
_MARKUP_CHARS = re.compile(r"[<>\"']")

SIGNIFICANT_DIGITS = 14
MAX_SAFE_INTEGER = 2**53 - 1


def kebab_case(name: str) -> str:
    """
    Convert a camelCase property name to kebab-case.

    Inserts a hyphen before every uppercase letter and lower-cases the
    result. No dictionary is involved, so already-kebab names pass through.

    Examples:
        >>> kebab_case("fontSize")
        'font-size'
        >>> kebab_case("letter-spacing")
        'letter-spacing'
        >>> kebab_case("WebkitTextStroke")
        '-webkit-text-stroke'
    """
    return _UPPERCASE.sub(r"-\1", name).lower()


def ucfirst(segment: str) -> str:
    """Upper-case the first character only, leaving the rest untouched."""
    return segment[:1].upper() + segment[1:]


def strip_markup(value: str) -> str:
    """Remove characters that could break out of a style block or attribute."""
    return _MARKUP_CHARS.sub("", value)


def format_number(value: float) -> str:
    """
    Render a float with 14 significant digits in positional notation.

    Rounding is half away from zero on the exact binary value, matching
    JavaScript's ``toPrecision``. Trailing zeros are dropped and negative
    zero renders as ``0``, so ``57 * 0.01`` gives ``"0.57"`` rather than
    ``"0.5700000000000001"``.

    Examples:
        >>> format_number(0.05)
        '0.05'
        >>> format_number(-0.1)
        '-0.1'
        >>> format_number(1.0)
        '1'
        >>> format_number(12345678901234.5)
        '12345678901235'
    """
    if value == 0:
        return "0"
    exact = Decimal(value)
    rounded = exact.quantize(
        Decimal(1).scaleb(exact.adjusted() - (SIGNIFICANT_DIGITS - 1)),
        rounding=ROUND_HALF_UP,
    )
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_scalar(value: int | float) -> str:
    """
    Render a JSON number the way both runtimes do.

    Integral values inside the float-safe range print as plain integers;
    everything else goes through :func:`format_number`.

    Examples:
        >>> format_scalar(123456789012345)
        '123456789012345'
        >>> format_scalar(2.0)
        '2'
        >>> format_scalar(2**60)
        '1152921504606800000'
    """
    if isinstance(value, int) or value.is_integer():
        if abs(value) <= MAX_SAFE_INTEGER:
            return str(int(value))
    return format_number(float(value))
