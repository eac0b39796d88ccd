"""Range table: range code -> (max value, bit width)."""

from __future__ import annotations

from bitbuffer.core.types import RangeCode, RangeSpec

_LOW_BYTE = 0xFF


def max_value_for(code: RangeCode | int) -> int:
    """Decode the maximum storable value carried by a range code."""
    code = _checked(code)
    if code & 0x01:
        return int(code)
    # >255: remaining bits form the high byte, low byte is always 0xFF
    high = (int(code) >> 1) & 0xFF
    return (high << 8) | _LOW_BYTE


def resolve(code: RangeCode | int) -> RangeSpec:
    """Resolve a range code to its :class:`RangeSpec`.

    Raises:
        ValueError: If *code* is not one of the fifteen recognized codes.
    """
    max_value = max_value_for(code)
    # max_value + 1 is a power of two, so bit_length - 1 == round(log2(max + 1))
    bit_width = max(1, (max_value + 1).bit_length() - 1)
    return RangeSpec(max_value=max_value, bit_width=bit_width)


def _checked(code: RangeCode | int) -> RangeCode:
    if isinstance(code, RangeCode):
        return code
    try:
        return RangeCode(code)
    except ValueError:
        raise ValueError(f"Unrecognized range code {code!r}") from None
