"""Integer parsing with the overflow rules the shell's builtins rely on."""

_WHITESPACE = " \t\n\v\f\r"
_INT64_MAX = 2**63 - 1
_UINT64_MASK = 2**64 - 1
_INT32_MAX = 2**31 - 1


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _split_sign(text: str) -> tuple[int, str]:
    rest = text.lstrip(_WHITESPACE)
    sign = -1 if rest.startswith("-") else 1
    if rest[:1] in ("-", "+"):
        rest = rest[1:]
    return sign, rest


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value > _INT32_MAX else value


def atoi(text: str) -> int:
    """Convert the leading decimal number of ``text``, C ``atoi`` style.

    Leading whitespace and one sign are accepted and scanning stops at the
    first non-digit.  A positive value past the 64-bit signed range yields
    -1, a negative one yields 0; the result is truncated to a 32-bit int.
    """
    sign, rest = _split_sign(text)
    number = 0
    for ch in rest:
        if not _is_digit(ch):
            break
        number = (10 * number + int(ch)) & _UINT64_MASK
        if sign == 1 and number > _INT64_MAX:
            return -1
        if sign == -1 and number > _INT64_MAX + 1:
            return 0
    return _to_int32(sign * number)


def parse_integer(text: str) -> int:
    """Strictly parse a 32-bit signed integer.

    Raises ValueError when no digit follows the optional sign, when the
    value is outside the 32-bit range, or when the digits are followed by
    anything other than whitespace.
    """
    sign, rest = _split_sign(text)
    if not rest or not _is_digit(rest[0]):
        raise ValueError(f"invalid integer: {text!r}")
    number = 0
    position = 0
    for position, ch in enumerate(rest):
        if not _is_digit(ch):
            break
        number = 10 * number + int(ch)
        if sign == 1 and number > _INT32_MAX:
            raise ValueError(f"integer out of range: {text!r}")
        if sign == -1 and number > _INT32_MAX + 1:
            raise ValueError(f"integer out of range: {text!r}")
    else:
        position = len(rest)
    if position < len(rest) and rest[position] not in _WHITESPACE:
        raise ValueError(f"invalid integer: {text!r}")
    return sign * number