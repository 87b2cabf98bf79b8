from decimal import Decimal
from typing import Any
import re

from coinuri.errors import InvalidAmountError, PrecisionError

# at most this many digits on either side of the decimal point
MAX_AMOUNT_DIGITS = 32

# Plain decimal notation only; exponent notation, whitespace and digit
# grouping are all rejected.
_AMOUNT_RE = re.compile(r"[+-]?([0-9]{1,%d}(\.[0-9]{0,%d})?|\.[0-9]{1,%d})" %
                        ((MAX_AMOUNT_DIGITS,) * 3))


class Value(object):
    """ An exact amount of a given currency, held as an integer number
    of the currency's smallest units.
    """

    def __init__(self, coin_type: Any, units: int) -> None:
        if not isinstance(units, int) or isinstance(units, bool):
            raise TypeError("Amount units must be an integer")
        if abs(units) >= 10 ** (MAX_AMOUNT_DIGITS + coin_type.unit_exponent):
            raise ValueError("Amount out of range")
        self._type = coin_type
        self._units = units

    type = property(lambda self: self._type)
    units = property(lambda self: self._units)

    def signum(self) -> int:
        return (self._units > 0) - (self._units < 0)

    def is_zero(self) -> bool:
        return self._units == 0

    def to_decimal(self) -> Decimal:
        digits = tuple(int(c) for c in str(abs(self._units)))
        return Decimal((int(self._units < 0), digits,
                        -self._type.unit_exponent))

    def to_plain_string(self) -> str:
        return format_amount(self)

    def _check_same_type(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        if other.type != self._type:
            raise ValueError("Cannot compare amounts of " + str(self._type) +
                             " and " + str(other.type))
        return None

    def __eq__(self, other):
        return (isinstance(other, Value) and other.type == self._type and
                other.units == self._units)

    def __hash__(self):
        return hash((self._type, self._units))

    def __lt__(self, other):
        res = self._check_same_type(other)
        if res is NotImplemented:
            return res
        return self._units < other.units

    def __le__(self, other):
        res = self._check_same_type(other)
        if res is NotImplemented:
            return res
        return self._units <= other.units

    def __repr__(self):
        return "Value(" + repr(self._type) + ", " + str(self._units) + ")"

    def __str__(self):
        return format_amount(self) + " " + self._type.symbol


def parse_amount(coin_type: Any, amount_str: str) -> Value:
    """ Parse a decimal amount of whole coins, e.g. "20.3", into an
    exact Value. The sign is kept; callers decide whether negative
    amounts are acceptable.
    """
    if (not isinstance(amount_str, str) or
            _AMOUNT_RE.fullmatch(amount_str) is None):
        raise InvalidAmountError("'" + str(amount_str) +
                                 "' is not a valid amount", token=amount_str)
    sign, digits, exponent = Decimal(amount_str).as_tuple()
    digits = list(digits)
    while exponent < 0 and len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    shift = exponent + coin_type.unit_exponent
    if shift < 0 and any(digits):
        raise PrecisionError("'" + amount_str + "' has too many decimal "
                             "places", token=amount_str)
    units = int("".join(str(d) for d in digits))
    units = units * 10 ** shift if shift >= 0 else 0
    return Value(coin_type, -units if sign else units)


def format_amount(value: Value) -> str:
    """ Fixed point representation in whole coins, without insignificant
    trailing zeros: 2030000000 sat is "20.3", 0 is "0".
    """
    whole, frac = divmod(abs(value.units), value.type.one_coin)
    res = str(whole)
    if frac:
        frac_str = str(frac).rjust(value.type.unit_exponent, "0")
        res += "." + frac_str.rstrip("0")
    return "-" + res if value.units < 0 else res
