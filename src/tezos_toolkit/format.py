"""
Unit conversion between mutez, milli-tez and tez.
"""

from decimal import Decimal, ROUND_DOWN
from typing import Union

from .runtime.errors import UnsupportedUnitError

TEZ_UNITS = {
    "mutez": Decimal(0),
    "mtz": Decimal(3),
    "tz": Decimal(6),
}


def _decimals(unit: str) -> Decimal:
    try:
        return TEZ_UNITS[unit]
    except KeyError:
        raise UnsupportedUnitError(unit)


def format(frm: str = "mutez", to: str = "mutez", amount: Union[int, str, Decimal] = 0) -> Decimal:
    """
    Convert ``amount`` from one unit to another.

    Args:
        frm: Source unit (``mutez``, ``mtz`` or ``tz``)
        to: Target unit
        amount: Amount expressed in ``frm``

    Returns:
        The amount expressed in ``to``. Conversions to mutez are truncated
        to an integral value.

    Raises:
        UnsupportedUnitError: If either unit is unknown
    """
    value = Decimal(str(amount)) * (Decimal(10) ** _decimals(frm))
    value = value / (Decimal(10) ** _decimals(to))
    if to == "mutez":
        value = value.to_integral_value(rounding=ROUND_DOWN)
    return value
