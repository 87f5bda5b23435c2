"""
Helper per la formattazione di numeri e date negli export.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional


def format_number(value: Any, decimals: int = 2) -> str:
    if value in (None, ""):
        return ""
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return str(value)

    if decimals < 0:
        decimals = 0
    quant = Decimal("1") if decimals == 0 else Decimal("1").scaleb(-decimals)
    try:
        number = number.quantize(quant)
    except InvalidOperation:
        pass
    return format(number, f".{decimals}f")


def format_amount(value: Any) -> str:
    return format_number(value, decimals=2)


def format_date_it(value: Optional[date]) -> str:
    """Data nel formato usato sui DDT (gg/mm/aaaa)."""
    return value.strftime("%d/%m/%Y") if value else ""
