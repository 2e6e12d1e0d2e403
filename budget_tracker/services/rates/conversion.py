from __future__ import annotations

from typing import Mapping

"""Currency conversion through a base-currency pivot.

Missing rates never raise: the amount passes through unconverted so totals
stay displayable while rates load or the rate service is down.
"""


def _usable_rate(rates: Mapping[str, float], currency: str) -> float | None:
    rate = rates.get(currency)
    if rate is None or rate <= 0:
        return None
    return rate


def convert_amount(
    amount: float,
    source: str,
    target: str,
    rates: Mapping[str, float],
    base_currency: str = "USD",
) -> float:
    source = source.upper()
    target = target.upper()
    base_currency = base_currency.upper()
    if source == target:
        return amount
    if not rates:
        return amount

    source_rate = 1.0 if source == base_currency else _usable_rate(rates, source)
    target_rate = 1.0 if target == base_currency else _usable_rate(rates, target)
    if source_rate is None or target_rate is None:
        return amount

    in_base = amount if source == base_currency else amount / source_rate
    return in_base if target == base_currency else in_base * target_rate
