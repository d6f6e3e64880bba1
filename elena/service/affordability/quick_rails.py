"""
Quick-Rails Calculator for the Elena affordability engine.

An income-only rule of thumb: cap all-in housing at a fraction of income,
back P&I out of that cap with a fixed buffer, and invert the amortization
formula to get a maximum price. It deliberately ignores the scenario's own
tax/insurance figures so it still works when price and downpayment are
unknown.
"""

from typing import Optional

from .coercion import finite_or_none, round_half_up
from .models import QuickRails
from .mortgage import principal_from_payment
from .settings import AffordabilitySettings, affordability_settings


def quick_affordability(
    income: Optional[float],
    apr: float,
    term_years: int,
    settings: AffordabilitySettings = affordability_settings,
) -> Optional[QuickRails]:
    """
    Compute quick affordability rails from monthly income.

    Args:
        income: Gross monthly income
        apr: APR used to invert the payment formula
        term_years: Loan term in years
        settings: Affordability settings (uses defaults if not provided)

    Returns:
        QuickRails, or None if income is missing or not positive
    """
    income = finite_or_none(income)
    if income is None or income <= 0:
        return None

    housing_cap = income * settings.housing_cap_pct
    pi_target = housing_cap / settings.pi_buffer

    principal = principal_from_payment(pi_target, apr, term_years)
    price_0_down = round_half_up(principal) if principal else None
    five_down = finite_or_none(principal / settings.five_down_fraction) if principal else None
    price_5_down = round_half_up(five_down) if five_down else None

    return QuickRails(
        housing_cap_monthly=round_half_up(housing_cap),
        pi_target_monthly=round_half_up(pi_target),
        price_0_down=price_0_down,
        price_5_down=price_5_down,
        housing_cap_pct=settings.housing_cap_pct,
        buffer=settings.pi_buffer,
        apr_assumed=apr,
        term_years=term_years,
    )
