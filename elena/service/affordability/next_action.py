"""
Next-Action selection for the Elena affordability engine.

A pure decision table: the verdict status plus what inputs are available
select exactly one recommended action.
"""

import math
from typing import List, Optional

from .coercion import round_half_up, round_to_step
from .models import NextAction, NextActionType, Verdict, VerdictStatus
from .settings import AffordabilitySettings, affordability_settings


def pick_next_action(
    verdict: Verdict,
    missing_inputs: List[str],
    price: Optional[float],
    housing_all_in: Optional[float],
    settings: AffordabilitySettings = affordability_settings,
) -> NextAction:
    """
    Choose the single next action for a verdict.

    Decision table:
        - INSUFFICIENT: collect the missing inputs
        - NO-GO with price and housing estimate: lower the price so the
          all-in cost scales down to the housing cap
        - NO-GO otherwise: adjust the scenario
        - CAUTION: increase the buffer
        - GREEN: lock in the plan

    Args:
        verdict: The computed verdict
        missing_inputs: Names of missing inputs
        price: Scenario home price
        housing_all_in: Estimated all-in monthly housing cost
        settings: Affordability settings (uses defaults if not provided)

    Returns:
        NextAction
    """
    if verdict.status == VerdictStatus.INSUFFICIENT:
        if missing_inputs:
            return NextAction(
                type=NextActionType.COLLECT_MISSING_INPUTS,
                target={"missing": list(missing_inputs)},
                why="I can give quick rails now, and a tighter verdict once those inputs are provided.",
            )
        return NextAction(
            type=NextActionType.COLLECT_MISSING_INPUTS,
            target=None,
            why="Need more inputs to produce a defensible recommendation.",
        )

    if verdict.status == VerdictStatus.NO_GO:
        if (
            price is not None
            and price > 0
            and housing_all_in is not None
            and housing_all_in > 0
            and verdict.housing_cap is not None
            and math.isfinite(price * (verdict.housing_cap / housing_all_in))
        ):
            cap = verdict.housing_cap
            target_price = round_to_step(
                price * (cap / housing_all_in), settings.price_rounding_step
            )
            return NextAction(
                type=NextActionType.LOWER_PRICE,
                target={
                    "current_price": round_half_up(price),
                    "target_price": max(0, target_price),
                    "target_housing_cap": cap,
                },
                why=(
                    "Brings estimated all-in housing closer to the "
                    f"{round_half_up(settings.housing_cap_pct * 100)}% cap using your current scenario."
                ),
            )

        return NextAction(
            type=NextActionType.ADJUST_SCENARIO,
            target=None,
            why="Lower price, increase downpayment, reduce expenses, or improve credit to reach GREEN.",
        )

    if verdict.status == VerdictStatus.CAUTION:
        return NextAction(
            type=NextActionType.INCREASE_BUFFER,
            target=None,
            why="Small adjustments can move you from CAUTION to GREEN (more residual buffer).",
        )

    return NextAction(
        type=NextActionType.LOCK_IN_PLAN,
        target=None,
        why="You're in a stable range. Next step is tightening assumptions and building the offer plan.",
    )
