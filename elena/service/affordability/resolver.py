"""
Scenario Resolver for the Elena affordability engine.

Merges the layers of an untyped request body into one typed Scenario.
Precedence per field, highest first:

    overrides > upstream snapshot > baseline scenario > profile (income only)

Each candidate is coerced before precedence is applied, so an unparseable
value in a higher layer falls through to the next one. When no credit
score is found anywhere, the free-text question is checked for a
hypothetical ("what if my score went up to 740").
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from .coercion import clamp, finite_or_none, pick_first_text, round_half_up
from .models import Scenario, Source
from .question import parse_hypothetical_credit_score
from .settings import AffordabilitySettings, affordability_settings

# Body keys checked, in order, for the upstream financial snapshot.
SNAPSHOT_LOCATIONS = ("fad", "fad_snapshot", "snapshot")

SNAPSHOT_ALIASES: Dict[str, Tuple[str, ...]] = {
    "price": ("price", "homePrice", "projected_home_price", "housingPrice"),
    "expenses": ("expenses", "monthlyExpenses", "monthly_expenses", "expenses_total"),
    "downpayment": ("downpayment", "dpAmt", "down", "currentSavings", "savings"),
    "creditScore": ("creditScore", "credit_score", "score", "scoreValue"),
    "termYears": ("termYears", "term_years", "term"),
    "loanType": ("loanType", "loan_type", "mortgageType"),
    "income": ("income", "monthlyIncome", "monthly_income", "totalIncome"),
    "taxRate": ("taxRate", "tax_rate"),
    "insuranceAnnual": ("insuranceAnnual", "insurance_annual"),
    "hoaMonthly": ("hoaMonthly", "hoa_monthly"),
}

BASELINE_ALIASES: Dict[str, Tuple[str, ...]] = {
    "price": ("price", "homePrice"),
    "expenses": ("expenses", "monthlyExpenses"),
    "downpayment": ("downpayment", "dpAmt"),
    "creditScore": ("creditScore", "score"),
    "termYears": ("termYears",),
    "loanType": ("loanType",),
    "income": ("income", "monthlyIncome"),
    "taxRate": ("taxRate",),
    "insuranceAnnual": ("insuranceAnnual",),
    "hoaMonthly": ("hoaMonthly",),
}

PROFILE_INCOME_ALIASES = ("income", "monthly_income")

# Fields where zero or a negative number means "not provided".
POSITIVE_ONLY_FIELDS = {"creditScore", "termYears"}


def as_mapping(value: Any) -> Mapping[str, Any]:
    """Treat anything that isn't a JSON object as an empty one."""
    return value if isinstance(value, Mapping) else {}


def read_snapshot(body: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    """
    Find the upstream financial snapshot in a request body.

    Checks ``context.fad`` first, then the top-level ``fad``,
    ``fad_snapshot`` and ``snapshot`` keys.

    Returns:
        The raw snapshot mapping, or None if the body carries none
    """
    context = as_mapping(body.get("context"))
    if isinstance(context.get("fad"), Mapping):
        return context["fad"]

    for key in SNAPSHOT_LOCATIONS:
        if isinstance(body.get(key), Mapping):
            return body[key]

    return None


def _candidates(
    name: str,
    overrides: Mapping[str, Any],
    snapshot: Mapping[str, Any],
    baseline: Mapping[str, Any],
    profile: Mapping[str, Any],
) -> List[Tuple[Source, Any]]:
    """All candidate values for a field, highest precedence first."""
    candidates: List[Tuple[Source, Any]] = [(Source.OVERRIDES, overrides.get(name))]
    candidates += [(Source.SNAPSHOT, snapshot.get(alias)) for alias in SNAPSHOT_ALIASES[name]]
    candidates += [(Source.SCENARIO, baseline.get(alias)) for alias in BASELINE_ALIASES[name]]
    if name == "income":
        candidates += [(Source.PROFILE, profile.get(alias)) for alias in PROFILE_INCOME_ALIASES]
    return candidates


def _resolve_number(
    name: str,
    candidates: List[Tuple[Source, Any]],
) -> Tuple[Optional[float], Source]:
    for source, raw in candidates:
        number = finite_or_none(raw)
        if number is None:
            continue
        if name in POSITIVE_ONLY_FIELDS and number <= 0:
            continue
        return number, source
    return None, Source.MISSING


def _resolve_text(
    candidates: List[Tuple[Source, Any]],
) -> Tuple[Optional[str], Source]:
    for source, raw in candidates:
        text = pick_first_text(raw)
        if text is not None:
            return text, source
    return None, Source.MISSING


def resolve_scenario(
    body: Mapping[str, Any],
    profile: Optional[Mapping[str, Any]] = None,
    settings: AffordabilitySettings = affordability_settings,
) -> Scenario:
    """
    Build a Scenario from a request body.

    Never raises for bad business data: unparseable or missing values
    simply resolve to None and are recorded as ``missing``.

    Args:
        body: Decoded JSON request body
        profile: Profile used for the income fallback. Defaults to
            ``context.profile`` from the body.
        settings: Affordability settings (uses defaults if not provided)

    Returns:
        The resolved Scenario, with the source of every field recorded
    """
    body = as_mapping(body)
    overrides = as_mapping(body.get("overrides"))
    baseline = as_mapping(body.get("scenario"))
    raw_snapshot = read_snapshot(body)
    snapshot = as_mapping(raw_snapshot)
    if profile is None:
        profile = as_mapping(as_mapping(body.get("context")).get("profile"))

    layers = (overrides, snapshot, baseline, as_mapping(profile))

    values: Dict[str, Optional[float]] = {}
    sources: Dict[str, str] = {}
    for name in SNAPSHOT_ALIASES:
        if name == "loanType":
            continue
        value, source = _resolve_number(name, _candidates(name, *layers))
        values[name] = value
        sources[name] = source.value

    question = pick_first_text(body.get("question"))

    credit_score: Optional[int] = None
    if values["creditScore"] is not None:
        credit_score = int(clamp(
            round_half_up(values["creditScore"]),
            settings.min_credit_score,
            settings.max_credit_score,
        ))
    else:
        hypothetical = parse_hypothetical_credit_score(
            question,
            min_score=settings.min_credit_score,
            max_score=settings.max_credit_score,
        )
        if hypothetical is not None:
            credit_score = hypothetical
            sources["creditScore"] = Source.QUESTION_HYPOTHETICAL.value

    if values["termYears"] is not None:
        term_years = int(clamp(
            round_half_up(values["termYears"]),
            settings.min_term_years,
            settings.max_term_years,
        ))
    else:
        term_years = settings.default_term_years
        sources["termYears"] = Source.DEFAULT.value

    loan_type, loan_type_source = _resolve_text(_candidates("loanType", *layers))
    sources["loanType"] = (
        loan_type_source if loan_type is not None else Source.DEFAULT
    ).value

    return Scenario(
        price=values["price"],
        expenses=values["expenses"],
        downpayment=values["downpayment"],
        credit_score=credit_score,
        term_years=term_years,
        loan_type=(loan_type or "conv").lower(),
        income=values["income"],
        tax_rate=values["taxRate"],
        insurance_annual=values["insuranceAnnual"],
        hoa_monthly=values["hoaMonthly"],
        question=question,
        sources=sources,
        snapshot_keys=tuple(str(key) for key in snapshot.keys()),
    )
