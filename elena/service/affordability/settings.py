"""
Affordability Settings for the Elena affordability engine.

This module contains every policy constant used by the mortgage estimator,
the quick-rails calculator and the verdict classifier. They can be adjusted
via environment variables without touching the engine code.

Environment variables use the AFFORDABILITY_ prefix:
    AFFORDABILITY_HOUSING_CAP_PCT=0.30
    AFFORDABILITY_PI_BUFFER=1.28
    AFFORDABILITY_APR_TIERS_JSON='[[780,0.0625],[740,0.0675]]'

Usage:
    from elena.service.affordability.settings import affordability_settings

    # Use default settings (loaded from env)
    cap = affordability_settings.housing_cap_pct

    # Or create custom settings for testing
    custom = AffordabilitySettings(housing_cap_pct=0.28)
"""

import json
from functools import lru_cache
from typing import List, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AffordabilitySettings(BaseSettings):
    """
    Configurable policy parameters for the affordability engine.

    All settings can be overridden via environment variables with the
    AFFORDABILITY_ prefix. Money values are whole currency units; rates and
    percentages are fractions (0.30 = 30%).
    """

    model_config = SettingsConfigDict(
        env_prefix="AFFORDABILITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Housing Cap & Quick Rails ===
    housing_cap_pct: float = Field(
        default=0.30,
        gt=0.0,
        le=1.0,
        description="Fraction of gross monthly income allowed for all-in housing",
    )
    pi_buffer: float = Field(
        default=1.28,
        ge=1.0,
        description="All-in to P&I ratio used to back P&I out of the housing cap",
    )
    five_down_fraction: float = Field(
        default=0.95,
        gt=0.0,
        le=1.0,
        description="Loan-to-price ratio for the 5% down quick-rails price",
    )

    # === Verdict Cushions ===
    cushion_low_pct: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Residual below income * this is a thin buffer (CAUTION)",
    )
    cushion_good_pct: float = Field(
        default=0.12,
        ge=0.0,
        le=1.0,
        description="Residual at or above income * this qualifies for grade A",
    )

    # === Grade Thresholds (housing ratio) ===
    grade_a_max_ratio: float = Field(default=0.25, gt=0.0, le=1.0)
    grade_a_minus_max_ratio: float = Field(default=0.28, gt=0.0, le=1.0)
    grade_b_plus_max_ratio: float = Field(default=0.30, gt=0.0, le=1.0)

    # === Mortgage Placeholders ===
    default_tax_rate: float = Field(
        default=0.020,
        ge=0.0,
        lt=1.0,
        description="Annual property tax rate used when the scenario has none",
    )
    default_insurance_annual: float = Field(
        default=2400.0,
        ge=0.0,
        description="Annual homeowner's insurance used when the scenario has none",
    )
    default_hoa_monthly: float = Field(
        default=0.0,
        ge=0.0,
        description="Monthly HOA dues used when the scenario has none",
    )

    # === Term & Score Bounds ===
    default_term_years: int = Field(default=30, ge=1)
    min_term_years: int = Field(default=10, ge=1)
    max_term_years: int = Field(default=40, ge=1)
    min_credit_score: int = Field(default=300)
    max_credit_score: int = Field(default=850)

    # === Next Action ===
    price_rounding_step: int = Field(
        default=1000,
        gt=0,
        description="Suggested lower prices are rounded to the nearest multiple of this",
    )

    # === APR Tiers ===
    default_apr: float = Field(
        default=0.070,
        ge=0.0,
        lt=1.0,
        description="APR assumed when no credit score is known",
    )
    apr_tiers_json: str = Field(
        default="[[780,0.0625],[740,0.0675],[700,0.0725],[660,0.08],[300,0.09]]",
        description="APR tiers as JSON array: [[min_score, apr], ...]",
    )

    @field_validator("apr_tiers_json")
    @classmethod
    def validate_tiers_json(cls, v: str) -> str:
        """Validate that tiers JSON is parseable and well-formed."""
        try:
            tiers = json.loads(v)
            if not isinstance(tiers, list) or not tiers:
                raise ValueError("Tiers must be a non-empty list")
            for tier in tiers:
                if not isinstance(tier, list) or len(tier) != 2:
                    raise ValueError("Each tier must be [min_score, apr]")
                min_score, apr = tier
                if not isinstance(min_score, int) or isinstance(min_score, bool):
                    raise ValueError("min_score must be an integer")
                if not 300 <= min_score <= 850:
                    raise ValueError(f"min_score out of range: {min_score}")
                if not isinstance(apr, (int, float)) or not 0 <= apr < 1:
                    raise ValueError(f"apr must be a fraction in [0, 1): {apr}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        return v

    @property
    def apr_tiers(self) -> List[Tuple[int, float]]:
        """APR tiers ordered from the highest minimum score down."""
        tiers = json.loads(self.apr_tiers_json)
        return sorted(
            ((int(min_score), float(apr)) for min_score, apr in tiers),
            key=lambda tier: tier[0],
            reverse=True,
        )


@lru_cache
def get_affordability_settings() -> AffordabilitySettings:
    """Get cached affordability settings instance."""
    return AffordabilitySettings()


affordability_settings = get_affordability_settings()
