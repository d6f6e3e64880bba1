"""Affordability service - orchestrates the affordability check use case."""

import hashlib
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import structlog

from elena.core.config import settings as app_settings
from elena.domain.entities import Profile, normalize_email
from elena.domain.exceptions import (
    InvalidAffordabilityRequestException,
    ProfileStoreException,
)
from elena.domain.interfaces import ProfileStore
from elena.application.dto import AffordabilityRequest, AffordabilityResponse
from elena.application.dto.affordability import (
    inputs_used_to_dict,
    mortgage_source,
    mortgage_to_dict,
    next_action_to_dict,
    quick_to_dict,
    verdict_to_dict,
)
from elena.service.affordability import (
    AffordabilityResult,
    AffordabilitySettings,
    affordability_settings,
    evaluate,
    explain_result,
    resolve_scenario,
)
from elena.service.affordability.resolver import as_mapping

logger = structlog.get_logger(__name__)

PROFILE_SOURCE_FOUND = "supabase:profiles"
PROFILE_SOURCE_EMPTY = "supabase:empty"
PROFILE_SOURCE_FAILED = "supabase:failed"
PROFILE_SOURCE_UNCONFIGURED = "supabase_env_missing"
PROFILE_SOURCE_CONTEXT = "context.profile"
PROFILE_SOURCE_NONE = "none"


@dataclass(frozen=True)
class ProfileLookup:
    """Outcome of the profile lookup; failures are data, not errors."""
    profile: Optional[Profile]
    source: str
    error: Optional[str] = None


def make_scenario_id(email: Optional[str], ts: int) -> str:
    """Stable id for one evaluation: elena_ + 16 hex chars of sha256."""
    digest = hashlib.sha256(f"{email or 'anon'}:{ts}".encode("utf-8")).hexdigest()
    return "elena_" + digest[:16]


def resolve_email(body: Mapping[str, Any]) -> Optional[str]:
    """First usable email among the accepted request placements."""
    context = as_mapping(body.get("context"))
    candidates = (
        body.get("email"),
        as_mapping(body.get("identity")).get("email"),
        context.get("email"),
        as_mapping(context.get("profile")).get("email"),
    )
    for candidate in candidates:
        if candidate is None or candidate == "":
            continue
        # Only the first non-empty placement counts, valid or not
        return normalize_email(candidate)
    return None


class AffordabilityService:
    """
    Application service for the affordability check use case.
    """

    def __init__(
        self,
        profile_store: Optional[ProfileStore],
        settings: AffordabilitySettings = affordability_settings,
    ):
        self._profile_store = profile_store
        self._settings = settings

    async def assess(self, request: AffordabilityRequest) -> AffordabilityResponse:
        """
        Run an affordability check.

        Args:
            request: The request with the raw JSON body

        Returns:
            AffordabilityResponse; missing business data never raises

        Raises:
            InvalidAffordabilityRequestException: If the body isn't an object
        """
        errors = request.validate()
        if errors:
            raise InvalidAffordabilityRequestException("; ".join(errors))

        body = request.body
        email = resolve_email(body)

        log = logger.bind(email=email)
        log.info("affordability_requested", has_question=bool(body.get("question")))

        lookup = await self._lookup_profile(email, body)

        # Stored profiles carry no income; only context.profile does
        scenario = resolve_scenario(body, settings=self._settings)
        result = evaluate(scenario, self._settings)

        log.info(
            "affordability_evaluated",
            status=result.verdict.status.value,
            grade=result.verdict.grade.value,
            next_action=result.next_action.type.value,
            mortgage=mortgage_source(result),
            missing_inputs=result.missing_inputs,
        )

        return self._build_response(request, email, lookup, result)

    async def _lookup_profile(
        self,
        email: Optional[str],
        body: Mapping[str, Any],
    ) -> ProfileLookup:
        """
        Find the profile for this request.

        Tries the profile store when an email is known, then falls back to
        an inline ``context.profile``.
        """
        lookup = ProfileLookup(profile=None, source=PROFILE_SOURCE_NONE)

        if email:
            if self._profile_store is None:
                lookup = ProfileLookup(
                    profile=None,
                    source=PROFILE_SOURCE_UNCONFIGURED,
                    error="Missing SUPABASE_URL or SUPABASE_SERVICE_KEY",
                )
            else:
                try:
                    profile = await self._profile_store.get_by_email(email)
                    lookup = ProfileLookup(
                        profile=profile,
                        source=PROFILE_SOURCE_FOUND if profile else PROFILE_SOURCE_EMPTY,
                    )
                except ProfileStoreException as e:
                    logger.warning(
                        "profile_lookup_failed",
                        email=email,
                        code=e.code,
                        error=e.message,
                    )
                    lookup = ProfileLookup(
                        profile=None,
                        source=PROFILE_SOURCE_FAILED,
                        error=e.message,
                    )

        if lookup.profile is None:
            context_profile = as_mapping(body.get("context")).get("profile")
            if isinstance(context_profile, Mapping):
                lookup = ProfileLookup(
                    profile=Profile.from_mapping(context_profile),
                    source=PROFILE_SOURCE_CONTEXT,
                    error=lookup.error,
                )

        return lookup

    def _profile_used(
        self,
        email: Optional[str],
        profile: Optional[Profile],
    ) -> Optional[Dict[str, Any]]:
        if profile is None:
            return {"email": email} if email else None
        return {
            "email": profile.email or email,
            "first_name": profile.display_first_name,
            "last_name": profile.last_name,
            "full_name": profile.display_full_name,
            "phone": profile.phone,
            "mode": profile.mode,
            "notes": profile.notes,
        }

    def _build_response(
        self,
        request: AffordabilityRequest,
        email: Optional[str],
        lookup: ProfileLookup,
        result: AffordabilityResult,
    ) -> AffordabilityResponse:
        ts = int(time.time())
        scenario = result.scenario
        profile_used = self._profile_used(email, lookup.profile)

        debug = None
        if request.debug_enabled:
            debug = {
                "allow_origins_count": len(app_settings.allow_origins_list),
                "profile_error": lookup.error,
                "snapshot_keys": list(scenario.snapshot_keys[:60]),
                "credit_score_source": scenario.source_of("creditScore"),
                "computed_apr_assumed": result.apr_assumed,
            }

        return AffordabilityResponse(
            ok=True,
            scenario_id=make_scenario_id(email, ts),
            ts=ts,
            email=email,
            profile_used=profile_used,
            intent="user_question" if scenario.question else "affordability_check",
            question=scenario.question,
            missing_inputs=result.missing_inputs,
            inputs_used=inputs_used_to_dict(
                result,
                self._settings,
                email_source="request" if email else "missing",
                profile_source=lookup.source,
            ),
            quick=quick_to_dict(result.quick),
            mortgage=mortgage_to_dict(result),
            verdict=verdict_to_dict(result.verdict),
            next_action=next_action_to_dict(result.next_action),
            summary=explain_result(result, self._settings),
            context={
                "snapshot_ok": scenario.has_snapshot,
                "profile_ok": profile_used is not None,
            },
            debug=debug,
        )
