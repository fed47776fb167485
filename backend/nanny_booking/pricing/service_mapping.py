"""Translate raw client preferences into a :class:`ServiceSelection`.

Long-term and short-term booking flows send differently shaped payloads:
add-ons arrive as booleans while household chores arrive as a list of tags
under ``householdSupport``. Both are folded into the same flag set here and
nothing downstream looks at the raw payload again.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .types import DurationType, ServiceSelection

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "true", "yes", "on", "y"}

# flag -> accepted payload keys
_FLAG_KEYS: dict[str, tuple[str, ...]] = {
    "cooking": ("cooking",),
    "special_needs": ("specialNeeds", "special_needs", "diverseAbility", "diverse_ability"),
    "driving_support": ("drivingSupport", "driving_support", "driving"),
    "pet_care": ("petCare", "pet_care"),
    "ecd_training": ("ecdTraining", "ecd_training"),
    "montessori": ("montessori",),
    "backup_nanny": ("backupNanny", "backup_nanny"),
}

_SHORT_TERM_FLAGS = ("cooking", "special_needs", "driving_support", "pet_care")

_HOUSEKEEPING_TAGS = {"light_housekeeping", "housekeeping"}
_ERRAND_TAGS = {"errand_runs", "errands"}


def _truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def _read(raw: Any, key: str) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(key)
    return getattr(raw, key, None)


def _flag(raw: Any, name: str) -> bool:
    return any(_truthy(_read(raw, key)) for key in _FLAG_KEYS[name])


def _household_tags(raw: Any) -> set[str]:
    items = _read(raw, "householdSupport")
    if items is None:
        items = _read(raw, "household_support")
    if isinstance(items, str):
        items = [items]
    if not isinstance(items, (list, tuple, set, frozenset)):
        return set()
    return {str(item).strip().lower().replace("-", "_").replace(" ", "_") for item in items if item}


def map_services(raw: Any, mode: DurationType | str | None) -> ServiceSelection:
    """Return the normalized service flags for ``raw``.

    Never raises: missing or unrecognized fields map to ``False``. Short-term
    payloads only carry a subset of the flags; the rest stay ``False``.
    """
    if raw is None:
        return ServiceSelection()
    duration = DurationType.parse(mode) or DurationType.SHORT_TERM
    tags = _household_tags(raw)
    light_housekeeping = bool(tags & _HOUSEKEEPING_TAGS)
    errand_runs = bool(tags & _ERRAND_TAGS)

    if duration is DurationType.LONG_TERM:
        flags = {name: _flag(raw, name) for name in _FLAG_KEYS}
    else:
        flags = {name: _flag(raw, name) for name in _SHORT_TERM_FLAGS}

    selection = ServiceSelection(
        light_housekeeping=light_housekeeping,
        errand_runs=errand_runs,
        **flags,
    )
    logger.debug("Mapped services", extra={"mode": duration.value, "services": selection.selected()})
    return selection


_SERVICE_ALIASES: dict[str, str] = {
    **{alias.lower(): name for name, aliases in _FLAG_KEYS.items() for alias in aliases},
    **{tag: "light_housekeeping" for tag in _HOUSEKEEPING_TAGS},
    **{tag: "errand_runs" for tag in _ERRAND_TAGS},
    "lighthousekeeping": "light_housekeeping",
    "errandruns": "errand_runs",
}


def canonical_service_key(key: str) -> str:
    """Map a camelCase, snake_case or legacy service name onto its flag name.

    Unrecognized names come back stripped but otherwise unchanged.
    """
    text = str(key).strip()
    return _SERVICE_ALIASES.get(text.lower().replace("-", "_").replace(" ", "_"), text)
