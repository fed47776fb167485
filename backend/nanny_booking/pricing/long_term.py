"""Monthly pricing for indefinite-duration (long-term) placements."""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from . import rates
from .errors import PricingDataError
from .types import DurationType, PricingContext, PricingResult, ServiceFee, ServiceSelection

logger = logging.getLogger(__name__)

_AGE_RE = re.compile(
    r"^\s*(?P<value>\d+(?:[.,]\d+)?)\s*(?P<unit>months?|mos?|m|years?|yrs?|y)?\b",
    re.IGNORECASE,
)
_MONTHS_PER_YEAR = Decimal("12")


def parse_age_years(descriptor: str) -> Optional[Decimal]:
    """Parse a free-text age ("4", "4 years", "18 months", "6mo") into years.

    Returns ``None`` when the descriptor carries no leading number.
    """
    match = _AGE_RE.match(str(descriptor or ""))
    if not match:
        return None
    try:
        value = Decimal(match.group("value").replace(",", "."))
    except InvalidOperation:
        return None
    unit = (match.group("unit") or "").lower()
    if unit.startswith("m"):
        return value / _MONTHS_PER_YEAR
    return value


def count_children(children_ages: Iterable[str]) -> tuple[int, list[str]]:
    """Return the number of children aged 18 or younger and unparseable descriptors."""
    count = 0
    unparsed: list[str] = []
    for descriptor in children_ages:
        years = parse_age_years(descriptor)
        if years is None:
            unparsed.append(str(descriptor))
            continue
        if years <= rates.CHILD_MAX_AGE_YEARS:
            count += 1
    return count, unparsed


def dependent_surcharges(children: int, other_dependents: int) -> list[ServiceFee]:
    """Surcharge lines for children beyond the 3rd and dependents beyond the 2nd."""
    lines: list[ServiceFee] = []
    extra_children = max(0, children - rates.CHILD_SURCHARGE_THRESHOLD)
    if extra_children:
        lines.append(
            ServiceFee(
                name=f"Additional Children ({extra_children})",
                amount=rates.CHILD_SURCHARGE_AMOUNT * extra_children,
            )
        )
    extra_dependents = max(0, other_dependents - rates.DEPENDENT_SURCHARGE_THRESHOLD)
    if extra_dependents:
        lines.append(
            ServiceFee(
                name=f"Additional Dependents ({extra_dependents})",
                amount=rates.DEPENDENT_SURCHARGE_AMOUNT * extra_dependents,
            )
        )
    return lines


def validate_long_term(context: PricingContext) -> list[str]:
    missing: list[str] = []
    if context.home_size is None:
        missing.append("homeSize")
    if context.living_arrangement is None:
        missing.append("livingArrangement")
    return missing


def long_term_service_fees(selection: ServiceSelection) -> list[ServiceFee]:
    fees: list[ServiceFee] = []
    for key, (label, amount) in rates.LONG_TERM_SERVICE_FEES.items():
        if getattr(selection, key):
            fees.append(ServiceFee(name=label, amount=amount))
    return fees


def compute_long_term_pricing(selection: ServiceSelection, context: PricingContext) -> PricingResult:
    """Validate and price a long-term booking.

    ``base_rate`` includes dependent surcharges; ``total`` is the recurring
    monthly charge (base plus add-ons). The placement fee is derived from the
    base rate alone and reported separately.
    """
    missing = validate_long_term(context)
    if missing:
        logger.info("Long-term pricing rejected; missing %s", missing)
        return PricingResult.invalid(DurationType.LONG_TERM, missing)
    return price_long_term(selection, context)


def price_long_term(selection: ServiceSelection, context: PricingContext) -> PricingResult:
    """Price an already-validated long-term context.

    Raises :class:`PricingDataError` when the context lacks the home size or
    living arrangement, since validation should have caught that upstream.
    """
    if context.home_size is None or context.living_arrangement is None:
        raise PricingDataError(
            "long-term pricing requires home_size and living_arrangement "
            f"(got {context.home_size!r}, {context.living_arrangement!r})"
        )

    warnings: list[str] = []
    base_rate = rates.monthly_base_rate(context.home_size, context.living_arrangement)

    children, unparsed = count_children(context.children_ages)
    if unparsed:
        warnings.append(f"Ignored unreadable child ages: {', '.join(unparsed)}")
    for line in dependent_surcharges(children, context.other_dependents):
        base_rate += line.amount

    service_fees = long_term_service_fees(selection)
    placement = rates.placement_fee(context.home_size, base_rate)
    add_ons = sum((fee.amount for fee in service_fees), Decimal("0"))
    total = base_rate + add_ons

    return PricingResult(
        base_rate=rates.money(base_rate),
        service_fees=[ServiceFee(fee.name, rates.money(fee.amount)) for fee in service_fees],
        total=rates.money(total),
        label="/month",
        duration_type=DurationType.LONG_TERM,
        placement_fee=rates.money(placement),
        warnings=warnings or None,
    )
