class PricingError(Exception):
    """Base class for pricing engine failures."""


class PricingDataError(PricingError):
    """Raised when a context that should have been rejected reaches pricing.

    This signals an upstream contract violation (e.g. a long-term booking with
    no home size after validation), not a recoverable pricing ambiguity.
    """


class HourlyPricingUnavailable(PricingError):
    """Remote hourly pricing function could not produce a usable answer."""


class InvalidTransition(PricingError):
    """A modification request was moved out of a terminal state."""
