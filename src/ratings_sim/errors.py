from __future__ import annotations


class RatingsSimError(Exception):
    """Base class for rating development failures."""


class ConfigurationError(RatingsSimError, ValueError):
    """A sport strategy or coefficient table is misconfigured."""


class InvariantViolation(RatingsSimError, AssertionError):
    """Should never happen: a development pass reached an impossible state."""


class MissingCapabilityError(RatingsSimError, ValueError):
    """A required argument was not supplied for the configured estimator."""
