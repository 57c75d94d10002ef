class RedistributionError(ValueError):
    """Base class for redistribution failures."""


class RedistributionConfigError(RedistributionError):
    """Inconsistent or malformed redistribution parameters."""


class RedistributionResultError(RedistributionError):
    """A redistributed schedule that breaks its column or row invariants."""
