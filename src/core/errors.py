"""Exception types raised by the computation core."""


class ImpactSimError(Exception):
    """Base class for all simulator errors."""
    pass


class ComputationError(ImpactSimError):
    """Raised when a computation produces non-finite numbers."""
    pass


class ConfigError(ImpactSimError):
    """Raised when a configuration file cannot be interpreted."""
    pass
