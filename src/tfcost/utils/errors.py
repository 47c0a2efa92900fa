"""Custom exception classes for tfcost."""


class TfCostError(Exception):
    """Base exception for all tfcost errors."""
    pass


class StateLoadError(TfCostError):
    """Raised when a Terraform state JSON document cannot be loaded."""
    pass


class PlanLoadError(TfCostError):
    """Raised when a Terraform plan JSON document cannot be loaded or is invalid."""
    pass


class NormalizationError(TfCostError):
    """Raised when a whole document cannot be normalized."""
    pass


class EstimationError(TfCostError):
    """Raised when cost estimation of a state or plan fails."""
    pass


class StateFetchError(TfCostError):
    """Raised when a remote state file cannot be retrieved."""
    pass


class ConfigError(TfCostError):
    """Raised when configuration is invalid or missing."""
    pass
