from .cost import (
    Confidence,
    CloudProvider,
    CostEstimate,
    CostBreakdown,
    CostSummary,
    CostDifference,
    ChangedResources,
    CostComparison,
)

__all__ = [
    "Confidence",
    "CloudProvider",
    "CostEstimate",
    "CostBreakdown",
    "CostSummary",
    "CostDifference",
    "ChangedResources",
    "CostComparison",
]
