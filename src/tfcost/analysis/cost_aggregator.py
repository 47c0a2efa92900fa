"""Aggregate cost estimates into a categorized summary."""

from typing import Iterable, List, Tuple
from ..contracts.cost import CostEstimate, CostSummary, CostBreakdown
from ..utils.logging import get_logger

logger = get_logger("analysis.cost_aggregator")

# (substrings, category) tested top to bottom; the first match wins
CATEGORY_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("instance", "compute"), "compute"),
    (("ebs", "storage", "bucket"), "storage"),
    (("lb", "nat", "vpc"), "network"),
    (("rds", "sql", "database"), "database"),
)

DEFAULT_CATEGORY = "other"


def categorize_resource_type(resource_type: str) -> str:
    """
    Assign a resource type to exactly one cost category.

    Precedence matters: google_sql_database_instance contains "instance" and
    is therefore compute, not database.
    """
    for substrings, category in CATEGORY_RULES:
        if any(s in resource_type for s in substrings):
            return category
    return DEFAULT_CATEGORY


def aggregate_costs(estimates: Iterable[CostEstimate]) -> CostSummary:
    """
    Reduce cost estimates to totals and a category breakdown.

    Args:
        estimates: Billable resource estimates (unmodelled resources already excluded)

    Returns:
        CostSummary whose breakdown sums to the monthly total
    """
    estimate_list: List[CostEstimate] = list(estimates)
    buckets = {"compute": 0.0, "storage": 0.0, "network": 0.0, "database": 0.0, "other": 0.0}
    total_monthly = 0.0
    total_hourly = 0.0

    for estimate in estimate_list:
        total_monthly += estimate.monthly_cost
        total_hourly += estimate.hourly_cost
        buckets[categorize_resource_type(estimate.resource_type)] += estimate.monthly_cost

    logger.debug(f"Aggregated {len(estimate_list)} estimates: {total_monthly:.2f}/month")

    return CostSummary(
        total_monthly_cost=total_monthly,
        total_hourly_cost=total_hourly,
        resource_count=len(estimate_list),
        estimates=estimate_list,
        breakdown=CostBreakdown(**buckets),
    )
