"""Cost entry points for canonical states and parsed plans."""

from typing import Optional
from ..contracts.cost import CostSummary, CostComparison
from ..ingest.models import TerraformState, TerraformPlan
from ..pricing.catalog import PricingCatalog
from ..utils.logging import get_logger
from .cost_aggregator import aggregate_costs
from .cost_estimator import estimate_resource_cost
from .plan_diff import compare_plan_costs

logger = get_logger("analysis.state_costs")


def estimate_state_costs(state: TerraformState, catalog: Optional[PricingCatalog] = None) -> CostSummary:
    """
    Estimate costs for every resource of a canonical state.

    Resources are addressed as `type.name`; unmodelled resources are excluded.
    """
    estimates = []
    for resource in state.resources:
        estimate = estimate_resource_cost(
            resource.type,
            resource.attributes,
            resource_address=f"{resource.type}.{resource.name}",
            resource_name=resource.name,
            catalog=catalog,
        )
        if estimate is not None:
            estimates.append(estimate)

    summary = aggregate_costs(estimates)
    logger.info(
        f"Estimated {summary.resource_count} of {len(state.resources)} resources: "
        f"{summary.total_monthly_cost:.2f}/month"
    )
    return summary


def estimate_planned_costs(
    plan: TerraformPlan,
    state: Optional[TerraformState] = None,
    catalog: Optional[PricingCatalog] = None,
) -> CostComparison:
    """Compare the current state's costs (empty when absent) with the plan's outcome."""
    baseline = estimate_state_costs(state, catalog) if state is not None else CostSummary.empty()
    return compare_plan_costs(plan.resource_changes, baseline, catalog)
