"""Replay plan changes against a baseline to compute the planned cost delta."""

from typing import Dict, Iterable, Optional
from ..contracts.cost import CostEstimate, CostSummary, CostComparison, CostDifference, ChangedResources
from ..ingest.models import ResourceAction, ResourceChange
from ..pricing.catalog import PricingCatalog
from ..utils.logging import get_logger
from .cost_aggregator import aggregate_costs
from .cost_estimator import estimate_resource_cost

logger = get_logger("analysis.plan_diff")


def _estimate_change(change: ResourceChange, catalog: Optional[PricingCatalog]) -> Optional[CostEstimate]:
    return estimate_resource_cost(
        change.type,
        change.after_values or {},
        resource_address=change.address,
        resource_name=change.name,
        catalog=catalog,
    )


def percentage_change(current_total: float, planned_total: float) -> float:
    """Signed percentage change; 0 when the current total is 0."""
    if current_total <= 0:
        return 0.0
    return (planned_total - current_total) / current_total * 100


def compare_plan_costs(
    changes: Iterable[ResourceChange],
    baseline: Optional[CostSummary] = None,
    catalog: Optional[PricingCatalog] = None,
) -> CostComparison:
    """
    Compute planned costs by replaying plan changes over baseline estimates.

    - create: estimate from after values, insert at the address, record as added
    - delete: remove an existing address, record the previous estimate as removed
    - update: estimate from after values, replace at the address, record as modified
    - read / no-op: ignored

    A delete for an address that was never billed is a no-op. Changes whose
    resources cannot be priced are not recorded.

    Args:
        changes: Plan resource changes in plan order
        baseline: Current cost summary (default: empty)
        catalog: Pricing catalog (default: built-in catalog)

    Returns:
        CostComparison of baseline versus planned costs
    """
    current = baseline if baseline is not None else CostSummary.empty()

    planned_map: Dict[str, CostEstimate] = {e.resource_address: e for e in current.estimates}
    changed = ChangedResources()

    for change in changes:
        address = change.address

        if change.action == ResourceAction.CREATE:
            estimate = _estimate_change(change, catalog)
            if estimate is not None:
                planned_map[address] = estimate
                changed.added.append(estimate)

        elif change.action == ResourceAction.DELETE:
            existing = planned_map.pop(address, None)
            if existing is not None:
                changed.removed.append(existing)
            else:
                logger.debug(f"Delete of unbilled resource {address} ignored")

        elif change.action == ResourceAction.UPDATE:
            estimate = _estimate_change(change, catalog)
            if estimate is not None:
                planned_map[address] = estimate
                changed.modified.append(estimate)

    planned = aggregate_costs(planned_map.values())
    difference = CostDifference(
        monthly=planned.total_monthly_cost - current.total_monthly_cost,
        percentage=percentage_change(current.total_monthly_cost, planned.total_monthly_cost),
    )

    logger.info(
        f"Plan cost delta: {difference.monthly:+.2f}/month "
        f"(+{len(changed.added)} ~{len(changed.modified)} -{len(changed.removed)})"
    )

    return CostComparison(
        current=current,
        planned=planned,
        difference=difference,
        changed_resources=changed,
    )
