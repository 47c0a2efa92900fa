"""tfcost - Terraform state and plan cost estimation."""

from typing import Dict, Any, Optional
from .ingest.loader import load_state_json, load_plan_json
from .ingest.state_normalizer import normalize_state
from .ingest.plan_normalizer import normalize_plan
from .analysis.state_costs import estimate_state_costs, estimate_planned_costs
from .config import load_config, get_pricing_catalog
from .utils.logging import setup_logging, get_logger
from .utils.errors import TfCostError, EstimationError

__version__ = "0.1.0"

__all__ = ["estimate_state", "compare_plan"]

setup_logging()
logger = get_logger("tfcost")


def estimate_state(state_json_path: str, config_path: Optional[str] = None, format_human: bool = False) -> Dict[str, Any]:
    """Estimate monthly and hourly costs of the resources in a Terraform state file."""
    try:
        logger.info(f"Estimating costs of state: {state_json_path}")

        catalog = get_pricing_catalog(load_config(config_path))
        state = normalize_state(load_state_json(state_json_path))
        summary = estimate_state_costs(state, catalog)

        if format_human:
            from .presentation.human_formatter import format_cost_summary
            return {"formatted": format_cost_summary(summary), "structured": summary.model_dump(by_alias=True)}

        return summary.model_dump(by_alias=True)

    except TfCostError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during estimation: {e}", exc_info=True)
        raise EstimationError(f"Estimation failed: {e}") from e


def compare_plan(
    plan_json_path: str,
    state_json_path: Optional[str] = None,
    config_path: Optional[str] = None,
    format_human: bool = False,
) -> Dict[str, Any]:
    """Compare current costs with the costs after applying a Terraform plan."""
    try:
        logger.info(f"Comparing plan costs: {plan_json_path}")

        catalog = get_pricing_catalog(load_config(config_path))
        plan = normalize_plan(load_plan_json(plan_json_path))
        state = normalize_state(load_state_json(state_json_path)) if state_json_path else None
        comparison = estimate_planned_costs(plan, state, catalog)

        if format_human:
            from .presentation.human_formatter import format_cost_comparison
            return {"formatted": format_cost_comparison(comparison), "structured": comparison.model_dump(by_alias=True)}

        return comparison.model_dump(by_alias=True)

    except TfCostError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during comparison: {e}", exc_info=True)
        raise EstimationError(f"Comparison failed: {e}") from e
