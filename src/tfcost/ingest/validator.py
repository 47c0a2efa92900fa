"""Validate Terraform state and plan JSON structure."""

from typing import Dict, Any, List
from ..utils.errors import PlanLoadError
from ..utils.logging import get_logger

logger = get_logger("ingest.validator")


def validate_plan_structure(plan_data: Any) -> None:
    """
    Validate Terraform plan JSON structure.

    Only the top-level shape is checked. Individual resource changes are
    validated leniently during normalization.

    Args:
        plan_data: Parsed Terraform plan JSON

    Raises:
        PlanLoadError: If plan structure is invalid
    """
    if not isinstance(plan_data, dict):
        raise PlanLoadError(
            "Plan JSON must be an object. "
            "Please ensure you're using a valid Terraform plan JSON file."
        )

    resource_changes = plan_data.get("resource_changes")
    if resource_changes is not None and not isinstance(resource_changes, list):
        raise PlanLoadError(
            "Plan 'resource_changes' must be a list. "
            "This may not be a valid Terraform plan JSON file."
        )

    terraform_version = plan_data.get("terraform_version")
    if terraform_version and not isinstance(terraform_version, str):
        raise PlanLoadError(
            "Plan 'terraform_version' must be a string. "
            "This may not be a valid Terraform plan JSON file."
        )

    if resource_changes is None and not _has_planned_resources(plan_data):
        logger.warning(
            "Plan JSON has neither 'resource_changes' nor 'planned_values'. "
            "This may be an empty plan with no changes."
        )

    logger.debug("Plan structure validation passed")


def validate_state_structure(state_data: Any) -> List[str]:
    """
    Check Terraform state JSON structure without failing.

    State documents come in several shapes (legacy state, `terraform show -json`).
    Problems are reported as warnings; normalization still degrades to an empty state.

    Args:
        state_data: Parsed Terraform state JSON

    Returns:
        List of validation warnings (empty if valid)
    """
    warnings = []

    if not isinstance(state_data, dict):
        warnings.append("State JSON must be an object")
        return warnings

    resources = state_data.get("resources")
    values = state_data.get("values")
    root_module = values.get("root_module") if isinstance(values, dict) else None
    root_resources = root_module.get("resources") if isinstance(root_module, dict) else None

    if resources is None and root_resources is None:
        warnings.append("State JSON has no 'resources' or 'values.root_module.resources'")
    elif resources is not None and not isinstance(resources, list):
        warnings.append("State 'resources' must be a list")

    if "version" not in state_data and "format_version" not in state_data:
        warnings.append("State JSON missing 'version' and 'format_version'")

    return warnings


def _has_planned_resources(plan_data: Dict[str, Any]) -> bool:
    planned_values = plan_data.get("planned_values")
    if not isinstance(planned_values, dict):
        return False
    root_module = planned_values.get("root_module")
    return isinstance(root_module, dict) and isinstance(root_module.get("resources"), list)
