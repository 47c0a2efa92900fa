"""Translate Terraform plan JSON into resource changes and a plan summary."""

import json
from typing import Dict, Any, List, Optional
from .models import ResourceAction, ResourceChange, PlanSummary, TerraformPlan
from .validator import validate_plan_structure
from ..utils.errors import PlanLoadError
from ..utils.logging import get_logger

logger = get_logger("ingest.plan_normalizer")

_VALID_ACTIONS = {action.value for action in ResourceAction}


def extract_provider_from_type(resource_type: str) -> str:
    """Provider name is the text before the first underscore of the resource type."""
    return resource_type.split("_")[0] or "unknown"


def extract_module_from_address(address: str) -> Optional[str]:
    """
    Extract the module name from a resource address.

    Examples:
        "module.vpc.aws_subnet.private" -> "vpc"
        "aws_instance.web" -> None
    """
    if "module." not in address:
        return None
    parts = address.split(".")
    for index, part in enumerate(parts):
        if part == "module":
            if index + 1 < len(parts):
                return parts[index + 1]
            return None
    return None


def _normalize_action(actions: Any) -> ResourceAction:
    """
    Reduce a Terraform action list to its first action.

    Replacements are reported by Terraform as ["delete", "create"] or
    ["create", "delete"]; the first entry is kept.
    """
    if not isinstance(actions, list) or not actions:
        return ResourceAction.NO_OP
    first = actions[0]
    if first not in _VALID_ACTIONS:
        logger.debug(f"Unrecognized plan action {first!r}, treating as no-op")
        return ResourceAction.NO_OP
    return ResourceAction(first)


def _extract_change_entries(plan_data: Dict[str, Any]) -> List[Any]:
    resource_changes = plan_data.get("resource_changes")
    if isinstance(resource_changes, list):
        return resource_changes
    planned_values = plan_data.get("planned_values")
    root_module = planned_values.get("root_module") if isinstance(planned_values, dict) else None
    resources = root_module.get("resources") if isinstance(root_module, dict) else None
    return resources if isinstance(resources, list) else []


def _mapping_or_none(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


def extract_resource_changes(plan_data: Dict[str, Any]) -> List[ResourceChange]:
    """
    Extract managed-resource changes from plan data.

    Reads `resource_changes`, falling back to `planned_values.root_module.resources`.
    Data sources are skipped; malformed entries are skipped with a warning.

    Args:
        plan_data: Raw Terraform plan JSON dictionary

    Returns:
        List of ResourceChange in plan order
    """
    changes: List[ResourceChange] = []

    for entry in _extract_change_entries(plan_data):
        if not isinstance(entry, dict):
            logger.warning(f"Skipping malformed resource change: {entry!r}")
            continue
        if entry.get("mode") == "data":
            continue

        try:
            address = entry.get("address") or ""
            resource_type = entry.get("type") or ""
            change = entry.get("change") or {}

            changes.append(ResourceChange(
                address=address,
                type=resource_type,
                name=entry.get("name") or "",
                provider=entry.get("provider_name") or extract_provider_from_type(resource_type),
                action=_normalize_action(change.get("actions")),
                before_values=_mapping_or_none(change.get("before")),
                after_values=_mapping_or_none(change.get("after")),
                module=extract_module_from_address(address),
            ))
        except Exception as e:
            logger.warning(f"Failed to normalize resource change {entry.get('address', 'unknown')}: {e}")
            continue

    return changes


def generate_plan_summary(changes: List[ResourceChange]) -> PlanSummary:
    """Count planned creates, updates and deletes."""
    summary = PlanSummary(total=len(changes))
    for change in changes:
        if change.action == ResourceAction.CREATE:
            summary.add += 1
        elif change.action == ResourceAction.UPDATE:
            summary.change += 1
        elif change.action == ResourceAction.DELETE:
            summary.destroy += 1
    return summary


def changed_attribute_keys(change: ResourceChange) -> List[str]:
    """Keys present before or after the change whose values differ."""
    before = change.before_values or {}
    after = change.after_values or {}
    keys = list(dict.fromkeys([*before.keys(), *after.keys()]))
    return [key for key in keys if before.get(key) != after.get(key)]


def normalize_plan(plan_data: Dict[str, Any]) -> TerraformPlan:
    """
    Normalize Terraform plan JSON (`terraform show -json plan.tfplan`).

    Args:
        plan_data: Raw Terraform plan JSON dictionary

    Returns:
        TerraformPlan with resource changes, summary and the raw plan

    Raises:
        PlanLoadError: If the plan document is not a JSON object
    """
    validate_plan_structure(plan_data)

    changes = extract_resource_changes(plan_data)
    summary = generate_plan_summary(changes)

    logger.info(
        f"Normalized {summary.total} resource changes from plan "
        f"(+{summary.add} ~{summary.change} -{summary.destroy})"
    )

    return TerraformPlan(
        format_version=str(plan_data.get("format_version") or "unknown"),
        terraform_version=plan_data.get("terraform_version") or "unknown",
        resource_changes=changes,
        summary=summary,
        raw_plan=plan_data,
    )


def parse_plan_json(json_text: str) -> TerraformPlan:
    """
    Parse a Terraform plan from JSON text.

    Raises:
        PlanLoadError: If the text is not a valid Terraform plan JSON document
    """
    try:
        plan_data = json.loads(json_text)
        return normalize_plan(plan_data)
    except (json.JSONDecodeError, PlanLoadError) as e:
        logger.error(f"Error parsing JSON plan: {e}")
        raise PlanLoadError("Invalid Terraform plan JSON format") from e
