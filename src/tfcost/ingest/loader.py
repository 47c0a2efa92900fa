"""Load Terraform state and plan JSON documents from disk."""

import json
from pathlib import Path
from typing import Dict, Any
from ..utils.errors import StateLoadError, PlanLoadError
from ..utils.logging import get_logger
from .validator import validate_plan_structure, validate_state_structure

logger = get_logger("ingest.loader")


def load_state_json(state_path: str) -> Any:
    """
    Load Terraform state JSON file.

    The document shape is not enforced here: unexpected shapes are logged and
    normalize to an empty state downstream.

    Args:
        state_path: Path to Terraform state JSON file (.tfstate or `terraform show -json` output)

    Returns:
        Parsed state data

    Raises:
        StateLoadError: If file cannot be read or is not valid JSON
    """
    path = Path(state_path)

    if not path.exists():
        raise StateLoadError(
            f"State file not found: {state_path}. "
            "Please check the file path and ensure the file exists."
        )

    if not path.is_file():
        raise StateLoadError(f"Path is not a file: {state_path}.")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            state_data = json.load(f)
    except json.JSONDecodeError as e:
        raise StateLoadError(f"Invalid JSON in state file: {e}")
    except OSError as e:
        raise StateLoadError(
            f"Error reading state file: {e}. "
            "Please check file permissions and try again."
        )

    for warning in validate_state_structure(state_data):
        logger.warning(f"{state_path}: {warning}")

    logger.info(f"Loaded Terraform state from {state_path}")
    return state_data


def load_plan_json(plan_path: str) -> Dict[str, Any]:
    """
    Load and validate Terraform plan JSON file.

    Args:
        plan_path: Path to Terraform plan JSON file

    Returns:
        Parsed and validated plan data

    Raises:
        PlanLoadError: If file cannot be loaded or is invalid
    """
    path = Path(plan_path)

    if not path.exists():
        raise PlanLoadError(
            f"Plan file not found: {plan_path}. "
            "Please check the file path and ensure the file exists. "
            "Generate a plan using: terraform show -json plan.tfplan > plan.json"
        )

    if not path.is_file():
        raise PlanLoadError(
            f"Path is not a file: {plan_path}. "
            "Please provide a valid Terraform plan JSON file."
        )

    if path.suffix.lower() != ".json":
        raise PlanLoadError(
            "Binary .tfplan files cannot be parsed directly. "
            "Please convert to JSON using: terraform show -json plan.tfplan > plan.json"
        )

    try:
        with open(path, 'r', encoding='utf-8') as f:
            plan_data = json.load(f)
    except json.JSONDecodeError as e:
        raise PlanLoadError(
            f"Invalid JSON in plan file: {e}. "
            "Generate a plan using: terraform show -json plan.tfplan > plan.json"
        )
    except OSError as e:
        raise PlanLoadError(
            f"Error reading plan file: {e}. "
            "Please check file permissions and try again."
        )

    try:
        validate_plan_structure(plan_data)
    except PlanLoadError as e:
        raise PlanLoadError(f"Invalid Terraform plan structure: {e}")

    logger.info(
        f"Loaded Terraform plan from {plan_path} "
        f"(terraform: {plan_data.get('terraform_version', 'unknown')}, "
        f"changes: {len(plan_data.get('resource_changes') or [])})"
    )

    return plan_data
