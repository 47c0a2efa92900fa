"""CI/CD artifact generation from a CostComparison."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict
from ..contracts.cost import CostComparison
from ..utils.errors import TfCostError
from ..utils.logging import get_logger

logger = get_logger("report.artifact")


def _write_json(path: Path, data: Dict[str, Any]) -> None:
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        logger.debug(f"Written {path.name}: {path}")
    except (OSError, TypeError) as e:
        raise TfCostError(f"Failed to write {path.name}: {e}")


def generate_artifacts(comparison: CostComparison, output_dir: Path) -> None:
    """
    Generate CI/CD artifacts from a CostComparison.

    Creates the following files in output_dir:
    - cost_comparison.json: Full comparison (camelCase keys)
    - summary.json: Totals and change counts
    - metadata.json: Report metadata

    Args:
        comparison: CostComparison from plan cost estimation
        output_dir: Directory to write artifacts to

    Raises:
        TfCostError: If a file write fails
    """
    from .. import __version__

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TfCostError(f"Failed to create output directory: {e}")

    _write_json(output_dir / "cost_comparison.json", comparison.model_dump(mode="json", by_alias=True))

    changed = comparison.changed_resources
    _write_json(output_dir / "summary.json", {
        "current_monthly_cost": round(comparison.current.total_monthly_cost, 2),
        "planned_monthly_cost": round(comparison.planned.total_monthly_cost, 2),
        "monthly_difference": round(comparison.difference.monthly, 2),
        "percentage_change": round(comparison.difference.percentage, 1),
        "added_count": len(changed.added),
        "removed_count": len(changed.removed),
        "modified_count": len(changed.modified),
    })

    _write_json(output_dir / "metadata.json", {
        "tfcost_version": __version__,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "generator": "tfcost report artifact",
    })

    logger.info(f"Generated artifacts in: {output_dir}")
