"""Markdown report generation from a CostComparison."""

from pathlib import Path
from typing import List, Optional
from ..contracts.cost import CostComparison, CostEstimate, CostSummary
from ..ingest.models import TerraformPlan
from ..presentation.formatting import format_currency, format_percentage, format_signed_currency
from ..utils.errors import TfCostError
from ..utils.logging import get_logger

logger = get_logger("report.markdown")


def _estimate_table(estimates: List[CostEstimate]) -> List[str]:
    rows = [
        "| Resource | Type | Size | Monthly | Hourly | Confidence |",
        "|---|---|---|---:|---:|---|",
    ]
    for e in estimates:
        rows.append(
            f"| `{e.resource_address}` | {e.resource_type} | {e.instance_type or '-'} | "
            f"{format_currency(e.monthly_cost)} | {format_currency(e.hourly_cost)} | {e.confidence} |"
        )
    return rows


def _breakdown_table(summary: CostSummary) -> List[str]:
    b = summary.breakdown
    return [
        "| Category | Monthly |",
        "|---|---:|",
        f"| Compute | {format_currency(b.compute)} |",
        f"| Storage | {format_currency(b.storage)} |",
        f"| Network | {format_currency(b.network)} |",
        f"| Database | {format_currency(b.database)} |",
        f"| Other | {format_currency(b.other)} |",
    ]


def render_markdown(comparison: CostComparison, plan: Optional[TerraformPlan] = None) -> str:
    """
    Render a markdown cost report.

    Args:
        comparison: CostComparison from plan cost estimation
        plan: Optional parsed plan, adds the change counts section

    Returns:
        Markdown text
    """
    diff = comparison.difference
    sections = []

    sections.append("# Terraform Cost Report")
    sections.append("")

    sections.append("## Summary")
    sections.append("")
    sections.append(f"- **Current Monthly Cost:** {format_currency(comparison.current.total_monthly_cost)}")
    sections.append(f"- **Planned Monthly Cost:** {format_currency(comparison.planned.total_monthly_cost)}")
    sections.append(f"- **Monthly Change:** {format_signed_currency(diff.monthly)} ({format_percentage(diff.percentage)})")
    sections.append(f"- **Billable Resources:** {comparison.current.resource_count} -> {comparison.planned.resource_count}")
    sections.append("")

    if plan is not None:
        s = plan.summary
        sections.append("## Plan")
        sections.append("")
        sections.append(f"- **Terraform Version:** {plan.terraform_version}")
        sections.append(f"- **Changes:** {s.add} to add, {s.change} to change, {s.destroy} to destroy")
        sections.append("")

    changed = comparison.changed_resources
    for title, estimates in (("Added", changed.added), ("Removed", changed.removed), ("Modified", changed.modified)):
        sections.append(f"## {title} Resources")
        sections.append("")
        if estimates:
            sections.extend(_estimate_table(estimates))
        else:
            sections.append("None.")
        sections.append("")

    sections.append("## Planned Cost Breakdown")
    sections.append("")
    sections.extend(_breakdown_table(comparison.planned))
    sections.append("")

    return "\n".join(sections)


def generate_markdown(comparison: CostComparison, output_path: Path, plan: Optional[TerraformPlan] = None) -> None:
    """
    Write a markdown cost report to a file.

    Raises:
        TfCostError: If file write fails
    """
    content = render_markdown(comparison, plan)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)
        logger.info(f"Generated markdown report: {output_path}")
    except OSError as e:
        raise TfCostError(f"Failed to write markdown report: {e}")
