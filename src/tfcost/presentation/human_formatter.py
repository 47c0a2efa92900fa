"""Human-friendly output formatter - converts cost and state data to readable text."""

import os
from typing import List, Optional
from ..contracts.cost import CostSummary, CostComparison, CostEstimate
from ..ingest.models import TerraformState, TerraformPlan, ResourceAction
from ..ingest.plan_normalizer import changed_attribute_keys
from .formatting import format_currency, format_percentage, format_signed_currency

WIDTH = 65

BREAKDOWN_LABELS = (
    ("compute", "Compute"),
    ("storage", "Storage"),
    ("network", "Network"),
    ("database", "Database"),
    ("other", "Other"),
)

ACTION_MARKERS = {
    ResourceAction.CREATE.value: "+",
    ResourceAction.UPDATE.value: "~",
    ResourceAction.DELETE.value: "-",
    ResourceAction.READ.value: "<=",
    ResourceAction.NO_OP.value: " ",
}


def _use_ascii(ascii_mode: Optional[bool] = None) -> bool:
    """Resolve whether to use ASCII output (checked at format time)."""
    if ascii_mode is not None:
        return bool(ascii_mode)
    return os.environ.get("TFCOST_ASCII", "").lower() in ("1", "true", "yes")


def _box(title: str, width: int = WIDTH, ascii_mode: bool = False) -> List[str]:
    """Return box-drawing header lines."""
    b = {"tl": "+", "tr": "+", "bl": "+", "br": "+", "h": "-", "v": "|"} if ascii_mode else {
        "tl": "┌", "tr": "┐", "bl": "└", "br": "┘", "h": "─", "v": "│"
    }
    h = b["h"] * (width - 2)
    return [
        b["tl"] + h + b["tr"],
        f"{b['v']} {title:<{width - 4}} {b['v']}",
        b["bl"] + h + b["br"],
        "",
    ]


def _section(title: str, width: int = WIDTH) -> List[str]:
    """Return section divider."""
    h = "-" * width
    return [h, title.center(width), h]


def _estimate_line(estimate: CostEstimate, prefix: str = "") -> str:
    size = f" [{estimate.instance_type}]" if estimate.instance_type else ""
    return (
        f"  {prefix}{estimate.resource_address}{size}: "
        f"{format_currency(estimate.monthly_cost)}/mo ({estimate.confidence})"
    )


def _breakdown_lines(summary: CostSummary) -> List[str]:
    lines = []
    for field, label in BREAKDOWN_LABELS:
        amount = getattr(summary.breakdown, field)
        if amount > 0:
            lines.append(f"  {label:<10} {format_currency(amount):>14}")
    if not lines:
        lines.append("  No billable resources.")
    return lines


def format_cost_summary(summary: CostSummary, ascii_mode: Optional[bool] = None) -> str:
    """Render a cost summary as readable text."""
    ascii_mode = _use_ascii(ascii_mode)
    lines = _box("Terraform Cost Estimate", ascii_mode=ascii_mode)

    lines.append(f"Monthly cost:   {format_currency(summary.total_monthly_cost)}")
    lines.append(f"Hourly cost:    {format_currency(summary.total_hourly_cost)}")
    lines.append(f"Billable resources: {summary.resource_count}")
    lines.append("")

    lines.extend(_section("Breakdown"))
    lines.extend(_breakdown_lines(summary))
    lines.append("")

    if summary.estimates:
        lines.extend(_section("Resources"))
        for estimate in sorted(summary.estimates, key=lambda e: e.monthly_cost, reverse=True):
            lines.append(_estimate_line(estimate))
        lines.append("")

    low_confidence = [e for e in summary.estimates if e.confidence == "low"]
    if low_confidence:
        lines.append(f"Note: {len(low_confidence)} estimate(s) used default prices (low confidence).")

    return "\n".join(lines).rstrip() + "\n"


def format_cost_comparison(comparison: CostComparison, ascii_mode: Optional[bool] = None) -> str:
    """Render current versus planned costs as readable text."""
    ascii_mode = _use_ascii(ascii_mode)
    lines = _box("Terraform Plan Cost Impact", ascii_mode=ascii_mode)

    diff = comparison.difference
    lines.append(f"Current:  {format_currency(comparison.current.total_monthly_cost)}/mo")
    lines.append(f"Planned:  {format_currency(comparison.planned.total_monthly_cost)}/mo")
    lines.append(f"Change:   {format_signed_currency(diff.monthly)}/mo ({format_percentage(diff.percentage)})")
    lines.append("")

    changed = comparison.changed_resources
    groups = (
        ("Added", "+", changed.added),
        ("Removed", "-", changed.removed),
        ("Modified", "~", changed.modified),
    )
    for title, marker, estimates in groups:
        if not estimates:
            continue
        total = sum(e.monthly_cost for e in estimates)
        lines.extend(_section(f"{title} ({len(estimates)})"))
        for estimate in estimates:
            lines.append(_estimate_line(estimate, prefix=f"{marker} "))
        lines.append(f"  Subtotal: {format_currency(total)}/mo")
        lines.append("")

    if not any(estimates for _, _, estimates in groups):
        lines.append("No billable resources change in this plan.")

    return "\n".join(lines).rstrip() + "\n"


def format_state_overview(state: TerraformState, ascii_mode: Optional[bool] = None) -> str:
    """Render state metadata, modules and providers."""
    ascii_mode = _use_ascii(ascii_mode)
    lines = _box("Terraform State", ascii_mode=ascii_mode)

    lines.append(f"Terraform version: {state.terraform_version}")
    lines.append(f"State version:     {state.version}")
    lines.append(f"Serial:            {state.serial}")
    lines.append(f"Lineage:           {state.lineage}")
    lines.append("")

    lines.extend(_section(f"Resources ({len(state.resources)})"))
    for resource in state.resources:
        module = f" ({resource.module})" if resource.module else ""
        lines.append(f"  {resource.id}{module}")
    lines.append("")

    if state.modules:
        lines.extend(_section(f"Modules ({len(state.modules)})"))
        for module in state.modules:
            lines.append(f"  {module.name}: {len(module.resources)} resource(s)")
        lines.append("")

    lines.extend(_section(f"Providers ({len(state.providers)})"))
    for provider in state.providers:
        lines.append(f"  {provider.name}: {provider.version}")

    return "\n".join(lines).rstrip() + "\n"


def format_plan_overview(plan: TerraformPlan, ascii_mode: Optional[bool] = None) -> str:
    """Render plan summary counts and the list of changes."""
    ascii_mode = _use_ascii(ascii_mode)
    lines = _box("Terraform Plan", ascii_mode=ascii_mode)

    s = plan.summary
    lines.append(f"Terraform version: {plan.terraform_version}")
    lines.append(f"Plan: {s.add} to add, {s.change} to change, {s.destroy} to destroy ({s.total} total)")
    lines.append("")

    if plan.resource_changes:
        lines.extend(_section("Changes"))
        for change in plan.resource_changes:
            marker = ACTION_MARKERS.get(change.action, "?")
            lines.append(f"  {marker} {change.address}")
            if change.action == ResourceAction.UPDATE.value:
                keys = changed_attribute_keys(change)
                if keys:
                    lines.append(f"      changed: {', '.join(keys)}")

    return "\n".join(lines).rstrip() + "\n"
