"""Presentation layer - display formatting of cost and state data."""

from .formatting import format_currency, format_percentage, format_signed_currency
from .human_formatter import (
    format_cost_summary,
    format_cost_comparison,
    format_state_overview,
    format_plan_overview,
)

__all__ = [
    "format_currency",
    "format_percentage",
    "format_signed_currency",
    "format_cost_summary",
    "format_cost_comparison",
    "format_state_overview",
    "format_plan_overview",
]
