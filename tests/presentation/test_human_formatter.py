"""Tests for human-readable output."""

import pytest
from tfcost.analysis.plan_diff import compare_plan_costs
from tfcost.analysis.state_costs import estimate_state_costs
from tfcost.ingest.plan_normalizer import normalize_plan
from tfcost.ingest.state_normalizer import normalize_state
from tfcost.presentation import (
    format_cost_summary,
    format_cost_comparison,
    format_state_overview,
    format_plan_overview,
)


@pytest.fixture
def state():
    """State with one module and one provider."""
    return normalize_state({
        "version": 4,
        "terraform_version": "1.5.0",
        "terraform": {"required_providers": {"aws": {"version": "5.31.0"}}},
        "resources": [
            {"type": "aws_instance", "name": "web", "instances": [{"attributes": {"instance_type": "z9.mega"}}]},
            {"type": "aws_nat_gateway", "name": "main", "module": "network", "instances": [{"attributes": {}}]},
        ],
    })


@pytest.fixture
def plan():
    """Plan with a create and an update."""
    return normalize_plan({
        "terraform_version": "1.6.0",
        "resource_changes": [
            {"address": "aws_lb.front", "type": "aws_lb", "name": "front",
             "change": {"actions": ["create"], "after": {"load_balancer_type": "application"}}},
            {"address": "aws_instance.web", "type": "aws_instance", "name": "web",
             "change": {"actions": ["update"], "before": {"instance_type": "t3.micro"},
                        "after": {"instance_type": "t3.small"}}},
        ],
    })


class TestHumanFormatter:
    """Test text rendering."""

    def test_cost_summary(self, state):
        """Test totals, breakdown and low-confidence note."""
        text = format_cost_summary(estimate_state_costs(state), ascii_mode=True)

        assert "Terraform Cost Estimate" in text
        assert "Monthly cost:   $52.85" in text
        assert "Compute" in text
        assert "Network" in text
        assert "aws_instance.web [z9.mega]: $20.00/mo (low)" in text
        assert "1 estimate(s) used default prices" in text

    def test_ascii_mode(self, state):
        """Test ASCII output avoids box-drawing characters."""
        text = format_cost_summary(estimate_state_costs(state), ascii_mode=True)
        assert "┌" not in text
        assert text.startswith("+")

    def test_ascii_from_environment(self, state, monkeypatch):
        """Test TFCOST_ASCII selects ASCII output."""
        monkeypatch.setenv("TFCOST_ASCII", "1")
        assert format_cost_summary(estimate_state_costs(state)).startswith("+")

    def test_cost_comparison(self, plan):
        """Test change groups and delta line."""
        text = format_cost_comparison(compare_plan_costs(plan.resource_changes), ascii_mode=True)

        assert "Planned:  $31.61/mo" in text
        assert "Added (1)" in text
        assert "+ aws_lb.front" in text
        assert "Modified (1)" in text
        assert "(0.0%)" in text

    def test_empty_comparison(self):
        """Test message for plans without billable changes."""
        text = format_cost_comparison(compare_plan_costs([]), ascii_mode=True)
        assert "No billable resources change in this plan." in text

    def test_state_overview(self, state):
        """Test state metadata, modules and providers."""
        text = format_state_overview(state, ascii_mode=True)

        assert "Terraform version: 1.5.0" in text
        assert "aws_nat_gateway.main (module.network)" in text
        assert "network: 1 resource(s)" in text
        assert "aws: 5.31.0" in text

    def test_plan_overview(self, plan):
        """Test plan counts and changed attributes."""
        text = format_plan_overview(plan, ascii_mode=True)

        assert "Plan: 1 to add, 1 to change, 0 to destroy (2 total)" in text
        assert "+ aws_lb.front" in text
        assert "~ aws_instance.web" in text
        assert "changed: instance_type" in text
