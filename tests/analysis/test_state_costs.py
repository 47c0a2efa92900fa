"""Tests for state and plan cost entry points."""

import pytest
from tfcost.analysis.state_costs import estimate_state_costs, estimate_planned_costs
from tfcost.ingest.plan_normalizer import normalize_plan
from tfcost.ingest.state_normalizer import normalize_state


@pytest.fixture
def state():
    """State with billable and unbillable resources."""
    return normalize_state({
        "version": 4,
        "resources": [
            {"type": "aws_instance", "name": "web", "instances": [{"attributes": {"instance_type": "t3.medium"}}]},
            {"type": "aws_nat_gateway", "name": "main", "instances": [{"attributes": {}}]},
            {"type": "kubernetes_deployment", "name": "app", "instances": [{"attributes": {}}]},
            {"type": "aws_iam_role", "name": "ci", "instances": [{"attributes": {}}]},
        ],
    })


class TestEstimateStateCosts:
    """Test state cost estimation."""

    def test_unbillable_excluded(self, state):
        """Test only modelled resources are counted."""
        summary = estimate_state_costs(state)

        assert summary.resource_count == 2
        assert summary.total_monthly_cost == pytest.approx(30.37 + 32.85)
        assert [e.resource_address for e in summary.estimates] == ["aws_instance.web", "aws_nat_gateway.main"]

    def test_empty_state(self):
        """Test empty state yields empty summary."""
        summary = estimate_state_costs(normalize_state({}))
        assert summary.resource_count == 0


class TestEstimatePlannedCosts:
    """Test plan comparison entry point."""

    def test_with_state_baseline(self, state):
        """Test deleting a baseline resource."""
        plan = normalize_plan({
            "resource_changes": [
                {"address": "aws_nat_gateway.main", "type": "aws_nat_gateway", "name": "main",
                 "change": {"actions": ["delete"], "before": {}, "after": None}},
            ]
        })

        comparison = estimate_planned_costs(plan, state)

        assert comparison.current.resource_count == 2
        assert comparison.planned.resource_count == 1
        assert comparison.difference.monthly == pytest.approx(-32.85)

    def test_without_state(self):
        """Test zero baseline when no state is given."""
        plan = normalize_plan({
            "resource_changes": [
                {"address": "aws_instance.web", "type": "aws_instance", "name": "web",
                 "change": {"actions": ["create"], "after": {"instance_type": "t3.micro"}}},
            ]
        })

        comparison = estimate_planned_costs(plan)

        assert comparison.current.total_monthly_cost == 0
        assert comparison.planned.total_monthly_cost == 7.59
        assert comparison.difference.percentage == 0
