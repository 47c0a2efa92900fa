"""Tests for the resource dependency graph."""

import pytest
from tfcost.graph.resource_graph import ResourceGraph
from tfcost.ingest.state_normalizer import normalize_state


@pytest.fixture
def graph():
    """Graph with a module, a dependency chain and a dangling reference."""
    state = normalize_state({
        "resources": [
            {"type": "aws_vpc", "name": "main", "module": "network"},
            {"type": "aws_subnet", "name": "a", "module": "network", "dependencies": ["aws_vpc.main"]},
            {"type": "aws_instance", "name": "web", "dependencies": ["aws_subnet.a", "aws_iam_role.missing"]},
        ]
    })
    g = ResourceGraph()
    g.build_from_state(state)
    return g


class TestResourceGraph:
    """Test graph construction and queries."""

    def test_nodes(self, graph):
        """Test module and resource nodes are created."""
        assert set(graph.graph.nodes) == {"module.network", "aws_vpc.main", "aws_subnet.a", "aws_instance.web"}
        assert graph.graph.nodes["module.network"]["group"] == "module"
        assert graph.graph.nodes["aws_instance.web"]["type"] == "aws_instance"

    def test_dangling_dependency_skipped(self, graph):
        """Test edges are only created towards existing nodes."""
        assert "aws_iam_role.missing" not in graph.graph
        assert graph.graph.has_edge("aws_instance.web", "aws_subnet.a")

    def test_dependencies_transitive(self, graph):
        """Test transitive dependency query."""
        assert graph.get_dependencies("aws_instance.web") == {"aws_subnet.a", "aws_vpc.main"}
        assert graph.get_dependencies("aws_vpc.main") == set()

    def test_dependents(self, graph):
        """Test reverse dependency query excludes module nodes."""
        assert graph.get_dependents("aws_vpc.main") == {"aws_subnet.a", "aws_instance.web"}
        assert graph.get_dependents("unknown.id") == set()

    def test_module_resources(self, graph):
        """Test module membership query."""
        assert sorted(graph.get_module_resources("module.network")) == ["aws_subnet.a", "aws_vpc.main"]
        assert graph.get_module_resources("module.absent") == []

    def test_get_resource(self, graph):
        """Test resource lookup."""
        assert graph.get_resource("aws_vpc.main").module == "module.network"
        assert graph.get_resource("nope") is None

    def test_node_link_export(self, graph):
        """Test node-link export shape."""
        data = graph.to_node_link()
        assert len(data["nodes"]) == 4
        kinds = {(link["source"], link["target"]): link["kind"] for link in data["links"]}
        assert kinds[("module.network", "aws_vpc.main")] == "module"
        assert kinds[("aws_subnet.a", "aws_vpc.main")] == "dependency"
