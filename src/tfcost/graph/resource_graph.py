"""Build a directed graph of modules, resources and their dependencies."""

import networkx as nx
from typing import List, Dict, Set, Optional, Any
from ..ingest.models import TerraformState, TerraformResource, TerraformModule
from ..utils.logging import get_logger

logger = get_logger("graph.resource_graph")

MODULE_GROUP = "module"
RESOURCE_GROUP = "resource"


class ResourceGraph:
    """Directed graph: module -> resource edges and resource -> dependency edges."""

    def __init__(self):
        self.graph = nx.DiGraph()
        self._resource_map: Dict[str, TerraformResource] = {}

    def add_module(self, module: TerraformModule) -> None:
        """Add a module node keyed by its path."""
        self.graph.add_node(module.path, name=module.name or module.path, type=MODULE_GROUP, group=MODULE_GROUP)

    def add_resource(self, resource: TerraformResource) -> None:
        """Add a resource node keyed by its id."""
        self.graph.add_node(
            resource.id,
            name=resource.name,
            type=resource.type,
            module=resource.module,
            group=RESOURCE_GROUP,
        )
        self._resource_map[resource.id] = resource

    def _link_resource(self, resource: TerraformResource) -> None:
        """Add edges for a resource, only towards nodes that exist."""
        if resource.module:
            if resource.module in self.graph:
                self.graph.add_edge(resource.module, resource.id, kind="module")
            else:
                logger.debug(f"Module {resource.module} referenced by {resource.id} has no node")

        for dependency in resource.dependencies:
            if dependency in self._resource_map:
                self.graph.add_edge(resource.id, dependency, kind="dependency")
            else:
                logger.debug(f"Dependency {dependency} referenced by {resource.id} not found")

    def build_from_state(self, state: TerraformState) -> None:
        """Build the complete graph from a canonical state."""
        for module in state.modules:
            self.add_module(module)
        for resource in state.resources:
            self.add_resource(resource)
        for resource in state.resources:
            self._link_resource(resource)

        logger.info(f"Built resource graph with {self.graph.number_of_nodes()} nodes and {self.graph.number_of_edges()} edges")

    def get_resource(self, resource_id: str) -> Optional[TerraformResource]:
        """Get resource by id."""
        return self._resource_map.get(resource_id)

    def get_dependencies(self, resource_id: str) -> Set[str]:
        """All resources the given resource depends on, directly or transitively."""
        if resource_id not in self._resource_map:
            return set()
        return {n for n in nx.descendants(self.graph, resource_id) if n in self._resource_map}

    def get_dependents(self, resource_id: str) -> Set[str]:
        """All resources that depend on the given resource, directly or transitively."""
        if resource_id not in self._resource_map:
            return set()
        return {n for n in nx.ancestors(self.graph, resource_id) if n in self._resource_map}

    def get_module_resources(self, module_path: str) -> List[str]:
        """Resource ids attached to a module node."""
        if module_path not in self.graph:
            return []
        return [n for n in self.graph.successors(module_path) if n in self._resource_map]

    def to_node_link(self) -> Dict[str, Any]:
        """Export nodes and links for presentation."""
        nodes = [{"id": node, **data} for node, data in self.graph.nodes(data=True)]
        links = [{"source": u, "target": v, **data} for u, v, data in self.graph.edges(data=True)]
        return {"nodes": nodes, "links": links}
