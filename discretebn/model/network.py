import logging

from discretebn.errors import ConfigurationError, NotFoundError
from discretebn.model.graph import DAG
from discretebn.model.node import BayesianNode

logger = logging.getLogger(__name__)


class BayesianNetwork:
    """
    An immutable registry of BayesianNodes.

    The network references the nodes it is given, it does not clone them.
    The structure (a DAG over node names) is built from the parents declared by the nodes;
    children that were built from a node but are not registered here are not part of this network.
    """

    def __init__(self, nodes):
        """
        nodes: an iterable of BayesianNode objects with unique names,
            every parent of a node must be registered too
        """
        self._nodes = tuple(nodes)
        self._node_map = dict()
        for node in self._nodes:
            if not isinstance(node, BayesianNode):
                raise ConfigurationError(f"A network is made of BayesianNode objects, got {node!r}")
            if node.name in self._node_map:
                raise ConfigurationError(f"The node name '{node.name}' is used more than once")
            self._node_map[node.name] = node

        edges = []
        for node in self._nodes:
            # the CPT holds the parent variables the node was built with, child last
            for parent, var in zip(node.parents, node.cpt.variables[:-1]):
                if parent not in self._node_map:
                    raise ConfigurationError(f"The parent '{parent}' of '{node.name}' is not in the network")
                if self._node_map[parent].domain != var.domain:
                    raise ConfigurationError(
                        f"The node '{node.name}' was built with a parent '{parent}' over {list(var.domain)}, "
                        f"but the network's '{parent}' is over {list(self._node_map[parent].domain)}"
                    )
                edges.append((parent, node.name))
        # group edges by parent, so children are visited in registration order
        position = {node.name: i for i, node in enumerate(self._nodes)}
        edges.sort(key=lambda e: (position[e[0]], position[e[1]]))
        self.dag = DAG([node.name for node in self._nodes], edges)
        logger.debug("Built network with %d nodes and %d edges", len(self._nodes), len(edges))

    def find_node(self, name: str) -> BayesianNode:
        """Return the node with this name, or raise NotFoundError"""
        try:
            return self._node_map[name]
        except KeyError:
            raise NotFoundError(
                f"The node '{name}' is not in the network. Please make sure the name is correct."
            ) from None

    def get_nodes(self) -> list:
        """A new list with all the nodes (the nodes themselves are shared, not copied)"""
        return list(self._nodes)

    def _resolve(self, node) -> str:
        return node.name if isinstance(node, BayesianNode) else node

    def children_of(self, node) -> tuple:
        """The registered children of a node (given as a node or a name)"""
        name = self.find_node(self._resolve(node)).name
        return tuple(self._node_map[c] for c in self.dag.children[name])

    def parents_of(self, node) -> tuple:
        """The parents of a node (given as a node or a name), in the order of its CPT"""
        return tuple(self._node_map[p] for p in self.find_node(self._resolve(node)).parents)

    def topological_order(self) -> tuple:
        """Node names with parents before children"""
        return self.dag.topo

    def depth_first_order(self) -> tuple:
        """Node names with children before parents"""
        return self.dag.dfs_order

    def iterfactors(self):
        """Iterate over the CPTs of the nodes"""
        return (node.cpt for node in self._nodes)

    def __len__(self):
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def __contains__(self, name):
        return self._resolve(name) in self._node_map

    def __str__(self):
        return str(self.dag)

    def __repr__(self):
        return f"BayesianNetwork({[n.name for n in self._nodes]})"
