from collections import deque

from tabulate import tabulate

from discretebn.errors import ConfigurationError


def build_adjacency(nodes: list, edges: list):
    """
    Build and return adjacency maps, one for children and one for parents.
    Neighbours are kept in the order the edges are given, so traversals are reproducible.
    """
    children = {n: [] for n in nodes}
    parents = {n: [] for n in nodes}
    for u, v in edges:
        if v not in children[u]:
            children[u].append(v)
            parents[v].append(u)
    return children, parents


def topological_sort(nodes: list, children: dict, parents: dict):
    """Return nodes in a topological order (parents before children)"""
    # number of parents of a node that have not been put in order yet
    indegree = {n: len(parents[n]) for n in nodes}
    # nodes without incoming edges come first
    queue = deque([n for n in nodes if indegree[n] == 0])
    topo = []
    while queue:
        n = queue.popleft()
        topo.append(n)
        for c in children[n]:
            indegree[c] -= 1
            if indegree[c] == 0:
                queue.append(c)

    if len(topo) != len(nodes):
        stuck = sorted(n for n in nodes if indegree[n] > 0)
        raise ConfigurationError(f"Graph contains a cycle through {stuck}, topological sort not possible")
    return tuple(topo)


def depth_first_order(nodes: list, children: dict):
    """
    Return nodes so that every node comes after all of its children (and descendants).

    This is the post-order of a depth-first search started from each node in turn,
    reversing it gives a topological order.
    """
    visited = set()
    order = []
    for root in nodes:
        if root in visited:
            continue
        visited.add(root)
        # each frame holds a node and an iterator over the children still to visit
        stack = [(root, iter(children[root]))]
        while stack:
            node, pending = stack[-1]
            for c in pending:
                if c not in visited:
                    visited.add(c)
                    stack.append((c, iter(children[c])))
                    break
            else:
                stack.pop()
                order.append(node)
    return tuple(order)


def compute_ancestors(nodes: list, parents: dict, topo: list):
    """Return for each node a set containing its ancestors"""
    ancestors = {n: set() for n in nodes}
    # in topological order the ancestor sets of the parents are complete when we need them
    for n in topo:
        for p in parents[n]:
            ancestors[n].add(p)
            ancestors[n].update(ancestors[p])
    return ancestors


def mark_relevant(seeds: set, order: list, children: dict):
    """
    Return the nodes that are in seeds or have a directed path to a node in seeds.

    order: nodes with children before parents (see depth_first_order),
        so a single pass sees every child's status before its parent's
    """
    relevant = set(seeds)
    for n in order:
        if n not in relevant and any(c in relevant for c in children[n]):
            relevant.add(n)
    return relevant


class DAG:
    """
    A container for a directed acyclic graph over node names.

    We store a tuple of nodes and a tuple of edges.
    For convenience of various DAG algs, we also store adjacency maps (for parents and children),
    a topological order of the nodes and a depth-first (children first) order.
    """

    def __init__(self, nodes: list, edges: list):
        """
        nodes: a list of node names
        edges: a list of edges, each represented as a (parent, child) pair
        """
        self.nodes = tuple(str(node) for node in nodes)
        self.edges = tuple((str(parent), str(child)) for parent, child in edges)
        known = set(self.nodes)
        for parent, child in self.edges:
            if parent not in known or child not in known:
                raise ConfigurationError(f"The edge {parent} -> {child} mentions a node that is not in the graph")
        self.children, self.parents = build_adjacency(self.nodes, self.edges)
        self.topo = topological_sort(self.nodes, self.children, self.parents)
        self.dfs_order = depth_first_order(self.nodes, self.children)

    def ancestors(self):
        """Return for each node a set containing its ancestors"""
        return compute_ancestors(self.nodes, self.parents, self.topo)

    def relevant_nodes(self, seeds: set):
        """Return the seeds together with all of their ancestors"""
        return mark_relevant(seeds, self.dfs_order, self.children)

    def __str__(self):
        """Generate a view of the graph using tabulate"""
        rows = []
        for node in self.topo:
            rows.append([", ".join(self.parents[node]), node])
        return tabulate(rows, headers=['parents', 'child'], tablefmt='grid')

    def __repr__(self):
        return str(self)
