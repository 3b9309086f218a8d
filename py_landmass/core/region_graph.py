"""
Region adjacency and graph traversal.

Two regions are neighbours when their sites share a Delaunay edge. The
traversals work on any adjacency mapping of node id -> neighbour ids.
"""

from collections import deque
from typing import Dict, Iterable, List, Mapping, Sequence, Set, Tuple

from .delaunay import Triangle

Adjacency = Mapping[int, Sequence[int]]


def region_adjacency(triangles: Iterable[Triangle], site_count: int) -> Dict[int, List[int]]:
    """
    Neighbour lists for every region.

    Returns:
        Mapping of region index -> sorted neighbour indices; regions without
        triangles map to an empty list
    """
    neighbors: Dict[int, Set[int]] = {i: set() for i in range(site_count)}
    for tri in triangles:
        for u, v in tri.edges():
            neighbors[u].add(v)
            neighbors[v].add(u)
    return {i: sorted(ids) for i, ids in neighbors.items()}


def dfs_connect(adjacency: Adjacency, start: int = 0) -> Tuple[Set[int], List[Tuple[int, int]]]:
    """
    Depth-first spanning tree from ``start``.

    Neighbours are explored in list order, giving the same tree a recursive
    DFS would.

    Returns:
        (visited nodes, tree edges as (parent, child) pairs)
    """
    visited = {start}
    tree_edges: List[Tuple[int, int]] = []
    stack = [(start, iter(adjacency.get(start, ())))]

    while stack:
        node, neighbors = stack[-1]
        for neighbor in neighbors:
            if neighbor not in visited:
                visited.add(neighbor)
                tree_edges.append((node, neighbor))
                stack.append((neighbor, iter(adjacency.get(neighbor, ()))))
                break
        else:
            stack.pop()

    return visited, tree_edges


def graph_distances(adjacency: Adjacency, sources: Iterable[int]) -> Dict[int, int]:
    """Hop count from the nearest source to every reachable node (BFS)."""
    dist: Dict[int, int] = {}
    queue = deque()
    for source in sources:
        if source not in dist:
            dist[source] = 0
            queue.append(source)

    while queue:
        node = queue.popleft()
        for neighbor in adjacency.get(node, ()):
            if neighbor not in dist:
                dist[neighbor] = dist[node] + 1
                queue.append(neighbor)

    return dist
