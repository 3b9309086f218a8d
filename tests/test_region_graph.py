"""Tests for region adjacency and traversal."""

from py_landmass.core.delaunay import triangulate
from py_landmass.core.region_graph import dfs_connect, graph_distances, region_adjacency

SAMPLE_GRAPH = {0: [1, 2], 1: [0, 3], 2: [0], 3: [1]}


class TestRegionAdjacency:
    """Test neighbour lists from a triangulation."""

    def test_quadrilateral(self):
        """Test adjacency of two triangles sharing a diagonal."""
        sites = [(0, 0), (10, 0), (11, 7), (0, 6)]
        adjacency = region_adjacency(triangulate(sites, 12, 8), len(sites))
        assert set(adjacency) == {0, 1, 2, 3}
        degrees = sorted(len(ids) for ids in adjacency.values())
        assert degrees == [2, 2, 3, 3]

    def test_symmetric(self):
        """Test that neighbour relations go both ways."""
        sites = [(1, 1), (8, 2), (5, 9), (2, 7), (9, 8), (5, 4)]
        adjacency = region_adjacency(triangulate(sites, 10, 10), len(sites))
        for node, neighbors in adjacency.items():
            assert node not in neighbors
            for neighbor in neighbors:
                assert node in adjacency[neighbor]

    def test_isolated_sites(self):
        """Test that sites without triangles get empty lists."""
        assert region_adjacency([], 3) == {0: [], 1: [], 2: []}


class TestTraversal:
    """Test DFS and BFS helpers."""

    def test_dfs_tree(self):
        """Test the spanning tree follows neighbour order."""
        visited, edges = dfs_connect(SAMPLE_GRAPH)
        assert visited == {0, 1, 2, 3}
        assert edges == [(0, 1), (1, 3), (0, 2)]

    def test_dfs_disconnected(self):
        """Test that DFS only reaches the start's component."""
        graph = {0: [1], 1: [0], 2: [3], 3: [2]}
        visited, edges = dfs_connect(graph, start=2)
        assert visited == {2, 3}
        assert edges == [(2, 3)]

    def test_distances_single_source(self):
        """Test hop counts from one source."""
        assert graph_distances(SAMPLE_GRAPH, [0]) == {0: 0, 1: 1, 2: 1, 3: 2}

    def test_distances_multiple_sources(self):
        """Test hop counts from the nearest of several sources."""
        assert graph_distances(SAMPLE_GRAPH, [2, 3]) == {2: 0, 3: 0, 0: 1, 1: 1}
