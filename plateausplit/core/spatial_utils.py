"""Common spatial operation utilities.

Pair search over a list of geometries is done with an STRtree query instead
of a nested loop; the predicate is evaluated by GEOS for each candidate, so
the result is the same as a full pairwise scan.
"""

from typing import Dict, List, Optional, Sequence, Set, Tuple
from shapely.geometry.base import BaseGeometry
from shapely.strtree import STRtree


def find_polygon_pairs(
    geometries: Sequence[BaseGeometry],
    predicate: str = 'intersects',
    tree: Optional[STRtree] = None
) -> List[Tuple[int, int]]:
    """Find pairs of geometries that satisfy a spatial predicate.

    Returns unique pairs (i, j) where i < j, sorted.

    Args:
        geometries: Geometries to search
        predicate: Shapely binary predicate name ('intersects', 'overlaps', ...)
        tree: Optional pre-built STRtree over ``geometries``

    Returns:
        List of (index_i, index_j) tuples

    Examples:
        >>> from shapely.geometry import box
        >>> find_polygon_pairs([box(0, 0, 2, 2), box(1, 1, 3, 3), box(5, 5, 6, 6)], 'overlaps')
        [(0, 1)]
    """
    if not geometries:
        return []

    if tree is None:
        tree = STRtree(list(geometries))

    pairs: Set[Tuple[int, int]] = set()
    for i, geom in enumerate(geometries):
        for j in tree.query(geom, predicate=predicate):
            j = int(j)
            if i == j:
                continue
            pairs.add((min(i, j), max(i, j)))

    return sorted(pairs)


def build_adjacency_graph(
    geometries: Sequence[BaseGeometry],
    predicate: str = 'intersects',
    tree: Optional[STRtree] = None
) -> Dict[int, Set[int]]:
    """Build an adjacency graph of geometries related by ``predicate``.

    Args:
        geometries: Geometries to connect
        predicate: Shapely binary predicate name
        tree: Optional pre-built STRtree

    Returns:
        Dictionary mapping geometry index to the set of adjacent indices

    Examples:
        >>> adjacency = build_adjacency_graph(polygons)
        >>> # adjacency[0] = {1, 3}  means polygon 0 intersects 1 and 3
    """
    adjacency: Dict[int, Set[int]] = {i: set() for i in range(len(geometries))}

    for i, j in find_polygon_pairs(geometries, predicate=predicate, tree=tree):
        adjacency[i].add(j)
        adjacency[j].add(i)

    return adjacency


def find_connected_components(
    adjacency: Dict[int, Set[int]]
) -> List[List[int]]:
    """Find connected components in an adjacency graph.

    Components are listed in order of their smallest node, and each component
    is sorted.

    Args:
        adjacency: Adjacency graph (dict of node -> set of neighbors)

    Returns:
        List of components, where each component is a list of node indices

    Examples:
        >>> adjacency = {0: {1}, 1: {0}, 2: {3}, 3: {2}, 4: set()}
        >>> find_connected_components(adjacency)
        [[0, 1], [2, 3], [4]]
    """
    visited: Set[int] = set()
    components = []

    for start in sorted(adjacency):
        if start in visited:
            continue
        # Iterative DFS; long chains of touching polygons would hit the recursion limit
        component = []
        stack = [start]
        visited.add(start)
        while stack:
            node = stack.pop()
            component.append(node)
            for neighbor in adjacency.get(node, set()):
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append(neighbor)
        components.append(sorted(component))

    return components


__all__ = [
    'find_polygon_pairs',
    'build_adjacency_graph',
    'find_connected_components',
]
