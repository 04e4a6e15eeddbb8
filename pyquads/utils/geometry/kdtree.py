from __future__ import annotations
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from .point import Point2D


class _Node:
    """Node of a k-d tree, splitting on x at even and on y at odd depth."""

    __slots__ = ("point", "depth", "left", "right")

    def __init__(self, point: Point2D, depth: int):
        self.point = point
        self.depth = depth
        self.left: Optional[_Node] = None
        self.right: Optional[_Node] = None

    @property
    def axis(self) -> int:
        return self.depth % 2

    def children(self, query: Point2D) -> Tuple[Optional[_Node], Optional[_Node], float]:
        """Returns the child on the query's side of the splitting plane, the other child, and the
        distance of the query to the plane."""
        diff = query[self.axis] - self.point[self.axis]
        if diff < 0:
            return self.left, self.right, -diff
        else:
            return self.right, self.left, diff


class KDTree:
    """A 2-dimensional k-d tree for spatial queries on points.

    All distances inside the tree are taxicab distances. Since the taxicab distance of two points is never smaller
    than their distance along a single axis, a subtree on the far side of a splitting plane only needs to be searched,
    if the query is closer to that plane than to the best match found so far.

    The tree does not support insertion. Adding points means building it again via :meth:`build`, which is cheap
    for the few dozen points it is used for.
    """

    __module__ = "pyquads.utils.geometry"

    def __init__(self, points: Optional[Iterable[Point2D]] = None):
        """Create a new tree.

        Args:
            points: Points to build tree from, creates an empty tree if None.
        """
        self._root: Optional[_Node] = None
        if points is not None:
            self.build(points)

    def build(self, points: Iterable[Point2D]) -> None:
        """(Re-)builds the whole tree from the given points.

        Args:
            points: Points to put into tree.
        """
        pts = [p if isinstance(p, Point2D) else Point2D(*p) for p in points]
        self._root = self._build(pts, 0)

    def _build(self, points: Sequence[Point2D], depth: int) -> Optional[_Node]:
        if len(points) == 0:
            return None

        # sort along axis and split at median
        axis = depth % 2
        ordered = sorted(points, key=lambda p: p[axis])
        median = len(ordered) // 2

        node = _Node(ordered[median], depth)
        node.left = self._build(ordered[:median], depth + 1)
        node.right = self._build(ordered[median + 1 :], depth + 1)
        return node

    @property
    def count(self) -> int:
        """Number of points in tree."""

        def _count(node: Optional[_Node]) -> int:
            return 0 if node is None else 1 + _count(node.left) + _count(node.right)

        return _count(self._root)

    @property
    def is_empty(self) -> bool:
        """Whether the tree contains no points."""
        return self._root is None

    def __len__(self) -> int:
        return self.count

    def nearest_neighbor(self, query: Point2D) -> Optional[Point2D]:
        """Find the point closest to the query.

        Args:
            query: Point to search for.

        Returns:
            Closest point or None, if tree is empty.
        """
        query = Point2D(*query)
        if self._root is None:
            return None

        best: List[Tuple[float, Optional[Point2D]]] = [(math.inf, None)]

        def _search(node: Optional[_Node]) -> None:
            if node is None:
                return

            # better than current best?
            distance = query.taxicab_distance(node.point)
            if distance < best[0][0]:
                best[0] = (distance, node.point)

            # search near side first, far side only if splitting plane is closer than best match
            near, far, plane_distance = node.children(query)
            _search(near)
            if plane_distance < best[0][0]:
                _search(far)

        _search(self._root)
        return best[0][1]

    def k_nearest_neighbors(self, query: Point2D, k: int) -> List[Point2D]:
        """Find the k points closest to the query.

        Args:
            query: Point to search for.
            k: Number of points to return.

        Returns:
            Up to k points, sorted by distance to query, closest first.
        """
        query = Point2D(*query)
        if self._root is None or k <= 0:
            return []

        candidates: List[Tuple[float, Point2D]] = []

        def _farthest() -> int:
            return max(range(len(candidates)), key=lambda i: candidates[i][0])

        def _search(node: Optional[_Node]) -> None:
            if node is None:
                return

            # fill candidates or replace the farthest one
            distance = query.taxicab_distance(node.point)
            if len(candidates) < k:
                candidates.append((distance, node.point))
            else:
                idx = _farthest()
                if distance < candidates[idx][0]:
                    candidates[idx] = (distance, node.point)

            near, far, plane_distance = node.children(query)
            _search(near)

            # far side can only contain better points if plane is closer than worst candidate
            if len(candidates) < k or plane_distance < candidates[_farthest()][0]:
                _search(far)

        _search(self._root)

        # stable sort keeps traversal order for equal distances
        return [p for _, p in sorted(candidates, key=lambda c: c[0])]

    def points_within_distance(self, query: Point2D, max_distance: float) -> List[Point2D]:
        """Find all points within a given distance.

        Args:
            query: Point to search around.
            max_distance: Maximum distance, inclusive.

        Returns:
            List of points, in no particular order.
        """
        query = Point2D(*query)
        results: List[Point2D] = []

        def _search(node: Optional[_Node]) -> None:
            if node is None:
                return
            if query.taxicab_distance(node.point) <= max_distance:
                results.append(node.point)
            near, far, plane_distance = node.children(query)
            _search(near)
            if plane_distance <= max_distance:
                _search(far)

        _search(self._root)
        return results

    def has_point_within_distance(self, query: Point2D, max_distance: float) -> bool:
        """Like :meth:`points_within_distance`, but stops at the first match.

        Args:
            query: Point to search around.
            max_distance: Maximum distance, inclusive.

        Returns:
            Whether any point lies within the given distance.
        """

        def _search(node: Optional[_Node]) -> bool:
            if node is None:
                return False
            if query.taxicab_distance(node.point) <= max_distance:
                return True
            near, far, plane_distance = node.children(query)
            if _search(near):
                return True
            return plane_distance <= max_distance and _search(far)

        query = Point2D(*query)
        return _search(self._root)


__all__ = ["KDTree"]
