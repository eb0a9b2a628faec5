# daygrid/forest.py
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .interval import events_overlap
from .model import Event, OverlapNode
from .validate import LayoutError, UnsortedEvents, assert_valid_events


def layout_sort_key(e: Event) -> Tuple[int, int, str]:
    # start ascending, longer first on equal start, id keeps ties stable
    return (int(e.start_ms), -e.duration_ms, e.id)


def sort_events(events: Sequence[Event]) -> List[Event]:
    return sorted(events, key=layout_sort_key)


def is_layout_sorted(events: Sequence[Event]) -> bool:
    for a, b in zip(events, events[1:]):
        if layout_sort_key(a)[:2] > layout_sort_key(b)[:2]:
            return False
    return True


def _claim(events: Sequence[Event]) -> Tuple[List[int], List[Optional[int]], List[List[int]], List[int]]:
    """First pass: pick roots, then claim children depth-first.

    Returns (roots, parent, children, level).
    """
    n = len(events)
    parent: List[Optional[int]] = [None] * n
    children: List[List[int]] = [[] for _ in range(n)]
    level = [0] * n
    claimed = [False] * n

    roots: List[int] = []
    for i, e in enumerate(events):
        if not any(events_overlap(e, events[r]) for r in roots):
            roots.append(i)
            claimed[i] = True

    for r in roots:
        # [node, scan cursor]; a child's subtree is finished before its
        # parent looks at the next candidate.
        stack: List[List[int]] = [[r, 0]]
        while stack:
            frame = stack[-1]
            node, cursor = frame
            node_start = events[node].start_ms
            found = -1
            for j in range(cursor, n):
                if claimed[j] or events[j].start_ms < node_start:
                    continue
                if events_overlap(events[node], events[j]):
                    found = j
                    break
            if found < 0:
                stack.pop()
                continue
            frame[1] = found + 1
            claimed[found] = True
            parent[found] = node
            level[found] = level[node] + 1
            children[node].append(found)
            stack.append([found, 0])

    return roots, parent, children, level


def _preorder(roots: Sequence[int], children: Sequence[Sequence[int]]) -> List[int]:
    order: List[int] = []
    for r in roots:
        stack = [r]
        while stack:
            node = stack.pop()
            order.append(node)
            stack.extend(reversed(children[node]))
    return order


def build_forest(events: Sequence[Event]) -> Dict[int, OverlapNode]:
    """Build the overlap forest ("stairs") for one window's timed events.

    `events` must be timed, valid (start <= end) and in layout order
    (see sort_events). Keys of the result are positions in `events`.

    Each event is claimed by at most one parent: the first node, in
    depth-first order, that overlaps it and does not start after it.
    Levels follow tree depth. Every node of a tree reports the tree's
    height as its depth, so a whole branch shares one column count.
    """
    if not events:
        return {}

    for i, e in enumerate(events):
        if e.is_all_day:
            raise LayoutError(f"events[{i}] ({e.id}): all-day events cannot be stacked")
    assert_valid_events(events)
    if not is_layout_sorted(events):
        raise UnsortedEvents("events must be sorted by start ascending, then duration descending")

    roots, parent, children, level = _claim(events)
    order = _preorder(roots, children)

    height = [1] * len(events)
    for node in reversed(order):
        if children[node]:
            height[node] = 1 + max(height[c] for c in children[node])

    depth = [1] * len(events)
    for node in order:
        p = parent[node]
        depth[node] = height[node] if p is None else depth[p]

    return {
        i: OverlapNode(children=tuple(children[i]), level=level[i], depth=depth[i], parent=parent[i])
        for i in range(len(events))
    }


def forest_roots(forest: Dict[int, OverlapNode]) -> List[int]:
    return sorted(i for i, node in forest.items() if node.parent is None)


__all__ = [
    "layout_sort_key",
    "sort_events",
    "is_layout_sorted",
    "build_forest",
    "forest_roots",
]
