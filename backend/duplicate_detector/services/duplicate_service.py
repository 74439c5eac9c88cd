"""Batch clustering and single-receipt lookup.

The two public operations are pure: they read the receipts they are
given, never mutate them, and keep all working state local to the call,
so concurrent requests need no coordination.

:func:`find_duplicates` partitions a batch into duplicate groups. The
default ``anchor`` mode makes one left-to-right pass: the first
unprocessed receipt anchors a group, and every later unprocessed
receipt that matches *the anchor* joins it. Membership is therefore not
transitive. Given A~B and B~C but not A~C, C is only grouped with A if
it matches A directly; otherwise C is left for a later anchor. Callers
rely on this grouping shape, so it is the default.

The ``connected`` mode is the opt-in alternative: it links every
matching pair and returns the connected components of that graph.

:func:`find_matches` compares one candidate against an existing list and
reports every match independently, without grouping.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Sequence, Set

from duplicate_detector.models.enums import GroupingMode
from duplicate_detector.models.schemas import DuplicateGroup, MatchResult, Receipt
from duplicate_detector.services.matching import is_duplicate_pair

logger = logging.getLogger(__name__)


def find_duplicates(
    receipts: Sequence[Receipt],
    mode: GroupingMode = GroupingMode.ANCHOR,
) -> List[DuplicateGroup]:
    """Partition ``receipts`` into duplicate groups of two or more.

    Groups are numbered from 1 in the order their first member appears
    in the input; members keep input order.
    """
    if mode == GroupingMode.CONNECTED:
        clusters = _connected_clusters(receipts)
    else:
        clusters = _anchor_clusters(receipts)

    groups: List[DuplicateGroup] = []
    for members in clusters:
        groups.append(
            DuplicateGroup(
                group_id=len(groups) + 1,
                duplicate_count=len(members),
                receipts=[receipts[i] for i in members],
            )
        )
    logger.debug("Grouped %d receipts into %d duplicate groups (%s)", len(receipts), len(groups), mode.value)
    return groups


def find_matches(candidate: Receipt, existing: Sequence[Receipt]) -> List[MatchResult]:
    """Return a result for every existing receipt that duplicates ``candidate``."""
    return [
        MatchResult(existing_receipt=other)
        for other in existing
        if is_duplicate_pair(candidate, other)
    ]


def _anchor_clusters(receipts: Sequence[Receipt]) -> List[List[int]]:
    processed: Set[int] = set()
    clusters: List[List[int]] = []
    for i, anchor in enumerate(receipts):
        if i in processed:
            continue
        processed.add(i)
        members = [i]
        for j in range(i + 1, len(receipts)):
            if j in processed:
                continue
            if is_duplicate_pair(anchor, receipts[j]):
                members.append(j)
                processed.add(j)
        if len(members) > 1:
            clusters.append(members)
    return clusters


def _connected_clusters(receipts: Sequence[Receipt]) -> List[List[int]]:
    uf = _UnionFind(len(receipts))
    for i in range(len(receipts)):
        for j in range(i + 1, len(receipts)):
            if is_duplicate_pair(receipts[i], receipts[j]):
                uf.union(i, j)

    # Indices are visited in order, so each component lists members in input
    # order and components come out ordered by their first member.
    grouped: Dict[int, List[int]] = defaultdict(list)
    for i in range(len(receipts)):
        grouped[uf.find(i)].append(i)
    return [members for members in grouped.values() if len(members) > 1]


class _UnionFind:
    def __init__(self, size: int) -> None:
        self._parent = list(range(size))

    def find(self, item: int) -> int:
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, left: int, right: int) -> None:
        root_left = self.find(left)
        root_right = self.find(right)
        if root_left == root_right:
            return
        # Keep the lowest index as root.
        if root_right < root_left:
            root_left, root_right = root_right, root_left
        self._parent[root_right] = root_left
