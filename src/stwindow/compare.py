"""
Equivalence check between the in-memory and the delegated subset.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from logging import getLogger

from stwindow.records import PointRecord

logger = getLogger("STWindow")


@dataclass
class SubsetComparison:
    matched_ids: set[int] = field(default_factory=set)
    only_in_memory: set[int] = field(default_factory=set)
    only_delegated: set[int] = field(default_factory=set)
    coordinate_mismatches: set[int] = field(default_factory=set)
    time_mismatches: set[int] = field(default_factory=set)

    @property
    def equivalent(self) -> bool:
        return not (self.only_in_memory or self.only_delegated or self.coordinate_mismatches or self.time_mismatches)

    def summary(self) -> str:
        return (
            f"matched={len(self.matched_ids)} only_in_memory={len(self.only_in_memory)} "
            f"only_delegated={len(self.only_delegated)} coordinate_mismatches={len(self.coordinate_mismatches)} "
            f"time_mismatches={len(self.time_mismatches)}"
        )


def _by_id(records: Iterable[PointRecord], label: str) -> dict[int, PointRecord]:
    indexed: dict[int, PointRecord] = {}
    for record in records:
        if record.id is None:
            raise ValueError(f"{label} record without id: {record}")
        indexed[record.id] = record
    return indexed


def compare_subsets(in_memory: Iterable[PointRecord], delegated: Iterable[PointRecord], tolerance: float = 1e-6) -> SubsetComparison:
    """
    Compare two subsets by record id, ignoring order.

    Coordinates of matched records may differ by at most ``tolerance``; times
    must be equal.
    """
    left = _by_id(in_memory, "In-memory")
    right = _by_id(delegated, "Delegated")

    result = SubsetComparison(
        matched_ids=left.keys() & right.keys(),
        only_in_memory=left.keys() - right.keys(),
        only_delegated=right.keys() - left.keys(),
    )
    for record_id in result.matched_ids:
        a, b = left[record_id], right[record_id]
        if not (math.isclose(a.x, b.x, rel_tol=0.0, abs_tol=tolerance) and math.isclose(a.y, b.y, rel_tol=0.0, abs_tol=tolerance)):
            result.coordinate_mismatches.add(record_id)
        if a.time != b.time:
            result.time_mismatches.add(record_id)

    if result.equivalent:
        logger.info(f"Subsets are equivalent ({len(result.matched_ids)} records)")
    else:
        logger.warning(f"Subsets differ: {result.summary()}")
    return result
