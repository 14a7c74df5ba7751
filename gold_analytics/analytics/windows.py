"""
Ordered window scans.

Running totals, cumulative averages and lagged values computed by walking an
already-ordered sequence once with a small accumulator. Nulls are skipped by
the aggregating scans, matching SQL window aggregates.
"""

from collections import OrderedDict
from typing import Callable, Hashable, List, Optional, Sequence, TypeVar

T = TypeVar("T")
Scan = Callable[[Sequence[Optional[float]]], List[Optional[float]]]


def running_total(values: Sequence[Optional[float]]) -> List[Optional[float]]:
    """Cumulative sum; null until the first non-null value"""
    result: List[Optional[float]] = []
    total: Optional[float] = None
    for value in values:
        if value is not None:
            total = value if total is None else total + value
        result.append(total)
    return result


def running_mean(values: Sequence[Optional[float]]) -> List[Optional[float]]:
    """Cumulative average of the non-null values seen so far"""
    result: List[Optional[float]] = []
    total = 0.0
    count = 0
    for value in values:
        if value is not None:
            total += value
            count += 1
        result.append(total / count if count else None)
    return result


def lag(values: Sequence[T], offset: int = 1, default: Optional[T] = None) -> List[Optional[T]]:
    """Value ``offset`` positions earlier, ``default`` before the start"""
    if offset < 1:
        raise ValueError("offset must be positive")
    return [values[i - offset] if i >= offset else default for i in range(len(values))]


def mean(values: Sequence[Optional[float]]) -> List[Optional[float]]:
    """Whole-sequence average repeated for every position"""
    present = [v for v in values if v is not None]
    avg = sum(present) / len(present) if present else None
    return [avg] * len(values)


def scan_partitions(
    keys: Sequence[Hashable],
    values: Sequence[Optional[float]],
    scan: Scan,
) -> List[Optional[float]]:
    """
    Apply ``scan`` separately within each partition.

    Rows keep their positions; order inside a partition is the input order.
    """
    if len(keys) != len(values):
        raise ValueError("keys and values must have the same length")

    partitions: "OrderedDict[Hashable, List[int]]" = OrderedDict()
    for index, key in enumerate(keys):
        partitions.setdefault(key, []).append(index)

    result: List[Optional[float]] = [None] * len(values)
    for indexes in partitions.values():
        scanned = scan([values[i] for i in indexes])
        for index, value in zip(indexes, scanned):
            result[index] = value
    return result


def partition_mean(
    keys: Sequence[Hashable],
    values: Sequence[Optional[float]],
) -> List[Optional[float]]:
    """Average of each row's partition"""
    return scan_partitions(keys, values, mean)
