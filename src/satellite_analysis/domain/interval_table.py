# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Access and gap interval tables.

Intervals are produced as offsets in seconds from the propagator epoch
and converted to UTC datetimes here, together with their durations in
the requested unit.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterator, Sequence

_log = logging.getLogger(__name__)

ACCESS_DESCRIPTION = "Accesses to the ground facilities."
GAP_DESCRIPTION = "Gaps to the ground facilities."


class DurationUnit(Enum):
    """Unit of a duration column."""
    SECONDS = "s"
    MINUTES = "m"
    HOURS = "h"

    @property
    def seconds(self) -> float:
        """Number of seconds in one unit."""
        return _UNIT_SECONDS[self]


_UNIT_SECONDS = {
    DurationUnit.SECONDS: 1.0,
    DurationUnit.MINUTES: 60.0,
    DurationUnit.HOURS: 3600.0,
}


def resolve_duration_unit(unit) -> DurationUnit:
    """Map a unit symbol to a DurationUnit.

    Accepts a DurationUnit, ``"s"``, ``"m"``, ``"h"`` (optionally written
    ``":s"``). Any other value falls back to seconds without raising.
    """
    if isinstance(unit, DurationUnit):
        return unit
    try:
        return DurationUnit(str(unit).lstrip(":"))
    except ValueError:
        _log.debug("Unknown duration unit %r, using seconds", unit)
        return DurationUnit.SECONDS


class IntervalKind(Enum):
    ACCESS = "access"
    GAP = "gap"


@dataclass(frozen=True)
class IntervalRow:
    """One interval: UTC beginning, UTC end and duration in the table unit."""
    beginning: datetime
    end: datetime
    duration: float


@dataclass(frozen=True)
class IntervalTable:
    """Ordered, non-overlapping intervals with table-level metadata."""
    rows: tuple[IntervalRow, ...]
    description: str
    unit: DurationUnit
    kind: IntervalKind

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[IntervalRow]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> IntervalRow:
        return self.rows[index]

    @property
    def column_names(self) -> tuple[str, str, str]:
        prefix = self.kind.value
        return (f"{prefix}_beginning", f"{prefix}_end", "duration")

    @property
    def beginnings(self) -> list[datetime]:
        return [row.beginning for row in self.rows]

    @property
    def ends(self) -> list[datetime]:
        return [row.end for row in self.rows]

    @property
    def durations(self) -> list[float]:
        return [row.duration for row in self.rows]

    @property
    def total_duration(self) -> float:
        """Sum of the durations, in the table unit."""
        return sum(self.durations)


def _rows(
    intervals: Sequence[tuple[float, float]],
    epoch: datetime,
    unit: DurationUnit,
) -> tuple[IntervalRow, ...]:
    return tuple(
        IntervalRow(
            beginning=epoch + timedelta(seconds=begin),
            end=epoch + timedelta(seconds=end),
            duration=(end - begin) / unit.seconds,
        )
        for begin, end in intervals
    )


def build_access_table(
    intervals: Sequence[tuple[float, float]],
    epoch: datetime,
    unit="s",
) -> IntervalTable:
    """Access table from (begin, end) offsets in seconds from ``epoch``."""
    resolved = resolve_duration_unit(unit)
    return IntervalTable(
        rows=_rows(intervals, epoch, resolved),
        description=ACCESS_DESCRIPTION,
        unit=resolved,
        kind=IntervalKind.ACCESS,
    )


def complement_intervals(
    intervals: Sequence[tuple[float, float]],
    start: float,
    end: float,
) -> list[tuple[float, float]]:
    """
    Intervals of [start, end] not covered by the sorted, disjoint ``intervals``.

    An empty input yields the whole window, even when it has zero length.
    """
    if not intervals:
        return [(start, end)]

    gaps = []
    if intervals[0][0] != start:
        gaps.append((start, intervals[0][0]))
    for (_, previous_end), (next_begin, _) in zip(intervals, intervals[1:]):
        gaps.append((previous_end, next_begin))
    if intervals[-1][1] != end:
        gaps.append((intervals[-1][1], end))
    return gaps


def build_gap_table(
    intervals: Sequence[tuple[float, float]],
    start: float,
    end: float,
    epoch: datetime,
    unit="s",
) -> IntervalTable:
    """Gap table complementing the access ``intervals`` over [start, end]."""
    resolved = resolve_duration_unit(unit)
    return IntervalTable(
        rows=_rows(complement_intervals(intervals, start, end), epoch, resolved),
        description=GAP_DESCRIPTION,
        unit=resolved,
        kind=IntervalKind.GAP,
    )
