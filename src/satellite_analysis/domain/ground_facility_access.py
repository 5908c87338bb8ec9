# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Ground facility accesses and gaps.

The analysis window is sampled at a fixed step, split into contiguous
chunks and scanned concurrently. Each chunk runs a three-state machine
over its samples and refines every visibility transition by bisection.
Chunk results are merged in chunk order, fusing accesses that were cut
at a chunk boundary, so the result does not depend on the chunk count.

Chunk k scans its own samples plus the first sample of chunk k+1. An
access still open at that shared sample is closed there, and chunk k+1
reopens it at the same instant, which is what the merge fuses.
"""
import copy
import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from satellite_analysis.domain.coordinate_frames import r_tod_to_pef
from satellite_analysis.domain.crossing import find_crossing
from satellite_analysis.domain.interval_table import (
    IntervalTable,
    build_access_table,
    build_gap_table,
)
from satellite_analysis.domain.time_systems import SECONDS_PER_DAY, jd_to_datetime
from satellite_analysis.domain.visibility import (
    FacilityFrame,
    Reduction,
    as_facilities,
    is_visible,
)
from satellite_analysis.ports import FrameConverter, OrbitPropagator

_log = logging.getLogger(__name__)

Interval = tuple[float, float]


class VisibilityState(Enum):
    """State of a chunk scan."""
    INITIAL = "initial"
    NOT_VISIBLE = "not_visible"
    VISIBLE = "visible"


@dataclass(frozen=True)
class ChunkScan:
    """Accesses found in one chunk, with the sample range it covered."""
    index: int
    first_time: float
    last_time: float
    accesses: tuple[Interval, ...]


# ── Time domain ──────────────────────────────────────────────────────

def time_samples(initial_time: float, duration: float, step: float) -> list[float]:
    """
    Sample times t₀ + k·step strictly before the window end, then the end.

    A zero-length window yields the single sample t₀.
    """
    end = initial_time + duration
    samples = []
    k = 0
    while True:
        t = initial_time + k * step
        if t >= end:
            break
        samples.append(t)
        k += 1
    samples.append(end)
    return samples


def partition_samples(n_samples: int, num_chunks: int) -> list[range]:
    """
    Split sample indices 0..n-1 into contiguous, near-equal chunks.

    The first ``n % p`` chunks hold one extra sample. The chunk count is
    clamped to the number of samples.
    """
    if num_chunks < 1:
        raise ValueError(f"num_chunks must be at least 1, got {num_chunks}")
    if n_samples <= 0:
        return []

    num_chunks = min(num_chunks, n_samples)
    size, rem = divmod(n_samples, num_chunks)

    chunks = []
    start = 0
    for k in range(num_chunks):
        stop = start + size + (1 if k < rem else 0)
        chunks.append(range(start, stop))
        start = stop
    return chunks


# ── Scanner ──────────────────────────────────────────────────────────

def scan_chunk(
    visible_at: Callable[[float], bool],
    times: Sequence[float],
    tolerance: float = 1e-3,
    max_iterations: int = 100,
) -> list[Interval]:
    """
    Scan ordered sample times and return the (begin, end) access intervals.

    An access visible at the first sample starts exactly there; one still
    visible at the last sample ends exactly there. Transitions between
    samples are refined with ``find_crossing``.
    """
    accesses: list[Interval] = []
    state = VisibilityState.INITIAL
    begin = 0.0
    previous = 0.0

    def _close(end: float) -> None:
        if begin < end:
            accesses.append((begin, end))

    for t in times:
        visible = bool(visible_at(t))

        if state is VisibilityState.INITIAL:
            if visible:
                begin = t
                state = VisibilityState.VISIBLE
            else:
                state = VisibilityState.NOT_VISIBLE

        elif state is VisibilityState.NOT_VISIBLE and visible:
            begin = find_crossing(
                visible_at, previous, t, False, True,
                tolerance=tolerance, max_iterations=max_iterations,
            )
            state = VisibilityState.VISIBLE

        elif state is VisibilityState.VISIBLE and not visible:
            _close(find_crossing(
                visible_at, previous, t, True, False,
                tolerance=tolerance, max_iterations=max_iterations,
            ))
            state = VisibilityState.NOT_VISIBLE

        previous = t

    if state is VisibilityState.VISIBLE:
        _close(times[-1])

    return accesses


def merge_chunk_accesses(chunks: Sequence[ChunkScan]) -> list[Interval]:
    """Concatenate chunk results in index order, fusing end == next begin."""
    merged: list[Interval] = []
    for chunk in sorted(chunks, key=lambda c: c.index):
        for begin, end in chunk.accesses:
            if merged and merged[-1][1] == begin:
                merged[-1] = (merged[-1][0], end)
            else:
                merged.append((begin, end))
    return merged


def _visibility_function(
    propagator: OrbitPropagator,
    frames: Sequence[FacilityFrame],
    minimum_elevation: float,
    reduction: Reduction,
    frame_converter: FrameConverter,
) -> Callable[[float], bool]:
    epoch = propagator.epoch

    def visible_at(t: float) -> bool:
        r_inertial, _ = propagator.propagate(t)
        r_fixed = frame_converter(r_inertial, epoch + t / SECONDS_PER_DAY)
        return is_visible(r_fixed, frames, minimum_elevation, reduction)

    return visible_at


def _scan_task(
    index: int,
    propagator: OrbitPropagator,
    times: Sequence[float],
    frames: Sequence[FacilityFrame],
    minimum_elevation: float,
    reduction: Reduction,
    frame_converter: FrameConverter,
) -> ChunkScan:
    visible_at = _visibility_function(
        propagator, frames, minimum_elevation, reduction, frame_converter,
    )
    return ChunkScan(
        index=index,
        first_time=times[0],
        last_time=times[-1],
        accesses=tuple(scan_chunk(visible_at, times)),
    )


# ── Public API ───────────────────────────────────────────────────────

def _validate(
    duration: float,
    step: float,
    minimum_elevation: float,
    num_chunks: int | None,
    max_workers: int | None,
) -> None:
    if not duration >= 0:
        raise ValueError(f"duration must be non-negative, got {duration}")
    if not step > 0:
        raise ValueError(f"step must be positive, got {step}")
    if not abs(minimum_elevation) <= math.pi / 2:
        raise ValueError(
            f"minimum_elevation must be within [-π/2, π/2] rad, got {minimum_elevation}"
        )
    if num_chunks is not None and num_chunks < 1:
        raise ValueError(f"num_chunks must be at least 1, got {num_chunks}")
    if max_workers is not None and max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")


def ground_facility_access_intervals(
    propagator: OrbitPropagator,
    facilities,
    *,
    duration: float = 86400.0,
    initial_time: float = 0.0,
    minimum_elevation: float = math.radians(10),
    step: float = 60.0,
    reduction: Reduction = any,
    frame_converter: FrameConverter = r_tod_to_pef,
    num_chunks: int | None = None,
    max_workers: int | None = None,
) -> list[Interval]:
    """
    Access intervals as (begin, end) offsets in seconds from the propagator epoch.

    See ``ground_facility_accesses`` for the arguments. The propagator is
    never propagated directly; every chunk works on its own deep copy.
    """
    _validate(duration, step, minimum_elevation, num_chunks, max_workers)

    sites = as_facilities(facilities)
    if not sites or duration == 0:
        _log.debug("Empty analysis (%d facilities, duration %s s)", len(sites), duration)
        return []

    frames = [FacilityFrame.from_facility(site) for site in sites]
    times = time_samples(initial_time, duration, step)
    chunks = partition_samples(len(times), num_chunks or os.cpu_count() or 1)
    workers = min(max_workers or os.cpu_count() or 1, len(chunks))

    _log.debug(
        "Scanning %d samples in %d chunks on %d workers (%d facilities)",
        len(times), len(chunks), workers, len(frames),
    )

    results: dict[int, ChunkScan] = {}
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(
                _scan_task,
                index,
                copy.deepcopy(propagator),
                times[chunk.start:chunk.stop + 1],
                frames,
                minimum_elevation,
                reduction,
                frame_converter,
            ): index
            for index, chunk in enumerate(chunks)
        }
        for future in as_completed(futures):
            results[futures[future]] = future.result()

    accesses = merge_chunk_accesses([results[k] for k in range(len(chunks))])
    _log.debug("Found %d accesses", len(accesses))
    return accesses


def ground_facility_accesses(
    propagator: OrbitPropagator,
    facilities,
    *,
    duration: float = 86400.0,
    initial_time: float = 0.0,
    minimum_elevation: float = math.radians(10),
    step: float = 60.0,
    reduction: Reduction = any,
    frame_converter: FrameConverter = r_tod_to_pef,
    num_chunks: int | None = None,
    max_workers: int | None = None,
    unit="s",
) -> IntervalTable:
    """
    Compute the accesses of a satellite to one or more ground facilities.

    Args:
        propagator: OrbitPropagator; deep-copied once per chunk.
        facilities: GroundFacility or (lat [rad], lon [rad], alt [m]), or a
            sequence of them.
        duration: Analysis duration (s).
        initial_time: Start of the analysis, seconds after the propagator epoch.
        minimum_elevation: Elevation (rad) the satellite must exceed.
        step: Sampling step (s). Accesses shorter than the step may be missed.
        reduction: Function reducing the per-facility visibility list to
            one boolean. Default ``any``; use ``all`` to require every facility.
        frame_converter: Inertial → Earth-fixed conversion matching the
            propagator frame. Must be safe to call from several threads.
        num_chunks: Number of chunks the window is split into. Default
            ``os.cpu_count()``.
        max_workers: Thread pool size. Default ``os.cpu_count()``.
        unit: Duration unit, ``"s"``, ``"m"`` or ``"h"``. Unknown values
            fall back to seconds.

    Returns:
        IntervalTable of accesses with UTC beginnings and ends.

    Raises:
        ValueError: On a negative duration, a non-positive step, an
            elevation outside [-π/2, π/2] or a chunk/worker count below 1.
    """
    intervals = ground_facility_access_intervals(
        propagator, facilities,
        duration=duration, initial_time=initial_time,
        minimum_elevation=minimum_elevation, step=step, reduction=reduction,
        frame_converter=frame_converter, num_chunks=num_chunks,
        max_workers=max_workers,
    )
    return build_access_table(intervals, jd_to_datetime(propagator.epoch), unit)


def ground_facility_gaps(
    propagator: OrbitPropagator,
    facilities,
    *,
    duration: float = 86400.0,
    initial_time: float = 0.0,
    minimum_elevation: float = math.radians(10),
    step: float = 60.0,
    reduction: Reduction = any,
    frame_converter: FrameConverter = r_tod_to_pef,
    num_chunks: int | None = None,
    max_workers: int | None = None,
    unit="s",
) -> IntervalTable:
    """
    Compute the gaps between accesses over the analysis window.

    Takes the same arguments as ``ground_facility_accesses``. Accesses and
    gaps together tile [initial_time, initial_time + duration].
    """
    intervals = ground_facility_access_intervals(
        propagator, facilities,
        duration=duration, initial_time=initial_time,
        minimum_elevation=minimum_elevation, step=step, reduction=reduction,
        frame_converter=frame_converter, num_chunks=num_chunks,
        max_workers=max_workers,
    )
    return build_gap_table(
        intervals,
        initial_time,
        initial_time + duration,
        jd_to_datetime(propagator.epoch),
        unit,
    )
