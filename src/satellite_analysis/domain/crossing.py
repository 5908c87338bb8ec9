# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Bisection refinement of state transitions.

Locates the instant at which a discrete-valued function of time switches
from one known state to another between two samples.
"""
from typing import Any, Callable


def find_crossing(
    f: Callable[..., Any],
    t0: float,
    t1: float,
    state0: Any,
    state1: Any,
    *args: Any,
    tolerance: float = 1e-3,
    max_iterations: int = 100,
    **kwargs: Any,
) -> float:
    """Find the time at which ``f`` changes from ``state0`` to ``state1``.

    Assumes ``f(t0) == state0`` and ``f(t1) == state1``. Extra positional
    and keyword arguments are forwarded to ``f`` after the time.

    Args:
        f: Function f(t, *args, **kwargs) returning a discrete state.
        t0: Left bound (seconds), where f is in ``state0``.
        t1: Right bound (seconds), where f is in ``state1``.
        state0: State at the left bound.
        state1: State at the right bound.
        tolerance: Bracket width at which the search stops.
        max_iterations: Maximum number of evaluations of f. Hitting the
            limit is not an error; the current estimate is returned.

    Returns:
        Upper bound of the final bracket, i.e. the first time known to be
        in ``state1``.

    Raises:
        ValueError: If the bracket is empty or reversed, if both states
            are equal, or if f returns a state other than state0/state1.
    """
    if not t0 < t1:
        raise ValueError(f"Invalid bracket: t0={t0} must be smaller than t1={t1}")
    if state0 == state1:
        raise ValueError(f"The two states must differ, got {state0!r} for both")

    lower = float(t0)
    upper = float(t1)

    for _ in range(max_iterations):
        if upper - lower < tolerance:
            break

        t_mid = (lower + upper) / 2.0
        state = f(t_mid, *args, **kwargs)

        if state == state0:
            lower = t_mid
        elif state == state1:
            upper = t_mid
        else:
            raise ValueError(
                f"The function returned an unexpected state {state!r} at t={t_mid} "
                f"(expected {state0!r} or {state1!r})"
            )

    return upper
