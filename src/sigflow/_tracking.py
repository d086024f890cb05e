"""Dependency tracking engine — the heart of sigflow.

Uses contextvars to track which computation is currently executing, so any
signal read during its run registers an edge to it automatically.

Batching: writes inside batch()/transaction()/@action queue their dependents
and flush them once when the outermost scope exits.

Recursion guard: every execution bumps a shared depth counter. A chain that
reaches the threshold is a feedback loop and fails fast.
"""

from __future__ import annotations

import contextvars
import itertools
import logging
from typing import TYPE_CHECKING

from sigflow.errors import RecursionLimitError

if TYPE_CHECKING:
    from sigflow.effect import Effect

logger = logging.getLogger("sigflow.tracking")

DEFAULT_MAX_RECURSION_DEPTH = 100

# The computation whose body is running right now. Signal reads subscribe it.
current_computation: contextvars.ContextVar[Effect | None] = contextvars.ContextVar(
    "current_computation", default=None
)

# Batch depth counter. When > 0, propagation is deferred.
_batch_depth: int = 0

# Computations triggered during a batch, in order of first trigger.
_pending: dict[Effect, None] = {}

_recursion_depth: int = 0
_max_recursion_depth: int = DEFAULT_MAX_RECURSION_DEPTH

# Stable ids for signals and computations. itertools.count is GIL-atomic.
_id_counter = itertools.count(1)


def new_id() -> int:
    return next(_id_counter)


# ─── Configuration ───────────────────────────────────────────────────────────


def set_max_recursion_depth(depth: int) -> None:
    """Set how many nested executions are allowed before RecursionLimitError."""
    global _max_recursion_depth
    if depth < 1:
        raise ValueError(f"max recursion depth must be >= 1, got {depth}")
    _max_recursion_depth = depth


def get_max_recursion_depth() -> int:
    return _max_recursion_depth


# ─── Recursion guard ─────────────────────────────────────────────────────────


def check_recursion() -> None:
    """Raise RecursionLimitError if the current chain is at the threshold.

    The counter is reset first so the guard never wedges later calls.
    """
    global _recursion_depth
    depth = _recursion_depth
    if depth >= _max_recursion_depth:
        _recursion_depth = 0
        logger.warning("Reactive recursion limit reached at depth %d", depth)
        raise RecursionLimitError(depth)


def enter_execution() -> int:
    """Bump the depth counter. Returns the depth to restore on exit."""
    global _recursion_depth
    depth = _recursion_depth
    _recursion_depth = depth + 1
    return depth


def exit_execution(depth: int) -> None:
    global _recursion_depth
    _recursion_depth = depth


def get_recursion_depth() -> int:
    return _recursion_depth


# ─── Batching ────────────────────────────────────────────────────────────────


def begin_batch() -> None:
    """Enter a batching scope. Nested batches are supported."""
    global _batch_depth
    _batch_depth += 1


def end_batch() -> None:
    """Exit a batching scope. When the outermost scope exits, flush pending computations."""
    global _batch_depth
    _batch_depth -= 1
    if _batch_depth == 0:
        _flush_pending()


def schedule(computation: Effect) -> None:
    """Run a triggered computation now, or queue it if inside a batch."""
    if _batch_depth > 0:
        _pending[computation] = None
    else:
        computation.execute()


def _flush_pending() -> None:
    """Run all pending computations once each.

    The batch flag is already clear, so writes made while flushing propagate
    immediately under the recursion guard.
    """
    while _pending:
        # Snapshot and clear; a failing computation must not leave stale entries.
        batch = list(_pending)
        _pending.clear()
        logger.debug("Flushing %d pending computation(s)", len(batch))
        for computation in batch:
            computation.execute()


def get_pending_count() -> int:
    """Number of computations waiting to run. Useful for testing."""
    return len(_pending)
