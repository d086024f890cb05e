"""sigflow: fine-grained reactive signals for Python."""

from importlib.metadata import version as _version

__version__ = _version("sigflow")

from sigflow._tracking import get_max_recursion_depth, get_pending_count, set_max_recursion_depth
from sigflow.errors import RecursionLimitError
from sigflow.signal import ReadonlySignal, Signal, signal
from sigflow.effect import Effect, Watcher, effect, watch
from sigflow.computed import Computed, computed
from sigflow.batch import action, batch, transaction
# textual bridge NOT auto-imported, opt-in only

__all__ = [
    "ReadonlySignal",
    "Signal",
    "signal",
    "Computed",
    "computed",
    "Effect",
    "effect",
    "Watcher",
    "watch",
    "batch",
    "transaction",
    "action",
    "RecursionLimitError",
    "get_pending_count",
    "get_max_recursion_depth",
    "set_max_recursion_depth",
]
