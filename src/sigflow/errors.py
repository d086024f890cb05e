"""Exceptions raised by the reactive runtime."""


class RecursionLimitError(RecursionError):
    """A chain of synchronous re-executions went past the configured depth.

    Almost always a feedback loop: a computation writes a signal it also
    reads (directly or through a computed). Treat it as a bug, not
    something to retry.
    """

    def __init__(self, depth: int) -> None:
        super().__init__(f"Reactive recursion limit exceeded (depth {depth})")
        self.depth = depth
