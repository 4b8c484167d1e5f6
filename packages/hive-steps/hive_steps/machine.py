"""StepMachine - named step handlers with explicit next-step returns."""
from __future__ import annotations

from typing import Any, Callable

StepHandler = Callable[..., str]


class StepMachine:
    """Maps step names to handlers. Each handler returns the next step name.

    A handler registered with ``chain=True`` lets the step it transitions to
    run within the same call to :meth:`advance`, up to ``max_chain`` extra
    handlers. Unknown or missing steps reset to ``initial`` without running
    any handler.
    """

    def __init__(self, initial: str, max_chain: int = 2) -> None:
        if max_chain < 0:
            raise ValueError(f"max_chain must be >= 0, got {max_chain}")
        self._initial = initial
        self._max_chain = max_chain
        self._handlers: dict[str, StepHandler] = {}
        self._chained: set[str] = set()

    @property
    def initial(self) -> str:
        return self._initial

    def register(self, step: str, fn: StepHandler, *, chain: bool = False) -> None:
        """Register a step handler. Overwrites if already registered."""
        self._handlers[step] = fn
        if chain:
            self._chained.add(step)
        else:
            self._chained.discard(step)

    def has(self, step: str | None) -> bool:
        return step is not None and step in self._handlers

    def steps(self) -> list[str]:
        return list(self._handlers)

    def advance(self, step: str | None, *args: Any) -> str:
        """Run the handler for *step* and return the step to persist."""
        if not self.has(step):
            return self._initial
        current: str = step  # type: ignore[assignment]
        for _ in range(self._max_chain + 1):
            nxt = self._handlers[current](*args)
            if not self.has(nxt):
                return self._initial
            if nxt == current or current not in self._chained:
                return nxt
            current = nxt
        return current
