from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Sequence, TypeVar

T = TypeVar("T")
S = TypeVar("S")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one item in a batch: either a value or the exception that replaced it."""

    label: str
    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def attempt(label: str, func: Callable[[], T]) -> Outcome[T]:
    try:
        return Outcome(label=label, value=func())
    except Exception as exc:  # noqa: BLE001 - failures are collected per item
        return Outcome(label=label, error=exc)


def collect_successes(items: Iterable[S], func: Callable[[S], T], label: Callable[[S], str] = str) -> list[T]:
    """Apply ``func`` to every item and keep only the successful values, in order.

    A failing item is logged and dropped; it never stops the rest of the batch.
    """
    outcomes = [attempt(label(item), lambda item=item: func(item)) for item in items]
    values: list[T] = []
    for outcome in outcomes:
        if outcome.ok:
            values.append(outcome.value)  # type: ignore[arg-type]
        else:
            logger.warning("Skipping %s: %s", outcome.label, outcome.error)
    return values


def first_success(strategies: Sequence[tuple[str, Callable[[], T]]]) -> T:
    """Run strategies in order and return the first value that does not raise.

    Raises the last error when every strategy fails.
    """
    if not strategies:
        raise ValueError("at least one strategy is required")
    last_error: Exception | None = None
    for name, strategy in strategies:
        outcome = attempt(name, strategy)
        if outcome.ok:
            return outcome.value  # type: ignore[return-value]
        last_error = outcome.error
        logger.warning("Strategy %s failed: %s", name, outcome.error)
    assert last_error is not None
    raise last_error
