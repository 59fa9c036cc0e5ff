"""Models for individual test outcomes."""

import traceback
from dataclasses import dataclass
from datetime import timedelta
from typing import Literal, Self

OutcomeKind = Literal["pass", "fail", "broken", "error"]

PROBLEM_KINDS: frozenset[str] = frozenset({"fail", "error"})


@dataclass(frozen=True, kw_only=True)
class Outcome:
    """Result of a single test, as decided by the execution engine.

    Broken marks an expected failure and is not a problem. Diagnostic fields
    are only meaningful for fail and error outcomes.
    """

    kind: OutcomeKind
    expression: str | None = None
    message: str | None = None
    source: str | None = None
    backtrace: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException, *, source: str | None = None) -> Self:
        """Build an error outcome for an exception that escaped a test block."""
        return cls(
            kind="error",
            message=f"{type(exc).__name__}: {exc}",
            source=source,
            backtrace="".join(traceback.format_exception(exc)),
        )


@dataclass(frozen=True, kw_only=True, eq=False)
class TimedOutcome:
    """Outcome decorated with the wall-clock time attributed to it.

    Equality and hashing only consider the wrapped outcome.
    """

    outcome: Outcome
    duration: timedelta

    @property
    def kind(self) -> OutcomeKind:
        return self.outcome.kind

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TimedOutcome):
            return self.outcome == other.outcome
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.outcome)


type Leaf = Outcome | TimedOutcome


def unwrap(leaf: Leaf) -> Outcome:
    """Return the plain outcome behind a leaf."""
    if isinstance(leaf, TimedOutcome):
        return leaf.outcome
    return leaf


def attributed_duration(leaf: Leaf) -> timedelta:
    """Time attributed to a leaf; untimed outcomes count as zero."""
    if isinstance(leaf, TimedOutcome):
        return leaf.duration
    return timedelta(0)


def is_pass(leaf: object) -> bool:
    """Check whether a leaf is a pass, looking through timing wrappers."""
    if isinstance(leaf, TimedOutcome):
        return is_pass(leaf.outcome)
    return isinstance(leaf, Outcome) and leaf.kind == "pass"
