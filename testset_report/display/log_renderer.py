"""Renderer that writes a per-group test summary to a logger."""

import logging
from dataclasses import dataclass

from testset_report.display.base import DisplayRenderer
from testset_report.errors import TestsFailedError
from testset_report.models.group import Group
from testset_report.models.outcome import Outcome, unwrap
from testset_report.scanner import any_problems

STATUS_SYMBOLS = {
    "pass": "✓",
    "fail": "✗",
    "error": "!",
    "broken": "~",
}


@dataclass(kw_only=True)
class OutcomeCounts:
    """Number of outcomes of each kind under a group."""

    passed: int = 0
    failed: int = 0
    errored: int = 0
    broken: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.errored + self.broken

    def add(self, outcome: Outcome) -> None:
        match outcome.kind:
            case "pass":
                self.passed += 1
            case "fail":
                self.failed += 1
            case "error":
                self.errored += 1
            case "broken":
                self.broken += 1


def count_outcomes(group: Group) -> OutcomeCounts:
    """Count outcomes of every kind under ``group``, at any depth."""
    counts = OutcomeCounts()
    stack = [group]
    while stack:
        current = stack.pop()
        for child in current.children:
            if isinstance(child, Group):
                stack.append(child)
            else:
                counts.add(unwrap(child))
    return counts


class LogRenderer(DisplayRenderer):
    """Logs one summary block per top-level group, then signals failures."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.log = logger or logging.getLogger(__name__)

    def render(self, tree: Group) -> None:
        for child in tree.children:
            if isinstance(child, Group):
                self.log.info("=" * 80)
                self.log.info("Test Summary: %s", child.description)
                self.log.info("=" * 80)
                self._log_group(child, depth=0)
            else:
                self._log_outcome(unwrap(child), depth=0)

        if any_problems(tree):
            raise TestsFailedError("Some tests did not pass")

    def _log_group(self, group: Group, depth: int) -> None:
        counts = count_outcomes(group)
        self.log.info(
            "%s%s | pass=%d fail=%d error=%d broken=%d total=%d",
            "  " * depth,
            group.description,
            counts.passed,
            counts.failed,
            counts.errored,
            counts.broken,
            counts.total,
        )
        for child in group.children:
            if isinstance(child, Group):
                self._log_group(child, depth + 1)
            else:
                outcome = unwrap(child)
                if outcome.kind in {"fail", "error"}:
                    self._log_outcome(outcome, depth + 1)

    def _log_outcome(self, outcome: Outcome, depth: int) -> None:
        symbol = STATUS_SYMBOLS.get(outcome.kind, "?")
        self.log.info(
            "%s%s %s: %s",
            "  " * depth,
            symbol,
            outcome.kind,
            outcome.expression or "<unnamed>",
        )
        if outcome.source:
            self.log.info("%s  At: %s", "  " * depth, outcome.source)
        if outcome.message:
            self.log.info("%s  Message: %s", "  " * depth, outcome.message)
