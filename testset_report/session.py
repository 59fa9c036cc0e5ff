"""Opening and closing of result groups during a test run."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from testset_report.display.base import DisplayRenderer, SilentRenderer
from testset_report.display.mirror import display_tree
from testset_report.errors import NoOpenGroupError
from testset_report.flattener import flatten
from testset_report.models.config import ReportConfig
from testset_report.models.group import Group, properties, set_elapsed, start_time
from testset_report.models.outcome import Outcome
from testset_report.recorder import record

log = logging.getLogger(__name__)


def finish(
    group: Group,
    *,
    parent: Group | None = None,
    renderer: DisplayRenderer | None = None,
    config: ReportConfig | None = None,
    now: datetime | None = None,
) -> Group:
    """Seal a group once its block of tests has completed.

    The elapsed time is fixed first. A nested group is then recorded into
    ``parent`` and left as is. The outermost group (no ``parent``) is
    displayed and flattened into report shape.

    Args:
        group: Group whose block has just closed
        parent: Enclosing open group, None for the outermost group
        renderer: Display collaborator, defaults to rendering nothing
        config: Flattening settings
        now: Closing time, defaults to the current time

    Returns:
        The same ``group``

    """
    now = now or datetime.now()
    if group.is_reporting:
        set_elapsed(group, now - start_time(group))

    if parent is not None:
        record(parent, group, now=now)
        return group

    display_tree(group, renderer or SilentRenderer())
    return flatten(group, config)


class TestSession:
    """Explicit stack of open groups for one test run.

    Groups are opened and closed in nesting order. Closing the outermost
    group produces the flattened tree.
    """

    __test__ = False

    def __init__(
        self,
        *,
        renderer: DisplayRenderer | None = None,
        config: ReportConfig | None = None,
    ) -> None:
        self.renderer = renderer or SilentRenderer()
        self.config = config or ReportConfig()
        self._stack: list[Group] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def current(self) -> Group:
        """Innermost open group."""
        if not self._stack:
            raise NoOpenGroupError("No group is open in this session")
        return self._stack[-1]

    def open(self, description: str, *, reporting: bool = True) -> Group:
        """Open a group nested in the current one, if any."""
        if reporting:
            group = Group.reporting(description)
        else:
            group = Group.plain(description)
        self._stack.append(group)
        return group

    def close(self) -> Group:
        """Close the innermost group; see ``finish``."""
        group = self.current
        self._stack.pop()
        parent = self._stack[-1] if self._stack else None
        return finish(
            group, parent=parent, renderer=self.renderer, config=self.config
        )

    @contextmanager
    def group(self, description: str, *, reporting: bool = True) -> Iterator[Group]:
        """Open a group for the duration of a block of tests.

        An exception escaping the block is recorded as an error outcome in
        the group rather than propagated, and the group is always closed.
        """
        group = self.open(description, reporting=reporting)
        try:
            yield group
        except Exception as exc:
            log.debug("Exception in group %s recorded as error", description)
            record(group, Outcome.from_exception(exc))
        finally:
            self.close()

    def record(self, outcome: Outcome) -> Outcome:
        """Record an outcome into the current group."""
        return record(self.current, outcome)

    def record_property(self, name: str, value: Any) -> None:
        """Set a property on the current group.

        Properties are inherited by nested groups that do not set the same
        name when the tree is flattened.
        """
        group = self.current
        group_properties = properties(group)
        if group_properties is None:
            log.warning(
                "Property %s not recorded: group %s cannot hold properties",
                name,
                group.description,
            )
            return
        group_properties[name] = value
