"""Plain copy of a result tree for display before it is flattened."""

import logging

from testset_report.display.base import DisplayRenderer
from testset_report.errors import TestsFailedError
from testset_report.models.group import Group, Node
from testset_report.models.outcome import TimedOutcome
from testset_report.recorder import record

log = logging.getLogger(__name__)


def build_display_tree(group: Group) -> Group:
    """Mirror ``group`` as a tree of plain groups keeping the original nesting.

    Timing wrappers are dropped and reporting groups are copied into plain
    groups of the same description. Plain child groups are shared, not copied.
    The root of the mirror has an empty description.
    """
    mirror = Group.plain("")
    _add_children(mirror, group.children)
    return mirror


def _add_children(mirror: Group, children: list[Node]) -> None:
    for child in children:
        if isinstance(child, TimedOutcome):
            record(mirror, child.outcome)
        elif isinstance(child, Group) and child.is_reporting:
            sub_mirror = Group.plain(child.description)
            _add_children(sub_mirror, child.children)
            record(mirror, sub_mirror)
        else:
            record(mirror, child)


def display_tree(group: Group, renderer: DisplayRenderer) -> None:
    """Render a plain mirror of ``group`` without letting rendering fail.

    The failure signal a renderer raises is expected and ignored. Any other
    error is logged, so that flattening of the tree still goes ahead.
    """
    mirror = build_display_tree(group)
    try:
        renderer.render(mirror)
    except TestsFailedError:
        log.debug("Renderer reported failures in %s", group.description)
    except Exception as exc:
        log.warning(
            "Renderer %s failed to display %s: %s",
            type(renderer).__name__,
            group.description,
            exc,
            exc_info=exc,
        )
