"""Flattening of nested result trees into report shape.

Report formats such as JUnit XML cannot nest one suite in another, so a
finished tree is rewritten to exactly three levels: the root, named groups,
and outcomes. The root becomes the report, each remaining group a suite and
each outcome a test case.

Flattening takes ownership of the tree: groups are renamed and their
children lists replaced in place, outcomes are never touched.
"""

import logging
from collections.abc import Sequence
from datetime import timedelta

from testset_report.models.config import ReportConfig
from testset_report.models.group import (
    Group,
    Node,
    is_leaf,
    properties,
    set_elapsed,
    set_start_time,
    start_time,
)
from testset_report.models.outcome import Leaf, attributed_duration

log = logging.getLogger(__name__)


def flatten(root: Group, config: ReportConfig | None = None) -> Group:
    """Rewrite ``root`` in place so it holds only groups of outcomes.

    Outcomes recorded directly on the root are first moved into their own
    group. Every nested group then becomes a sibling named after its chain of
    ancestors, e.g. ``"outer/inner"``, inheriting the properties it does not
    already define. The root itself keeps its description and properties.

    Returns:
        The same ``root`` instance

    """
    config = config or ReportConfig()
    bucket_top_level_outcomes(root, config.top_level_description)

    flattened: list[Node] = []
    for child in root.children:
        flattened.extend(normalize(child, config))
    root.children = flattened
    return root


def bucket_top_level_outcomes(
    root: Group, description: str = "Top level tests"
) -> Group | None:
    """Move outcomes sitting directly on ``root`` into a new leading group.

    The new group is a reporting group whose elapsed time is the sum of the
    time attributed to its outcomes and whose start time is the root's.

    Returns:
        The created group, or None when the root held no outcomes

    """
    leaves = [child for child in root.children if is_leaf(child)]
    if not leaves:
        return None

    groups = [child for child in root.children if not is_leaf(child)]
    bucket = Group.reporting(description)
    bucket.children = list(leaves)
    set_elapsed(
        bucket, sum((attributed_duration(leaf) for leaf in leaves), timedelta(0))
    )
    set_start_time(bucket, start_time(root))

    root.children = [bucket, *groups]
    return bucket


def normalize(node: Node, config: ReportConfig | None = None) -> Sequence[Node]:
    """Recursively flatten ``node`` into a list of leaf-only groups.

    A leaf is returned as is so its parent can collect it. A group returns
    its flattened descendants, each prefixed with the group's description,
    followed by the group itself if it directly held any outcomes.
    """
    if not isinstance(node, Group):
        return [node]

    config = config or ReportConfig()
    leaves: list[Leaf] = []
    groups: list[Node] = []

    for child in node.children:
        for item in normalize(child, config):
            if isinstance(item, Group):
                propagate_properties(node, item, sort_keys=config.sort_property_keys)
                item.description = (
                    f"{node.description}{config.separator}{item.description}"
                )
                groups.append(item)
            else:
                leaves.append(item)

    if leaves:
        node.children = list(leaves)
        groups.append(node)
    return groups


def propagate_properties(
    parent: Group, child: Group, *, sort_keys: bool = False
) -> Group:
    """Copy properties of ``parent`` that ``child`` does not define.

    A value already set on the child always wins; the collision is logged as
    a warning. If the child cannot hold properties at all, a warning is
    logged and nothing is copied.

    Returns:
        The ``child`` group

    """
    parent_properties = properties(parent)
    if not parent_properties:
        return child

    child_properties = properties(child)
    if child_properties is None:
        log.warning(
            "Properties of group %s cannot be added to child group %s "
            "as it cannot hold properties",
            parent.description,
            child.description,
        )
        return child

    keys = sorted(parent_properties) if sort_keys else list(parent_properties)
    for key in keys:
        if key in child_properties:
            log.warning(
                "Property %s of group %s not propagated: "
                "child group %s already defines it",
                key,
                parent.description,
                child.description,
            )
        else:
            child_properties[key] = parent_properties[key]
    return child
