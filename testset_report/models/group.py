"""Containers for test results and their optional reporting metadata.

A group is either *plain* (no metadata block) or *reporting*. Code touching
metadata goes through the accessor functions in this module, which fall back
to neutral defaults for plain groups instead of assuming the block exists.
"""

import socket
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Self

from testset_report.models.outcome import Leaf, Outcome, TimedOutcome


@dataclass(kw_only=True)
class GroupMetadata:
    """Reporting metadata carried by a reporting group."""

    properties: dict[str, Any] = field(default_factory=dict)
    start_time: datetime
    elapsed: timedelta = timedelta(0)
    last_record_time: datetime
    hostname: str


@dataclass(kw_only=True, eq=False)
class Group:
    """Named, ordered container of outcomes and nested groups.

    Groups compare by identity: they are report sections that get renamed and
    re-parented in place while the tree is flattened.
    """

    description: str
    children: list["Node"] = field(default_factory=list)
    metadata: GroupMetadata | None = None

    @classmethod
    def plain(cls, description: str) -> Self:
        """Create a group without reporting metadata."""
        return cls(description=description)

    @classmethod
    def reporting(cls, description: str, now: datetime | None = None) -> Self:
        """Create a group that records properties, timing and host name."""
        now = now or datetime.now()
        return cls(
            description=description,
            metadata=GroupMetadata(
                start_time=now,
                last_record_time=now,
                hostname=socket.gethostname(),
            ),
        )

    @property
    def is_reporting(self) -> bool:
        return self.metadata is not None

    def __repr__(self) -> str:
        kind = "reporting" if self.is_reporting else "plain"
        return f"Group({self.description!r}, {kind}, {len(self.children)} children)"


type Node = Leaf | Group

LEAF_TYPES = (Outcome, TimedOutcome)


def is_leaf(node: Node) -> bool:
    return isinstance(node, LEAF_TYPES)


def properties(group: Group) -> dict[str, Any] | None:
    """Property map of a group, or None when it cannot hold properties."""
    if group.metadata is None:
        return None
    return group.metadata.properties


def start_time(group: Group) -> datetime:
    """Start time of a group; plain groups report the current time."""
    if group.metadata is None:
        return datetime.now()
    return group.metadata.start_time


def elapsed(group: Group) -> timedelta:
    """Time taken by a group; plain groups report zero."""
    if group.metadata is None:
        return timedelta(0)
    return group.metadata.elapsed


def hostname(group: Group) -> str:
    """Host a group ran on; plain groups report the local host."""
    if group.metadata is None:
        return socket.gethostname()
    return group.metadata.hostname


def set_elapsed(group: Group, value: timedelta) -> None:
    if group.metadata is not None:
        group.metadata.elapsed = value


def set_start_time(group: Group, value: datetime) -> None:
    if group.metadata is not None:
        group.metadata.start_time = value
