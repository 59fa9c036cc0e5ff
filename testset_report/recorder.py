"""Recording of outcomes and nested groups into a group."""

from datetime import datetime

from testset_report.models.group import Group, Node
from testset_report.models.outcome import Outcome, TimedOutcome


def record[N: Node](group: Group, node: N, *, now: datetime | None = None) -> N:
    """Append a node to a group and return it.

    Outcomes recorded into a reporting group are wrapped with the time elapsed
    since the previous record into that group. Plain groups store nodes as
    given and keep no timing. Recording never raises on fail or error
    outcomes; they are collected like any other result.
    """
    metadata = group.metadata
    if metadata is None:
        group.children.append(node)
        return node

    now = now or datetime.now()
    if isinstance(node, Outcome):
        group.children.append(
            TimedOutcome(outcome=node, duration=now - metadata.last_record_time)
        )
    else:
        group.children.append(node)
    metadata.last_record_time = now
    return node
