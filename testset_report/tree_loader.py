"""Load raw result trees from JSON documents."""

import logging
import socket
from datetime import datetime, timedelta
from pathlib import Path

from pydantic import ValidationError

from testset_report.models.document import GroupDocument, OutcomeDocument
from testset_report.models.group import Group, GroupMetadata
from testset_report.models.outcome import Outcome, TimedOutcome

log = logging.getLogger(__name__)


def load_result_tree(path: Path) -> Group:
    """Load and convert a result tree document.

    Args:
        path: JSON file holding a single group document

    Returns:
        The root group with its nested groups and outcomes

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON or does not match the schema

    """
    if not path.is_file():
        raise FileNotFoundError(f"Result file not found: {path}")

    content = path.read_text(encoding="utf-8")
    if not content.strip():
        raise ValueError(f"Empty result file: {path}")

    try:
        document = GroupDocument.model_validate_json(content)
    except ValidationError as e:
        raise ValueError(f"Invalid result tree in {path}: {e}") from e

    root = build_group(document)
    log.debug("Loaded result tree %s from %s", root.description, path)
    return root


def build_group(document: GroupDocument) -> Group:
    """Convert a validated group document into a group tree."""
    metadata = None
    if document.reporting:
        start = document.start_time or datetime.now()
        metadata = GroupMetadata(
            properties=dict(document.properties),
            start_time=start,
            elapsed=timedelta(seconds=document.elapsed or 0.0),
            last_record_time=start,
            hostname=document.hostname or socket.gethostname(),
        )
    group = Group(description=document.description, metadata=metadata)

    for child in document.children:
        if isinstance(child, GroupDocument):
            group.children.append(build_group(child))
        else:
            group.children.append(_build_leaf(child, timed=group.is_reporting))
    return group


def _build_leaf(document: OutcomeDocument, *, timed: bool) -> Outcome | TimedOutcome:
    outcome = Outcome(
        kind=document.kind,
        expression=document.expression,
        message=document.message,
        source=document.source,
        backtrace=document.backtrace,
    )
    if timed:
        return TimedOutcome(
            outcome=outcome, duration=timedelta(seconds=document.duration or 0.0)
        )
    return outcome
