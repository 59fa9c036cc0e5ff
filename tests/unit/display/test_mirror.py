"""Tests for the display mirror of result trees."""

import logging
from datetime import timedelta
from unittest.mock import Mock

import pytest

from testset_report.display.base import DisplayRenderer
from testset_report.display.mirror import build_display_tree, display_tree
from testset_report.errors import TestsFailedError
from testset_report.models.group import Group
from testset_report.models.outcome import Outcome, TimedOutcome


@pytest.fixture
def tree() -> Group:
    """Reporting tree two levels deep with a plain group inside."""
    plain = Group.plain("plain")
    plain.children = [Outcome(kind="broken")]
    inner = Group.reporting("inner")
    inner.children = [
        TimedOutcome(outcome=Outcome(kind="fail"), duration=timedelta(seconds=1)),
        plain,
    ]
    root = Group.reporting("root")
    root.children = [
        TimedOutcome(outcome=Outcome(kind="pass"), duration=timedelta(seconds=2)),
        inner,
    ]
    return root


@pytest.fixture
def renderer_mock() -> Mock:
    """Create mock renderer."""
    return Mock(spec=DisplayRenderer)


def test_mirror_keeps_nesting_with_plain_groups(tree: Group) -> None:
    """The mirror has the same shape, built from plain groups."""
    mirror = build_display_tree(tree)

    assert mirror.description == ""
    assert not mirror.is_reporting
    assert mirror.children[0] == Outcome(kind="pass")
    assert isinstance(mirror.children[0], Outcome)

    inner = mirror.children[1]
    assert isinstance(inner, Group)
    assert inner is not tree.children[1]
    assert inner.description == "inner"
    assert not inner.is_reporting
    assert inner.children[0] == Outcome(kind="fail")
    assert isinstance(inner.children[0], Outcome)


def test_mirror_shares_plain_groups(tree: Group) -> None:
    """Plain groups are already display-ready and are not copied."""
    mirror = build_display_tree(tree)

    inner = mirror.children[1]
    assert isinstance(inner, Group)
    assert inner.children[1] is tree.children[1].children[1]  # type: ignore[union-attr]


def test_mirror_leaves_original_untouched(tree: Group) -> None:
    """Building the mirror does not modify the source tree."""
    before = list(tree.children)

    build_display_tree(tree)

    assert tree.children == before
    assert isinstance(tree.children[0], TimedOutcome)


def test_display_renders_mirror(tree: Group, renderer_mock: Mock) -> None:
    """The renderer receives the mirror, not the original tree."""
    display_tree(tree, renderer_mock)

    renderer_mock.render.assert_called_once()
    (rendered,) = renderer_mock.render.call_args.args
    assert rendered is not tree
    assert not rendered.is_reporting


def test_display_ignores_failure_signal(tree: Group, renderer_mock: Mock) -> None:
    """The renderer's failure signal does not escape."""
    renderer_mock.render.side_effect = TestsFailedError("tests failed")

    display_tree(tree, renderer_mock)

    renderer_mock.render.assert_called_once()


def test_display_logs_renderer_errors(
    tree: Group, renderer_mock: Mock, caplog: pytest.LogCaptureFixture
) -> None:
    """Unexpected renderer errors are logged and swallowed."""
    renderer_mock.render.side_effect = RuntimeError("terminal gone")

    with caplog.at_level(logging.WARNING):
        display_tree(tree, renderer_mock)

    assert "terminal gone" in caplog.text
    assert "root" in caplog.text
