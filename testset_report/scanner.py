"""Detection of failing outcomes in a result tree."""

from testset_report.models.config import ReportConfig
from testset_report.models.group import Group, Node
from testset_report.models.outcome import PROBLEM_KINDS, TimedOutcome


def any_problems(node: Node) -> bool:
    """Check whether any outcome under ``node`` is a fail or an error.

    Broken outcomes are expected failures and do not count. The tree is not
    modified.
    """
    if isinstance(node, Group):
        return any([any_problems(child) for child in node.children])
    if isinstance(node, TimedOutcome):
        return any_problems(node.outcome)
    return node.kind in PROBLEM_KINDS


def exit_code(root: Group, config: ReportConfig | None = None) -> int:
    """Process exit status for a finished result tree."""
    config = config or ReportConfig()
    if any_problems(root):
        return config.failure_exit_code
    return config.success_exit_code
