"""Console display of result trees."""

from testset_report.display.base import DisplayRenderer, SilentRenderer
from testset_report.display.log_renderer import LogRenderer
from testset_report.display.mirror import build_display_tree, display_tree

__all__ = [
    "DisplayRenderer",
    "LogRenderer",
    "SilentRenderer",
    "build_display_tree",
    "display_tree",
]
