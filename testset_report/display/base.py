"""Abstract base class for console renderers of result trees."""

from abc import ABC, abstractmethod

from testset_report.models.group import Group


class DisplayRenderer(ABC):
    """Renders a result tree for people reading the test output.

    Renderers receive a plain copy of the tree taken before flattening, so
    they see the original nesting. A renderer may raise
    ``TestsFailedError`` after rendering to signal failures; that signal is
    discarded by the caller.
    """

    @abstractmethod
    def render(self, tree: Group) -> None:
        """Render ``tree``.

        Args:
            tree: Plain group whose children mirror the finished root's

        Raises:
            TestsFailedError: If the rendered tests contain failures

        """


class SilentRenderer(DisplayRenderer):
    """Renderer that displays nothing."""

    def render(self, tree: Group) -> None:
        return None
