"""Loading of display renderers from entry points."""

from importlib.metadata import entry_points

from testset_report.display.base import DisplayRenderer

ENTRY_POINT_GROUP = "testset_report.renderers"


class RendererNotFoundError(Exception):
    """Raised when a renderer is not found."""


def load_renderer(key: str) -> DisplayRenderer:
    """Instantiate a display renderer by key.

    Args:
        key: The renderer key as registered in pyproject.toml
             (e.g., "log", "silent")

    Returns:
        A new renderer instance

    Raises:
        RendererNotFoundError: If no renderer with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            renderer_cls: type[DisplayRenderer] = entry.load()
            return renderer_cls()

    available = sorted(e.name for e in entries)
    raise RendererNotFoundError(
        f"Renderer '{key}' not found. Available renderers: {available}"
    )
