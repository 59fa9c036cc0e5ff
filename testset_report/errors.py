"""Exceptions raised by testset_report."""


class TestsFailedError(Exception):
    """Raised by a display renderer to signal that rendered tests failed."""

    __test__ = False


class NoOpenGroupError(RuntimeError):
    """Raised when a session operation needs an open group and there is none."""
