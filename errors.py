class PagerError(Exception):
    pass


class SourceError(PagerError):
    """The line source could not be read or decoded."""


class TerminalError(PagerError):
    """The controlling terminal could not be read from or drawn to."""
