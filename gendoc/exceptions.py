"""Package-specific exception types.

Structural problems in a document are never raised: they are reported
through `Diagnostics` and the build carries on. Only the conditions that
make it impossible to produce a document are exceptions.
"""

from __future__ import annotations


class GendocError(Exception):
    """Base class for fatal gendoc errors."""


class EmptyTocError(GendocError):
    """Raised when a build ends without any heading or caption."""

    def __init__(self):
        super().__init__("no table of contents detected")


class OutputWriteError(GendocError):
    """Raised when the output document cannot be written.

    Args:
        filepath: Destination that could not be written.
        reason: Underlying error description.
    """

    def __init__(self, filepath: object, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"{filepath}:0: unable to write file ({reason})")


class RuleSetError(GendocError, ValueError):
    """Raised when a highlight rule file is malformed.

    Args:
        source: Name of the rule file or rule set.
        reason: What is wrong with it.
    """

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid highlight rules in {source}: {reason}")
