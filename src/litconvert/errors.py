"""Exception hierarchy for document conversion and publishing."""

from __future__ import annotations


class LitConvertError(Exception):
    """Base class for all litconvert failures.

    Attributes
    ----------
    exit_code : int | None
        Optional process exit code used by the CLI.
    """

    exit_code: int | None = None


class ConversionError(LitConvertError):
    """Raised when a conversion stage fails."""


class ExternalToolFailure(ConversionError):
    """Raised when an external tool did not produce its expected artifact."""

    def __init__(self, tool: str, expected_output: object | None = None) -> None:
        self.tool = tool
        self.expected_output = expected_output
        super().__init__(f"conversion by {tool} failed!")


class InvalidCompilerForInput(ConversionError):
    """Raised when the requested compiler cannot handle the rendered document."""


class DialectMismatchError(ConversionError):
    """Raised in strict mode when an input targets an incompatible dialect."""


class PublishError(LitConvertError):
    """Raised when the publishing backend rejects a request."""


class PublishPreconditionError(PublishError):
    """Raised when a publish request is invalid before any network call."""


class VersionMismatchWarning(UserWarning):
    """Input looks like it targets a different document dialect."""
