"""Custom exceptions for orderimports.

Defines the exception hierarchy shared by the walker, the parser and the
analysis session.  All exceptions are importable from the top-level
``orderimports`` package.

Exceptions:
    OrderImportsError — Base class for everything raised by this package.
    ConfigurationError — Invalid regex pattern or invalid project config.
        Fatal for the run.
    WalkError — Filesystem traversal failure.  Fatal for the run.
    ImportOrderParseError — One directory's Go sources failed to parse.
        Recorded in the verdict; the run continues.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderimports.lib import config


class OrderImportsError(Exception):
    """Base class for orderimports errors."""


class ConfigurationError(OrderImportsError):
    """Raised when the tool itself is misconfigured.

    Covers regex patterns that do not compile and project config files that
    cannot be loaded or fail validation.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        """Initialize with a ready-made message.

        Args:
            message: The full message shown to the user.
            errors: Individual problem descriptions, when there are several.
        """
        self.errors = errors or []
        super().__init__(message)

    @classmethod
    def invalid_file(cls, path: str, errors: list[str]) -> ConfigurationError:
        """Build the error for a project config file that is unusable."""
        msg = config.get_str("messages.invalid_config")
        return cls(msg.format(path=path, errors="; ".join(errors)), errors)

    @classmethod
    def bad_regex(cls, template_key: str, error: Exception) -> ConfigurationError:
        """Build the error for a regex option that fails to compile.

        Args:
            template_key: Config key of the message template to use.
            error: The ``re.error`` raised by the compiler.
        """
        return cls(config.get_str(template_key).format(error=error), [str(error)])


class WalkError(OrderImportsError):
    """Raised when the directory walk hits a filesystem error."""

    def __init__(self, path: str, original_error: OSError) -> None:
        """Initialize with the failing path and the OS error."""
        self.path = path
        self.original_error = original_error
        msg = config.get_str("messages.walk_error")
        super().__init__(msg.format(error=original_error))


@dataclass(frozen=True)
class SourceError:
    """One problem found while parsing a Go source file."""

    path: str
    line: int
    column: int
    message: str

    def __str__(self) -> str:
        if self.line <= 0:
            tpl = config.get_str("messages.parse_error_nopos")
            return tpl.format(path=self.path, message=self.message)
        tpl = config.get_str("messages.parse_error")
        return tpl.format(
            path=self.path, line=self.line, column=self.column, message=self.message
        )


class ImportOrderParseError(OrderImportsError):
    """Raised when the Go sources of a directory cannot be parsed.

    Carries every error found in the directory.  The message names the
    first one and counts the rest.
    """

    def __init__(self, directory: str, errors: list[SourceError]) -> None:
        """Initialize with the directory and its source errors.

        Args:
            directory: The directory whose sources failed to parse.
            errors: Non-empty list of errors, in file then position order.
        """
        self.directory = directory
        self.errors = errors
        text = str(errors[0])
        if len(errors) > 1:
            more = config.get_str("messages.parse_error_more")
            text += more.format(count=len(errors) - 1)
        super().__init__(text)
