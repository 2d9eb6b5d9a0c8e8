"""
Exception hierarchy for appium_service.

Every resolution step fails with a typed exception so callers can tell
"nothing was found" apart from "the lookup could not even run".
"""

from __future__ import annotations


class AppiumServiceException(Exception):
    """
    Base exception for all appium_service errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (paths, captured output, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Lookup failures
# =============================================================================


class NotFoundError(AppiumServiceException):
    """
    A required file could not be located by any resolution strategy.

    The chained cause carries the search context (captured helper output,
    searched paths).
    """

    pass


class NodeJSNotFoundError(NotFoundError):
    """No usable Node.js executable was reported by the lookup helper."""

    pass


class AppiumNotFoundError(NotFoundError):
    """The Appium entry script is missing from the global npm root."""

    pass


# =============================================================================
# Invalid instances
# =============================================================================


class InvalidInstanceError(AppiumServiceException):
    """A supplied or resolved path does not exist on disk."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)


class InvalidServerInstanceError(InvalidInstanceError):
    """The configured Appium entry script does not exist."""

    pass


class InvalidNodeJSInstanceError(InvalidInstanceError):
    """The configured Node.js executable does not exist."""

    pass


# =============================================================================
# Argument errors
# =============================================================================


class InvalidArgumentError(AppiumServiceException, ValueError):
    """
    Invalid value passed to the builder.

    Inherits from ValueError so callers validating input generically still
    catch it.
    """

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        value: object = None,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or {}
        if argument:
            ctx["argument"] = argument
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Execution errors
# =============================================================================


class ExecutionError(AppiumServiceException):
    """
    A helper command could not be executed at all.

    Raised instead of NotFoundError when the process spawn itself fails.
    """

    def __init__(
        self,
        message: str,
        *,
        command: list[str] | None = None,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or {}
        if command:
            ctx["command"] = " ".join(command)
        super().__init__(message, context=ctx, cause=cause)


class NodeJSExecutionError(ExecutionError):
    """The Node.js lookup helper could not be run."""

    pass


class AppiumExecutionError(ExecutionError):
    """The npm package root lookup could not be run."""

    pass


# =============================================================================
# Launch errors
# =============================================================================


class ServiceStartupError(AppiumServiceException):
    """
    The server process could not be started or never became reachable.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or {}
        if url:
            ctx["url"] = url
        super().__init__(message, context=ctx, cause=cause)
