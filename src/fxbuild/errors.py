"""Typed error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import ClassVar


class ErrorCode(StrEnum):
    """Stable error identifiers used across API surfaces."""

    VALIDATION = "E_VALIDATION"
    CONFIGURATION = "E_CONFIGURATION"
    POLICY = "E_POLICY"
    RUNTIME_ROOT_MISSING = "E_RUNTIME_ROOT_MISSING"
    UNSUPPORTED_PLATFORM = "E_UNSUPPORTED_PLATFORM"
    UNSUPPORTED_ARCHITECTURE = "E_UNSUPPORTED_ARCHITECTURE"
    LIBRARY_DIRECTORY_MISSING = "E_LIBRARY_DIRECTORY_MISSING"


class FxBuildError(Exception):
    """Failure raised while resolving FaceFX binaries or describing its modules.

    Each subclass pins its :class:`ErrorCode` through ``default_code``; the
    code is what the CLI and the structured log report. ``context`` names the
    platform, path and operation involved, in insertion order.
    """

    default_code: ClassVar[ErrorCode] = ErrorCode.VALIDATION

    code: str
    hint: str | None
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = self.default_code.value
        self.hint = hint
        self.context = dict(context or {})

    @property
    def message(self) -> str:
        return str(self.args[0])

    def __str__(self) -> str:
        lines = [self.message]
        if self.hint:
            lines.append(f"Hint: {self.hint}")
        lines.extend(f"  {key}: {value}" for key, value in self.context.items() if value)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ValidationError(FxBuildError):
    """A table, descriptor or result object is malformed."""


class ConfigurationError(FxBuildError):
    default_code = ErrorCode.CONFIGURATION


class PolicyError(FxBuildError):
    default_code = ErrorCode.POLICY


class ResolutionError(FxBuildError):
    """Terminal outcome of an artifact resolution.

    Resolution errors describe the environment (a missing or mis-versioned
    runtime) or an unsupported target. Retrying without changing either cannot
    succeed.
    """

    @property
    def path(self) -> str | None:
        return self.context.get("path")

    @property
    def platform(self) -> str | None:
        return self.context.get("platform")


class RuntimeRootMissingError(ResolutionError):
    default_code = ErrorCode.RUNTIME_ROOT_MISSING

    def __init__(self, path: str, *, platform: str) -> None:
        super().__init__(
            f"Cannot find FaceFX runtime folder '{path}'.",
            hint="Unpack the FaceFX runtime next to the module or update runtime_folder.",
            context={"platform": platform, "path": path, "operation": "resolve"},
        )


class UnsupportedPlatformError(ResolutionError):
    default_code = ErrorCode.UNSUPPORTED_PLATFORM

    def __init__(self, platform: str) -> None:
        super().__init__(
            f"FaceFX disabled. Unsupported target platform: {platform}",
            context={"platform": platform, "operation": "resolve"},
        )


class UnsupportedArchitectureError(ResolutionError):
    default_code = ErrorCode.UNSUPPORTED_ARCHITECTURE

    def __init__(self, architecture: str, *, platform: str) -> None:
        super().__init__(
            f"FaceFX disabled. Unsupported architecture '{architecture}' for {platform}.",
            hint="Leave the architecture empty to link every bundled ABI.",
            context={"platform": platform, "architecture": architecture, "operation": "resolve"},
        )


class LibraryDirectoryMissingError(ResolutionError):
    default_code = ErrorCode.LIBRARY_DIRECTORY_MISSING

    def __init__(self, path: str, *, platform: str) -> None:
        super().__init__(
            f"Cannot find FaceFX lib folder '{path}'.",
            hint="The bundled runtime does not ship binaries for this target.",
            context={"platform": platform, "path": path, "operation": "resolve"},
        )


__all__ = [
    "ConfigurationError",
    "ErrorCode",
    "FxBuildError",
    "LibraryDirectoryMissingError",
    "PolicyError",
    "ResolutionError",
    "RuntimeRootMissingError",
    "UnsupportedArchitectureError",
    "UnsupportedPlatformError",
    "ValidationError",
]
