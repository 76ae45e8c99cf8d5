"""Core typed dataclasses for target descriptors and resolved artifacts."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

import cbor2

from fxbuild.errors import ResolutionError, ValidationError


class Platform(StrEnum):
    """Closed set of target platforms the bundled runtime ships binaries for."""

    WIN32 = "Win32"
    WIN64 = "Win64"
    MAC = "Mac"
    LINUX = "Linux"
    IOS = "IOS"
    ANDROID = "Android"
    XBOX_ONE = "XboxOne"
    PS4 = "PS4"


class Configuration(StrEnum):
    """Host build configuration."""

    DEBUG = "Debug"
    DEBUG_GAME = "DebugGame"
    DEVELOPMENT = "Development"
    TEST = "Test"
    SHIPPING = "Shipping"


class ArtifactConfiguration(StrEnum):
    """Configuration flavour of the prebuilt binaries."""

    RELEASE = "Release"
    DEBUG = "Debug"


DEFAULT_TOOLCHAIN = "VisualStudio2015"


@dataclass(frozen=True, slots=True)
class TargetDescriptor:
    """One build request as handed over by the host build tool.

    ``platform`` accepts any string so that hosts can pass targets the runtime
    does not know about; the resolver rejects those explicitly.
    """

    platform: Platform | str
    architecture: str = ""
    toolchain: str = DEFAULT_TOOLCHAIN
    configuration: Configuration = Configuration.DEVELOPMENT

    @property
    def platform_name(self) -> str:
        return str(self.platform)


@dataclass(frozen=True, slots=True)
class AbiLibrary:
    abi: str
    path: Path


@dataclass(frozen=True, slots=True)
class ResolvedArtifact:
    platform: Platform
    configuration: ArtifactConfiguration
    library_directory: Path
    library_file_name: str
    abi_libraries: tuple[AbiLibrary, ...] = ()
    link_by_full_path: bool = False
    schema_version: int = 1

    @property
    def library_path(self) -> Path:
        return self.library_directory / self.library_file_name

    @property
    def is_multi_abi(self) -> bool:
        return bool(self.abi_libraries)

    def library_paths(self) -> tuple[Path, ...]:
        """Directories the linker has to search."""
        if self.abi_libraries:
            return tuple(item.path.parent for item in self.abi_libraries)
        return (self.library_directory,)

    def link_libraries(self) -> tuple[str, ...]:
        """Library entries handed to the linker.

        Mac links against the absolute archive path; every other platform
        links by name and relies on :meth:`library_paths`.
        """
        if self.link_by_full_path:
            return (str(self.library_path),)
        return (self.library_file_name,)

    def to_json(self, path: str | Path | None = None) -> str:
        payload = self._payload()
        encoded = json.dumps(payload, indent=2, sort_keys=True) + "\n"
        if path is not None:
            Path(path).write_text(encoded, encoding="utf-8")
        return encoded

    def to_cbor(self, path: str | Path | None = None) -> bytes:
        payload = self._payload()
        encoded = cbor2.dumps(payload, canonical=True)
        if path is not None:
            Path(path).write_bytes(encoded)
        return encoded

    def _payload(self) -> dict[str, object]:
        return {
            "schema_version": self.schema_version,
            "platform": self.platform.value,
            "configuration": self.configuration.value,
            "library_directory": str(self.library_directory),
            "library_file_name": self.library_file_name,
            "abi_libraries": {item.abi: str(item.path) for item in self.abi_libraries},
            "link_libraries": list(self.link_libraries()),
        }


@dataclass(frozen=True, slots=True)
class Resolution:
    """Result form of a resolution: exactly one of artifact or error is set."""

    descriptor: TargetDescriptor
    artifact: ResolvedArtifact | None = None
    error: ResolutionError | None = None

    def __post_init__(self) -> None:
        if (self.artifact is None) == (self.error is None):
            raise ValidationError("Resolution requires exactly one of artifact or error.")

    @property
    def ok(self) -> bool:
        return self.artifact is not None

    def unwrap(self) -> ResolvedArtifact:
        if self.error is not None:
            raise self.error
        if self.artifact is None:
            raise ValidationError("Resolution holds neither an artifact nor an error.")
        return self.artifact
