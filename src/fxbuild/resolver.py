"""Prebuilt FaceFX library resolution.

The resolver maps a :class:`~fxbuild.models.TargetDescriptor` onto the
bundled runtime tree::

    <module_dir>/<runtime_folder>/bin/<platform subdir>/<configuration>/

Checks run in a fixed order and stop at the first failure: runtime root,
platform, architecture, configuration, library directory. The only side
effects are read-only existence probes and the one-time debug advisory.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from fxbuild.advisory import DebugArtifactAdvisory
from fxbuild.config import BuildConfiguration
from fxbuild.errors import (
    LibraryDirectoryMissingError,
    ResolutionError,
    RuntimeRootMissingError,
    UnsupportedArchitectureError,
    UnsupportedPlatformError,
)
from fxbuild.layout import DEFAULT_LAYOUT, PlatformLayout, validate_layout
from fxbuild.models import (
    AbiLibrary,
    ArtifactConfiguration,
    Configuration,
    Platform,
    Resolution,
    ResolvedArtifact,
    TargetDescriptor,
)
from fxbuild.observability import StructuredLogger
from fxbuild.toolchains import DEFAULT_TOOLCHAINS, ToolchainTable

BIN_FOLDER = "bin"


@dataclass(slots=True)
class ArtifactResolver:
    module_dir: Path
    config: BuildConfiguration = field(default_factory=BuildConfiguration)
    layout: Mapping[Platform, PlatformLayout] = field(default_factory=lambda: dict(DEFAULT_LAYOUT))
    toolchains: ToolchainTable = DEFAULT_TOOLCHAINS
    advisory: DebugArtifactAdvisory = field(default_factory=DebugArtifactAdvisory)
    logger: StructuredLogger = field(default_factory=StructuredLogger)

    def __post_init__(self) -> None:
        self.module_dir = Path(self.module_dir)
        validate_layout(self.layout)

    @property
    def runtime_root(self) -> Path:
        return self.module_dir / self.config.runtime_folder

    def resolve(self, descriptor: TargetDescriptor) -> ResolvedArtifact:
        """Resolve *descriptor* or raise a :class:`ResolutionError`."""
        try:
            artifact = self._resolve(descriptor)
        except ResolutionError as exc:
            self.logger.log(
                operation="resolve",
                platform=descriptor.platform_name,
                configuration=str(descriptor.configuration),
                message=exc.message,
                level="error",
                extra={"code": exc.code, **exc.context},
            )
            raise
        self.logger.log(
            operation="resolve",
            platform=descriptor.platform_name,
            configuration=str(descriptor.configuration),
            message="Resolved FaceFX library.",
            extra={
                "library_directory": str(artifact.library_directory),
                "library_file_name": artifact.library_file_name,
            },
        )
        return artifact

    def try_resolve(self, descriptor: TargetDescriptor) -> Resolution:
        try:
            return Resolution(descriptor=descriptor, artifact=self.resolve(descriptor))
        except ResolutionError as exc:
            return Resolution(descriptor=descriptor, error=exc)

    def is_supported(self, descriptor: TargetDescriptor) -> bool:
        return self.try_resolve(descriptor).ok

    def _resolve(self, descriptor: TargetDescriptor) -> ResolvedArtifact:
        root = self.runtime_root
        if not root.is_dir():
            raise RuntimeRootMissingError(str(root), platform=descriptor.platform_name)

        platform = self._platform(descriptor)
        entry = self.layout[platform]

        abis = self._abis(entry, descriptor)
        bucket = self.toolchains.bucket_for(descriptor.toolchain) if entry.toolchain_keyed else None
        configuration = self._artifact_configuration(descriptor)

        library_dir = root.joinpath(
            BIN_FOLDER,
            *entry.platform_parts(bucket),
            entry.configuration_name(configuration),
        )
        if not library_dir.is_dir():
            raise LibraryDirectoryMissingError(str(library_dir), platform=platform.value)

        abi_libraries: list[AbiLibrary] = []
        for abi in abis:
            abi_dir = library_dir / abi
            if not abi_dir.is_dir():
                raise LibraryDirectoryMissingError(str(abi_dir), platform=platform.value)
            abi_libraries.append(AbiLibrary(abi=abi, path=abi_dir / entry.library_name))

        return ResolvedArtifact(
            platform=platform,
            configuration=configuration,
            library_directory=library_dir,
            library_file_name=entry.library_name,
            abi_libraries=tuple(abi_libraries),
            link_by_full_path=entry.link_by_full_path,
        )

    def _platform(self, descriptor: TargetDescriptor) -> Platform:
        try:
            platform = Platform(descriptor.platform_name)
        except ValueError:
            raise UnsupportedPlatformError(descriptor.platform_name) from None
        if platform not in self.layout:
            raise UnsupportedPlatformError(platform.value)
        return platform

    def _abis(self, entry: PlatformLayout, descriptor: TargetDescriptor) -> tuple[str, ...]:
        if not entry.abis:
            return ()
        # Narrowing a multi-ABI platform to a single ABI is not supported.
        if descriptor.architecture:
            raise UnsupportedArchitectureError(
                descriptor.architecture,
                platform=entry.platform.value,
            )
        return entry.abis

    def _artifact_configuration(self, descriptor: TargetDescriptor) -> ArtifactConfiguration:
        if descriptor.configuration != Configuration.DEBUG:
            return ArtifactConfiguration.RELEASE
        if not self.config.debug_builds_use_debug_artifacts:
            return ArtifactConfiguration.RELEASE
        # Frames: emit, _artifact_configuration, _resolve, resolve, then the caller.
        self.advisory.emit(platform=descriptor.platform_name, logger=self.logger, stacklevel=5)
        return ArtifactConfiguration.DEBUG
