"""Public package entrypoint for the FaceFX build descriptors."""

from .advisory import DebugArtifactAdvisory, DebugArtifactsWarning
from .config import BuildConfiguration, is_feature_enabled, read_build_configuration
from .errors import (
    ConfigurationError,
    ErrorCode,
    FxBuildError,
    LibraryDirectoryMissingError,
    PolicyError,
    ResolutionError,
    RuntimeRootMissingError,
    UnsupportedArchitectureError,
    UnsupportedPlatformError,
    ValidationError,
)
from .layout import DEFAULT_LAYOUT, PlatformLayout
from .models import (
    AbiLibrary,
    ArtifactConfiguration,
    Configuration,
    Platform,
    Resolution,
    ResolvedArtifact,
    TargetDescriptor,
)
from .observability import StructuredLogger
from .policy import Policy
from .resolver import ArtifactResolver
from .toolchains import DEFAULT_TOOLCHAINS, ToolchainTable

__all__ = [
    "AbiLibrary",
    "ArtifactConfiguration",
    "ArtifactResolver",
    "BuildConfiguration",
    "Configuration",
    "ConfigurationError",
    "DEFAULT_LAYOUT",
    "DEFAULT_TOOLCHAINS",
    "DebugArtifactAdvisory",
    "DebugArtifactsWarning",
    "ErrorCode",
    "FxBuildError",
    "LibraryDirectoryMissingError",
    "Platform",
    "PlatformLayout",
    "Policy",
    "PolicyError",
    "Resolution",
    "ResolutionError",
    "ResolvedArtifact",
    "RuntimeRootMissingError",
    "StructuredLogger",
    "TargetDescriptor",
    "ToolchainTable",
    "UnsupportedArchitectureError",
    "UnsupportedPlatformError",
    "ValidationError",
    "is_feature_enabled",
    "read_build_configuration",
]
