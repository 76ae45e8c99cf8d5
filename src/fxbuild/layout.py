"""Per-platform layout of the bundled FaceFX runtime binaries."""

from __future__ import annotations

import string
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from fxbuild.errors import ValidationError
from fxbuild.models import ArtifactConfiguration, Platform

ARCHIVE_LIBRARY = "libfacefx.a"
IMPORT_LIBRARY = "libfacefx.lib"
# The PS4 runtime has always been linked by its bare name.
PS4_LIBRARY = "facefx"

ANDROID_ABIS = ("armeabi-v7a", "arm64-v8a")

DEFAULT_CONFIGURATION_NAMES: Mapping[ArtifactConfiguration, str] = {
    ArtifactConfiguration.RELEASE: "Release",
    ArtifactConfiguration.DEBUG: "Debug",
}

# No simulator builds are shipped for iOS, only device binaries.
IOS_CONFIGURATION_NAMES: Mapping[ArtifactConfiguration, str] = {
    ArtifactConfiguration.RELEASE: "Release-iphoneos",
    ArtifactConfiguration.DEBUG: "Debug-iphoneos",
}

TOOLCHAIN_FIELD = "toolchain"


@dataclass(frozen=True, slots=True)
class PlatformLayout:
    """Where one platform's binaries live below ``<runtime>/bin``.

    ``subdirectory`` is a ``/``-separated template; toolchain-keyed platforms
    use the ``{toolchain}`` placeholder for the toolchain bucket.
    """

    platform: Platform
    library_name: str
    subdirectory: str
    toolchain_keyed: bool = False
    abis: tuple[str, ...] = ()
    configuration_names: Mapping[ArtifactConfiguration, str] = field(
        default_factory=lambda: dict(DEFAULT_CONFIGURATION_NAMES)
    )
    link_by_full_path: bool = False

    def platform_parts(self, bucket: str | None) -> tuple[str, ...]:
        rendered = self.subdirectory
        if self.toolchain_keyed:
            rendered = rendered.format(toolchain=bucket)
        return PurePosixPath(rendered).parts

    def configuration_name(self, configuration: ArtifactConfiguration) -> str:
        return self.configuration_names[configuration]


DEFAULT_LAYOUT: Mapping[Platform, PlatformLayout] = {
    Platform.WIN32: PlatformLayout(
        platform=Platform.WIN32,
        library_name=IMPORT_LIBRARY,
        subdirectory="windows/{toolchain}/Win32",
        toolchain_keyed=True,
    ),
    Platform.WIN64: PlatformLayout(
        platform=Platform.WIN64,
        library_name=IMPORT_LIBRARY,
        subdirectory="windows/{toolchain}/x64",
        toolchain_keyed=True,
    ),
    Platform.MAC: PlatformLayout(
        platform=Platform.MAC,
        library_name=ARCHIVE_LIBRARY,
        subdirectory="osx",
        link_by_full_path=True,
    ),
    Platform.LINUX: PlatformLayout(
        platform=Platform.LINUX,
        library_name=ARCHIVE_LIBRARY,
        subdirectory="linux",
    ),
    Platform.IOS: PlatformLayout(
        platform=Platform.IOS,
        library_name=ARCHIVE_LIBRARY,
        subdirectory="ios",
        configuration_names=IOS_CONFIGURATION_NAMES,
    ),
    Platform.ANDROID: PlatformLayout(
        platform=Platform.ANDROID,
        library_name=ARCHIVE_LIBRARY,
        subdirectory="android",
        abis=ANDROID_ABIS,
    ),
    Platform.XBOX_ONE: PlatformLayout(
        platform=Platform.XBOX_ONE,
        library_name=IMPORT_LIBRARY,
        subdirectory="xboxone/{toolchain}",
        toolchain_keyed=True,
    ),
    Platform.PS4: PlatformLayout(
        platform=Platform.PS4,
        library_name=PS4_LIBRARY,
        subdirectory="ps4/{toolchain}",
        toolchain_keyed=True,
    ),
}


def validate_layout(layout: Mapping[Platform, PlatformLayout]) -> None:
    """Check a layout table covers the platform enum exactly once."""
    missing = [platform.value for platform in Platform if platform not in layout]
    if missing:
        raise ValidationError(
            "Layout table does not cover every platform.",
            hint="Add a PlatformLayout entry for each missing platform.",
            context={"missing": ", ".join(missing), "operation": "validate_layout"},
        )
    for key, entry in layout.items():
        if not isinstance(key, Platform) or entry.platform is not key:
            raise ValidationError(
                "Layout entry is registered under the wrong platform.",
                context={"key": str(key), "platform": str(entry.platform)},
            )
        if not entry.library_name:
            raise ValidationError(
                "Layout entry has an empty library name.",
                context={"platform": key.value},
            )
        parsed = string.Formatter().parse(entry.subdirectory)
        placeholders = {name for _, name, _, _ in parsed if name is not None}
        expected = {TOOLCHAIN_FIELD} if entry.toolchain_keyed else set()
        if placeholders != expected:
            raise ValidationError(
                "Layout subdirectory placeholders do not match toolchain keying.",
                context={"platform": key.value, "subdirectory": entry.subdirectory},
            )
        if not entry.subdirectory.strip("/"):
            raise ValidationError(
                "Layout entry has an empty subdirectory.",
                context={"platform": key.value},
            )
        for configuration in ArtifactConfiguration:
            if not entry.configuration_names.get(configuration):
                raise ValidationError(
                    "Layout entry is missing a configuration directory name.",
                    context={"platform": key.value, "configuration": configuration.value},
                )
        if len(set(entry.abis)) != len(entry.abis) or any(not abi for abi in entry.abis):
            raise ValidationError(
                "Layout entry ABI list must hold unique, non-empty names.",
                context={"platform": key.value},
            )
