"""Tests for prebuilt library resolution."""

import warnings
from collections.abc import Callable
from pathlib import Path

import pytest

from fxbuild import (
    ArtifactConfiguration,
    ArtifactResolver,
    BuildConfiguration,
    Configuration,
    LibraryDirectoryMissingError,
    Platform,
    ResolutionError,
    RuntimeRootMissingError,
    TargetDescriptor,
    UnsupportedPlatformError,
)
from fxbuild.rules import engine_rules

MakeLibDir = Callable[..., Path]


def test_win64_release_resolves_newest_toolchain_bucket(
    resolver: ArtifactResolver,
    make_lib_dir: MakeLibDir,
    runtime_root: Path,
) -> None:
    make_lib_dir("windows", "vs14", "x64", "Release", library="libfacefx.lib")

    descriptor = TargetDescriptor(platform=Platform.WIN64, toolchain="VisualStudio2015")

    artifact = resolver.resolve(descriptor)

    assert artifact.library_directory == runtime_root / "bin" / "windows" / "vs14" / "x64" / "Release"
    assert artifact.library_file_name == "libfacefx.lib"
    assert artifact.configuration is ArtifactConfiguration.RELEASE
    assert artifact.abi_libraries == ()
    assert artifact.link_libraries() == ("libfacefx.lib",)


def test_win32_with_older_compiler_uses_older_bucket(
    resolver: ArtifactResolver,
    make_lib_dir: MakeLibDir,
) -> None:
    make_lib_dir("windows", "vs12", "Win32", "Release")

    artifact = resolver.resolve(TargetDescriptor(platform="Win32", toolchain="VisualStudio2013"))

    assert artifact.library_directory.parts[-4:] == ("windows", "vs12", "Win32", "Release")


def test_newer_compilers_share_the_vs14_bucket(
    resolver: ArtifactResolver,
    make_lib_dir: MakeLibDir,
) -> None:
    make_lib_dir("windows", "vs14", "x64", "Release")

    directories = {
        resolver.resolve(TargetDescriptor(platform=Platform.WIN64, toolchain=name)).library_directory
        for name in ("VisualStudio2015", "VisualStudio2017", "VisualStudio2019", "VisualStudio2022")
    }

    assert len(directories) == 1


def test_mac_debug_without_override_links_release(
    resolver: ArtifactResolver,
    make_lib_dir: MakeLibDir,
) -> None:
    release_dir = make_lib_dir("osx", "Release", library="libfacefx.a")

    descriptor = TargetDescriptor(platform=Platform.MAC, configuration=Configuration.DEBUG)

    artifact = resolver.resolve(descriptor)

    assert artifact.library_directory == release_dir
    assert artifact.library_file_name == "libfacefx.a"
    assert artifact.link_libraries() == (str(release_dir / "libfacefx.a"),)


def test_ios_uses_device_only_configuration_names(
    module_dir: Path,
    make_lib_dir: MakeLibDir,
) -> None:
    make_lib_dir("ios", "Release-iphoneos")
    make_lib_dir("ios", "Debug-iphoneos")
    resolver = ArtifactResolver(
        module_dir=module_dir,
        config=BuildConfiguration(debug_builds_use_debug_artifacts=True),
    )

    release = resolver.resolve(TargetDescriptor(platform=Platform.IOS))
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        debug = resolver.resolve(
            TargetDescriptor(platform=Platform.IOS, configuration=Configuration.DEBUG)
        )

    assert release.library_directory.name == "Release-iphoneos"
    assert debug.library_directory.name == "Debug-iphoneos"
    assert debug.configuration is ArtifactConfiguration.DEBUG


@pytest.mark.parametrize(
    ("platform", "parts", "library"),
    [
        (Platform.LINUX, ("linux", "Release"), "libfacefx.a"),
        (Platform.XBOX_ONE, ("xboxone", "vs14", "Release"), "libfacefx.lib"),
        (Platform.PS4, ("ps4", "vs14", "Release"), "facefx"),
    ],
)
def test_platform_directories_and_file_names(
    resolver: ArtifactResolver,
    make_lib_dir: MakeLibDir,
    platform: Platform,
    parts: tuple[str, ...],
    library: str,
) -> None:
    expected = make_lib_dir(*parts)

    artifact = resolver.resolve(TargetDescriptor(platform=platform))

    assert artifact.library_directory == expected
    assert artifact.library_file_name == library


def test_missing_runtime_root_fails_before_platform_checks(module_dir: Path) -> None:
    resolver = ArtifactResolver(module_dir=module_dir)

    with pytest.raises(RuntimeRootMissingError) as excinfo:
        resolver.resolve(TargetDescriptor(platform="HTML5", architecture="wasm32", toolchain="bogus"))

    assert excinfo.value.path == str(module_dir / "facefx-runtime-1.1.1" / "facefx")
    assert excinfo.value.platform == "HTML5"


@pytest.mark.parametrize(
    "descriptor",
    [
        TargetDescriptor(platform="HTML5"),
        TargetDescriptor(platform="Switch", architecture="arm64"),
        TargetDescriptor(platform="win64"),
        TargetDescriptor(platform="Lumin", toolchain="bogus", configuration=Configuration.DEBUG),
    ],
)
def test_platforms_outside_the_enum_are_unsupported(
    resolver: ArtifactResolver,
    descriptor: TargetDescriptor,
) -> None:
    with pytest.raises(UnsupportedPlatformError) as excinfo:
        resolver.resolve(descriptor)

    assert excinfo.value.platform == descriptor.platform_name
    assert "Unsupported target platform" in str(excinfo.value)


def test_missing_library_directory_reports_attempted_path(
    resolver: ArtifactResolver,
    runtime_root: Path,
) -> None:
    with pytest.raises(LibraryDirectoryMissingError) as excinfo:
        resolver.resolve(TargetDescriptor(platform=Platform.LINUX))

    assert excinfo.value.path == str(runtime_root / "bin" / "linux" / "Release")
    assert excinfo.value.platform == "Linux"


@pytest.mark.parametrize("platform", [p for p in Platform if p is not Platform.ANDROID])
def test_resolution_is_deterministic(
    resolver: ArtifactResolver,
    make_lib_dir: MakeLibDir,
    platform: Platform,
) -> None:
    for parts in (
        ("windows", "vs14", "Win32", "Release"),
        ("windows", "vs14", "x64", "Release"),
        ("osx", "Release"),
        ("linux", "Release"),
        ("ios", "Release-iphoneos"),
        ("xboxone", "vs14", "Release"),
        ("ps4", "vs14", "Release"),
    ):
        make_lib_dir(*parts)
    descriptor = TargetDescriptor(platform=platform)

    first = resolver.resolve(descriptor)
    second = resolver.resolve(descriptor)

    assert first == second


def test_debug_override_only_changes_configuration_directory(
    module_dir: Path,
    make_lib_dir: MakeLibDir,
) -> None:
    make_lib_dir("windows", "vs14", "x64", "Release")
    make_lib_dir("windows", "vs14", "x64", "Debug")
    descriptor = TargetDescriptor(platform=Platform.WIN64, configuration=Configuration.DEBUG)

    without = ArtifactResolver(module_dir=module_dir).resolve(descriptor)
    with pytest.warns(UserWarning):
        with_debug = ArtifactResolver(
            module_dir=module_dir,
            config=BuildConfiguration(debug_builds_use_debug_artifacts=True),
        ).resolve(descriptor)

    assert without.library_directory.name == "Release"
    assert with_debug.library_directory.name == "Debug"
    assert without.library_directory.parent == with_debug.library_directory.parent
    assert without.library_file_name == with_debug.library_file_name


@pytest.mark.parametrize(
    "configuration",
    [Configuration.DEBUG_GAME, Configuration.DEVELOPMENT, Configuration.TEST, Configuration.SHIPPING],
)
def test_non_debug_configurations_always_link_release(
    module_dir: Path,
    make_lib_dir: MakeLibDir,
    configuration: Configuration,
) -> None:
    make_lib_dir("linux", "Release")
    resolver = ArtifactResolver(
        module_dir=module_dir,
        config=BuildConfiguration(debug_builds_use_debug_artifacts=True),
    )

    artifact = resolver.resolve(TargetDescriptor(platform=Platform.LINUX, configuration=configuration))

    assert artifact.configuration is ArtifactConfiguration.RELEASE
    assert resolver.advisory.warned is False


def test_unregistered_compilers_fall_back_to_the_oldest_bucket(
    resolver: ArtifactResolver,
    make_lib_dir: MakeLibDir,
) -> None:
    lib_dir = make_lib_dir("windows", "vs12", "x64", "Release")
    descriptor = TargetDescriptor(platform=Platform.WIN64, toolchain="VisualStudio2010")

    resolution = resolver.try_resolve(descriptor)

    assert resolution.ok is True
    assert resolution.unwrap().library_directory == lib_dir
    assert resolver.is_supported(descriptor) is True
    assert engine_rules(resolver, descriptor).definition("WITH_FACEFX") == "1"


def test_unregistered_compiler_without_binaries_is_a_resolution_outcome(
    resolver: ArtifactResolver,
    runtime_root: Path,
) -> None:
    descriptor = TargetDescriptor(platform=Platform.PS4, toolchain="Clang")

    resolution = resolver.try_resolve(descriptor)

    assert isinstance(resolution.error, LibraryDirectoryMissingError)
    assert resolution.error.path == str(runtime_root / "bin" / "ps4" / "vs12" / "Release")
    assert engine_rules(resolver, descriptor).definition("WITH_FACEFX") == "0"


def test_try_resolve_wraps_failures_without_raising(resolver: ArtifactResolver) -> None:
    resolution = resolver.try_resolve(TargetDescriptor(platform="HTML5"))

    assert resolution.ok is False
    assert isinstance(resolution.error, ResolutionError)
    assert resolution.artifact is None
    with pytest.raises(UnsupportedPlatformError):
        resolution.unwrap()


def test_is_supported_reflects_resolution_outcome(
    resolver: ArtifactResolver,
    make_lib_dir: MakeLibDir,
) -> None:
    make_lib_dir("linux", "Release")

    assert resolver.is_supported(TargetDescriptor(platform=Platform.LINUX)) is True
    assert resolver.is_supported(TargetDescriptor(platform=Platform.MAC)) is False
    assert resolver.is_supported(TargetDescriptor(platform="HTML5")) is False


def test_custom_runtime_folder_moves_the_root(module_dir: Path) -> None:
    (module_dir / "FaceFx-0.9.10" / "bin" / "linux" / "Release").mkdir(parents=True)
    resolver = ArtifactResolver(
        module_dir=module_dir,
        config=BuildConfiguration(runtime_folder="FaceFx-0.9.10"),
    )

    artifact = resolver.resolve(TargetDescriptor(platform=Platform.LINUX))

    assert resolver.runtime_root == module_dir / "FaceFx-0.9.10"
    assert artifact.library_directory == module_dir / "FaceFx-0.9.10" / "bin" / "linux" / "Release"


def test_resolution_does_not_touch_the_filesystem(
    resolver: ArtifactResolver,
    make_lib_dir: MakeLibDir,
    module_dir: Path,
) -> None:
    make_lib_dir("osx", "Release", library="libfacefx.a")
    before = sorted(str(path) for path in module_dir.rglob("*"))

    resolver.resolve(TargetDescriptor(platform=Platform.MAC))
    resolver.try_resolve(TargetDescriptor(platform=Platform.LINUX))

    after = sorted(str(path) for path in module_dir.rglob("*"))
    assert before == after


def test_resolver_logs_success_and_failure(
    resolver: ArtifactResolver,
    make_lib_dir: MakeLibDir,
) -> None:
    make_lib_dir("linux", "Release")

    resolver.resolve(TargetDescriptor(platform=Platform.LINUX))
    resolver.try_resolve(TargetDescriptor(platform="HTML5"))

    linux = resolver.logger.records_for_platform("Linux")
    html5 = resolver.logger.records_for_platform("HTML5")
    assert [record["level"] for record in linux] == ["info"]
    assert linux[0]["extra"]["library_file_name"] == "libfacefx.a"
    assert [record["level"] for record in html5] == ["error"]
    assert html5[0]["extra"]["code"] == "E_UNSUPPORTED_PLATFORM"
