"""Module descriptors for the FaceFX runtime, editor, and engine integration."""

from __future__ import annotations

from fxbuild.config import BuildConfiguration, is_feature_enabled
from fxbuild.errors import ResolutionError
from fxbuild.models import TargetDescriptor
from fxbuild.policy import Policy, ensure_resolution_allowed
from fxbuild.resolver import ArtifactResolver
from fxbuild.rules.model import ModuleRules

FACEFX_LIB_MODULE = "FaceFXLib"
FACEFX_MODULE = "FaceFX"
FACEFX_EDITOR_MODULE = "FaceFXEditor"

FACEFX_DEPENDENCIES = (
    "Core",
    "CoreUObject",
    "Engine",
    "AnimGraphRuntime",
    "MovieScene",
    FACEFX_LIB_MODULE,
)

FACEFX_EDITOR_DEPENDENCIES = (
    "Core",
    "CoreUObject",
    "Engine",
    "UnrealEd",
    "EditorStyle",
    "Slate",
    "SlateCore",
    "InputCore",
    "AssetTools",
    "ContentBrowser",
    "MainFrame",
    "DesktopPlatform",
    "AnimGraph",
    "BlueprintGraph",
    "MovieSceneTools",
    "Sequencer",
    FACEFX_MODULE,
)

WWISE_MODULE = "AkAudio"


def facefx_lib_rules(
    resolver: ArtifactResolver,
    descriptor: TargetDescriptor,
    *,
    policy: Policy | None = None,
) -> ModuleRules:
    """External module wrapping the prebuilt runtime library.

    When resolution fails the policy decides: ``"error"`` raises a
    :class:`~fxbuild.errors.PolicyError`, ``"disable"`` returns rules that
    link nothing.
    """
    policy = policy or Policy()
    rules = ModuleRules(name=FACEFX_LIB_MODULE, module_type="external")
    resolution = resolver.try_resolve(descriptor)
    if resolution.error is not None:
        _handle_failure(resolver, descriptor, resolution.error, policy)
        return rules

    artifact = resolution.unwrap()
    rules.public_library_paths.extend(str(path) for path in artifact.library_paths())
    rules.public_additional_libraries.extend(artifact.link_libraries())
    return rules


def facefx_rules(config: BuildConfiguration, *, build_editor: bool = False) -> ModuleRules:
    rules = ModuleRules(name=FACEFX_MODULE)
    rules.private_dependency_module_names.extend(FACEFX_DEPENDENCIES)
    if build_editor:
        rules.private_dependency_module_names.append("TargetPlatform")
    rules.public_include_path_module_names.append(FACEFX_LIB_MODULE)

    if config.compile_with_wwise:
        rules.private_dependency_module_names.append(WWISE_MODULE)
    rules.define("WITH_WWISE", 1 if config.compile_with_wwise else 0)
    return rules


def facefx_editor_rules(config: BuildConfiguration) -> ModuleRules:
    rules = ModuleRules(name=FACEFX_EDITOR_MODULE)
    rules.private_dependency_module_names.extend(FACEFX_EDITOR_DEPENDENCIES)
    rules.dynamically_loaded_module_names.append("AssetTools")
    rules.define("FACEFX_RUNTIMEFOLDER", f'"{config.runtime_folder}"')
    return rules


def engine_rules(
    resolver: ArtifactResolver,
    descriptor: TargetDescriptor,
    *,
    build_editor: bool = False,
) -> ModuleRules:
    """Engine-side gate that pulls FaceFX in only when it can be linked."""
    rules = ModuleRules(name="Engine")
    if not is_feature_enabled(resolver.config) or not resolver.is_supported(descriptor):
        rules.define("WITH_FACEFX", 0)
        return rules

    rules.public_dependency_module_names.append(FACEFX_MODULE)
    rules.public_include_path_module_names.append(FACEFX_MODULE)
    rules.circularly_referenced_dependent_modules.append(FACEFX_MODULE)
    rules.define("WITH_FACEFX", 1)
    if build_editor:
        rules.public_dependency_module_names.append(FACEFX_EDITOR_MODULE)
        rules.circularly_referenced_dependent_modules.append(FACEFX_EDITOR_MODULE)
    return rules


def _handle_failure(
    resolver: ArtifactResolver,
    descriptor: TargetDescriptor,
    error: ResolutionError,
    policy: Policy,
) -> None:
    ensure_resolution_allowed(policy=policy, error=error)
    resolver.logger.log(
        operation="module_rules",
        platform=descriptor.platform_name,
        configuration=str(descriptor.configuration),
        module=FACEFX_LIB_MODULE,
        message=f"FaceFX disabled for {descriptor.platform_name}: {error.message}",
        level="warning",
        extra={"code": error.code},
    )
