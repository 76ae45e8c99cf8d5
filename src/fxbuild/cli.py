"""Command-line front-end for resolving FaceFX artifacts.

Usage:
    python -m fxbuild resolve --module-dir Source/FaceFXLib --platform Win64
    python -m fxbuild rules --module-dir Source/FaceFXLib --platform Mac --editor
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from fxbuild.config import BuildConfiguration, read_build_configuration
from fxbuild.errors import FxBuildError
from fxbuild.models import DEFAULT_TOOLCHAIN, Configuration, TargetDescriptor
from fxbuild.policy import Policy
from fxbuild.resolver import ArtifactResolver
from fxbuild.rules import engine_rules, facefx_editor_rules, facefx_lib_rules, facefx_rules


def cmd_resolve(args: argparse.Namespace) -> int:
    resolver = _resolver(args)
    resolution = resolver.try_resolve(_descriptor(args))
    if resolution.error is not None:
        _write_json(resolution.error.to_dict(), sys.stderr)
        return 1

    artifact = resolution.unwrap()
    if args.format == "cbor":
        encoded = artifact.to_cbor(args.output)
        if args.output is None:
            sys.stdout.buffer.write(encoded)
    else:
        encoded_json = artifact.to_json(args.output)
        if args.output is None:
            sys.stdout.write(encoded_json)
    return 0


def cmd_rules(args: argparse.Namespace) -> int:
    resolver = _resolver(args)
    descriptor = _descriptor(args)
    policy = Policy(missing_artifacts="error" if args.strict else "disable")
    modules = [
        facefx_lib_rules(resolver, descriptor, policy=policy),
        facefx_rules(resolver.config, build_editor=args.editor),
        engine_rules(resolver, descriptor, build_editor=args.editor),
    ]
    if args.editor:
        modules.append(facefx_editor_rules(resolver.config))
    _write_json({rules.name: rules.to_dict() for rules in modules}, sys.stdout)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fxbuild", description="FaceFX build descriptors")
    sub = parser.add_subparsers(dest="command", required=True)

    resolve_p = sub.add_parser("resolve", help="Resolve the prebuilt FaceFX library")
    _add_target_arguments(resolve_p)
    resolve_p.add_argument("--format", choices=("json", "cbor"), default="json")
    resolve_p.add_argument("--output", type=Path, default=None, help="Write the result to a file")
    resolve_p.set_defaults(handler=cmd_resolve)

    rules_p = sub.add_parser("rules", help="Print module descriptors as JSON")
    _add_target_arguments(rules_p)
    rules_p.add_argument("--editor", action="store_true", help="Describe an editor build")
    rules_p.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of disabling FaceFX when artifacts are missing",
    )
    rules_p.set_defaults(handler=cmd_rules)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return int(args.handler(args))
    except FxBuildError as exc:
        _write_json(exc.to_dict(), sys.stderr)
        return 2


def _add_target_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--module-dir", type=Path, required=True)
    parser.add_argument("--platform", required=True)
    parser.add_argument("--architecture", default="")
    parser.add_argument("--toolchain", default=DEFAULT_TOOLCHAIN)
    parser.add_argument(
        "--configuration",
        choices=[item.value for item in Configuration],
        default=Configuration.DEVELOPMENT.value,
    )
    parser.add_argument("--config", type=Path, default=None, help="Build configuration JSON")


def _resolver(args: argparse.Namespace) -> ArtifactResolver:
    config = read_build_configuration(args.config) if args.config else BuildConfiguration()
    return ArtifactResolver(module_dir=args.module_dir, config=config)


def _descriptor(args: argparse.Namespace) -> TargetDescriptor:
    return TargetDescriptor(
        platform=args.platform,
        architecture=args.architecture,
        toolchain=args.toolchain,
        configuration=Configuration(args.configuration),
    )


def _write_json(payload: object, stream: TextIO) -> None:
    text = json.dumps(payload, indent=2, sort_keys=True) + "\n"
    stream.write(text)
