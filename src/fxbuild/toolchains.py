"""Compiler toolchain generation buckets.

Concrete compiler versions collapse into a few ABI-compatible buckets, each
of which maps to one artifact directory in the bundled runtime. Supporting a
new compiler is a matter of extending :data:`TOOLCHAIN_VERSIONS` (or calling
:meth:`ToolchainTable.with_toolchain`), never of adding branches.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from fxbuild.errors import ValidationError

TOOLCHAIN_VERSIONS: Mapping[str, int] = {
    "VisualStudio2012": 110,
    "VisualStudio2013": 120,
    "VisualStudio2015": 140,
    "VisualStudio2017": 141,
    "VisualStudio2019": 142,
    "VisualStudio2022": 143,
}

# Ordered by descending cutoff; the last entry must catch everything.
TOOLCHAIN_BUCKETS: tuple[tuple[int, str], ...] = (
    (140, "vs14"),
    (0, "vs12"),
)


@dataclass(frozen=True, slots=True)
class ToolchainTable:
    versions: Mapping[str, int] = field(default_factory=lambda: dict(TOOLCHAIN_VERSIONS))
    buckets: tuple[tuple[int, str], ...] = TOOLCHAIN_BUCKETS

    def __post_init__(self) -> None:
        validate_buckets(self.buckets)

    def version_of(self, toolchain: str) -> int:
        try:
            return self.versions[toolchain]
        except KeyError:
            raise ValidationError(
                f"Unknown compiler toolchain `{toolchain}`.",
                hint="Register the compiler version in the toolchain table.",
                context={"toolchain": toolchain, "known": ", ".join(sorted(self.versions))},
            ) from None

    def bucket_for(self, toolchain: str) -> str:
        """Return the artifact bucket for *toolchain*.

        Names missing from the version table land in the catch-all bucket,
        the same place every pre-2015 compiler goes.
        """
        version = self.versions.get(toolchain)
        if version is None:
            return self.buckets[-1][1]
        for cutoff, bucket in self.buckets:
            if version >= cutoff:
                return bucket
        raise ValidationError(
            f"Toolchain `{toolchain}` does not fall into any bucket.",
            context={"toolchain": toolchain, "version": str(version)},
        )

    def with_toolchain(self, name: str, version: int) -> ToolchainTable:
        versions = dict(self.versions)
        versions[name] = version
        return ToolchainTable(versions=versions, buckets=self.buckets)


def validate_buckets(buckets: tuple[tuple[int, str], ...]) -> None:
    if not buckets:
        raise ValidationError("Toolchain bucket table is empty.")
    cutoffs = [cutoff for cutoff, _ in buckets]
    if any(later >= earlier for earlier, later in zip(cutoffs, cutoffs[1:])):
        raise ValidationError(
            "Toolchain bucket cutoffs must be strictly descending.",
            context={"cutoffs": ", ".join(str(c) for c in cutoffs)},
        )
    if cutoffs[-1] != 0:
        raise ValidationError(
            "The last toolchain bucket must be a catch-all with cutoff 0.",
            context={"cutoff": str(cutoffs[-1])},
        )
    for _, bucket in buckets:
        if not bucket:
            raise ValidationError("Toolchain bucket names must be non-empty.")


DEFAULT_TOOLCHAINS = ToolchainTable()
