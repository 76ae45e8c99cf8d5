"""Policy configuration for handling resolution failures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from fxbuild.errors import PolicyError, ResolutionError

MissingArtifactPolicy = Literal["error", "disable"]


@dataclass(frozen=True, slots=True)
class Policy:
    """How a caller reacts when no artifact can be resolved.

    ``"error"`` fails the build; ``"disable"`` drops the integration for the
    target and keeps building.
    """

    missing_artifacts: MissingArtifactPolicy = "disable"


def ensure_resolution_allowed(*, policy: Policy, error: ResolutionError) -> None:
    """Raise when *policy* does not allow continuing after *error*."""
    if policy.missing_artifacts == "disable":
        return
    if policy.missing_artifacts == "error":
        raise PolicyError(
            "FaceFX artifacts could not be resolved and policy requires them.",
            hint="Fix the bundled runtime or set Policy(missing_artifacts='disable').",
            context={"reason": error.code, **error.context},
        ) from error
    raise PolicyError(
        f"Unsupported missing_artifacts policy value: {policy.missing_artifacts}",
        context={"policy": str(policy.missing_artifacts)},
    )
