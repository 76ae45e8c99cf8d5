"""One-time advisory shown when debug FaceFX binaries get linked."""

from __future__ import annotations

import threading
import warnings
from dataclasses import dataclass, field

from fxbuild.observability import StructuredLogger

DEBUG_ARTIFACTS_MESSAGE = "Using debug libs for FaceFX"


class DebugArtifactsWarning(UserWarning):
    """Debug runtime binaries were selected for linking."""


@dataclass(slots=True)
class DebugArtifactAdvisory:
    """Claim-once guard around the debug-binaries advisory.

    Share one instance between resolvers to get a single advisory per
    process; the lock makes concurrent claims safe.
    """

    _warned: bool = field(default=False, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @property
    def warned(self) -> bool:
        return self._warned

    def claim(self) -> bool:
        """Return True for exactly one caller over the advisory's lifetime."""
        with self._lock:
            if self._warned:
                return False
            self._warned = True
            return True

    def emit(
        self,
        *,
        platform: str,
        logger: StructuredLogger | None = None,
        stacklevel: int = 2,
    ) -> bool:
        """Warn and log once.

        ``stacklevel`` goes to :func:`warnings.warn`; the default attributes the
        warning to whoever called ``emit``.
        """
        if not self.claim():
            return False
        warnings.warn(DEBUG_ARTIFACTS_MESSAGE, DebugArtifactsWarning, stacklevel=stacklevel)
        if logger is not None:
            logger.log(
                operation="resolve",
                platform=platform,
                configuration="Debug",
                message=DEBUG_ARTIFACTS_MESSAGE,
                level="warning",
            )
        return True

    def reset(self) -> None:
        with self._lock:
            self._warned = False
