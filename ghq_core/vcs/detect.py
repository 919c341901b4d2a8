from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ghq_core.config import ConfigManager

from ghq_core.config import get_manager
from ghq_core.consts import GHQ_FINDVCS_CFGKEY
from ghq_core.vcs.backends import (
    VCS_REGISTRY,
    VCSBackend,
)

lgr = logging.getLogger('ghq.vcs')


class VCSBackendDetector:
    """Determine the VCS kind of a directory from marker paths

    Markers are probed in order of decreasing length. A longer marker is
    more specific than a shorter one of the same family, e.g. ``.git/svn``
    (git-svn) is preferred over ``.git`` (git).

    Detection only tests for the existence of a marker, no content
    is inspected.
    """

    def __init__(self, kinds: Iterable[str] | None = None):
        """
        ``kinds`` limits detection to markers of the named VCS kinds (names
        and aliases of :data:`~ghq_core.vcs.VCS_REGISTRY`). Unknown names
        are ignored. With ``None``, markers of all registered backends
        participate.
        """
        if kinds is None:
            backends: Iterable[VCSBackend] = VCS_REGISTRY.values()
        else:
            backends = []
            for kind in kinds:
                backend = VCS_REGISTRY.get(kind)
                if backend is None:
                    lgr.debug('Ignoring unknown VCS %r for detection', kind)
                    continue
                backends.append(backend)

        marker_map: dict[str, VCSBackend] = {}
        for backend in backends:
            for marker in backend.contents():
                marker_map[marker] = backend
        self._marker_map = MappingProxyType(marker_map)
        # longest first. equal length markers sort by name, so that
        # the probe order does not depend on registration order
        self._markers = tuple(sorted(marker_map, key=lambda m: (-len(m), m)))

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({list(self._markers)!r})'

    @classmethod
    def from_config(cls, manager: ConfigManager | None = None) -> VCSBackendDetector:
        """Create a detector honoring the ``ghq.findVcs`` setting

        Without any ``ghq.findVcs`` configuration, all backends participate.
        """
        if manager is None:
            manager = get_manager()
        kinds = manager.get_values(GHQ_FINDVCS_CFGKEY)
        return cls(kinds or None)

    @property
    def markers(self) -> tuple[str, ...]:
        """Marker paths in the order they are probed"""
        return self._markers

    def find(self, path: Path | str) -> VCSBackend | None:
        """Return the backend owning the directory ``path``, or ``None``"""
        for marker in self._markers:
            try:
                os.stat(Path(path, marker))
            except OSError:
                continue
            return self._marker_map[marker]
        return None


__the_detector: VCSBackendDetector | None = None
__the_detector_lock = threading.Lock()


def get_detector() -> VCSBackendDetector:
    """Return a process-unique detector configured via ``ghq.findVcs``

    The configuration is read on first call only.
    """
    global __the_detector  # noqa: PLW0603
    with __the_detector_lock:
        if __the_detector is None:
            __the_detector = VCSBackendDetector.from_config()
    return __the_detector
