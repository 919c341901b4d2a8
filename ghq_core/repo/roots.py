from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import (
        Iterator,
        Mapping,
    )

    from ghq_core.config import ConfigManager

from ghq_core.config import get_manager
from ghq_core.consts import (
    DEFAULT_ROOT_DIRNAME,
    GHQ_ROOT_CFGKEY,
    GHQ_ROOT_ENVVAR,
)

lgr = logging.getLogger('ghq.repo')


@dataclass(frozen=True)
class LocalRoots:
    """Ordered collection of root directories of local repositories

    The order is the configured precedence. The first root is the
    *primary* root, new clones are placed under it.

    Instances are immutable. Use :meth:`from_config` to obtain an instance
    from the environment and configuration.
    """

    paths: tuple[Path, ...]

    def __post_init__(self):
        if not self.paths:
            msg = 'at least one root directory is required'
            raise ValueError(msg)
        # coerce any path-like into Path, without changing the identity
        # semantics of the frozen instance
        object.__setattr__(self, 'paths', tuple(Path(p) for p in self.paths))

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    @property
    def primary(self) -> Path:
        """The first (highest precedence) root"""
        return self.paths[0]

    def find_root_for(self, path: Path | str) -> Path | None:
        """Return the first root that contains ``path``

        A root contains any path underneath it, but not itself. Matching is
        done on path components, ``/a/ghq`` does not contain ``/a/ghq2/b``.
        ``None`` is returned when no root matches.
        """
        path = Path(path)
        for root in self.paths:
            if root in path.parents:
                return root
        return None

    @classmethod
    def from_config(
        cls,
        manager: ConfigManager | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> LocalRoots:
        """Resolve roots, see :func:`resolve_roots`"""
        return cls(resolve_roots(manager=manager, environ=environ))


def resolve_roots(
    manager: ConfigManager | None = None,
    environ: Mapping[str, str] | None = None,
) -> tuple[Path, ...]:
    """Determine the root directories of local repositories

    The first non-empty declaration wins:

    1. The ``GHQ_ROOT`` environment variable, a list of paths separated by
       ``os.pathsep``.
    2. The ``ghq.root`` configuration, with one value per root. Like with
       ``git config --path`` a leading ``~`` is expanded.
    3. ``~/.ghq``

    Each path is normalized. Paths of existing directories are resolved to
    their real location (symlinks resolved). All other paths are made
    absolute, relative to the current working directory.

    ``manager`` defaults to :func:`~ghq_core.config.get_manager`, and
    ``environ`` to ``os.environ``.

    Raises
    ------
    RuntimeError
      If the default root is needed, but the home directory cannot be
      determined.
    OSError
      If a symlinked root cannot be resolved.
    """
    if environ is None:
        environ = os.environ

    candidates: list[str] = [
        p for p in environ.get(GHQ_ROOT_ENVVAR, '').split(os.pathsep) if p
    ]
    if candidates:
        origin = GHQ_ROOT_ENVVAR
    else:
        if manager is None:
            manager = get_manager()
        candidates = [
            os.path.expanduser(p) for p in manager.get_values(GHQ_ROOT_CFGKEY) if p
        ]
        origin = GHQ_ROOT_CFGKEY
    if not candidates:
        candidates = [str(Path.home() / DEFAULT_ROOT_DIRNAME)]
        origin = 'default'

    roots = tuple(_normalize_root(c) for c in candidates)
    lgr.debug('Local repository roots (from %s): %s', origin, roots)
    return roots


def _normalize_root(value: str) -> Path:
    path = Path(os.path.normpath(value))
    if path.exists():
        # raises, if a link cannot be resolved
        return path.resolve(strict=True)
    return path.absolute()


__the_roots: LocalRoots | None = None
__the_roots_lock = threading.Lock()


def get_roots() -> LocalRoots:
    """Return the process-unique :class:`LocalRoots`

    Roots are resolved once, on first call, and never change afterwards.
    Calls from concurrent threads all receive the same instance.
    """
    global __the_roots  # noqa: PLW0603
    with __the_roots_lock:
        if __the_roots is None:
            __the_roots = LocalRoots.from_config()
    return __the_roots


def get_primary_root() -> Path:
    """Return the primary root of :func:`get_roots`"""
    return get_roots().primary
