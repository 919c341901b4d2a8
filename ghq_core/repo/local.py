from __future__ import annotations

import threading
from pathlib import Path
from typing import (
    TYPE_CHECKING,
)
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from ghq_core.repo.roots import LocalRoots
    from ghq_core.vcs import (
        VCSBackend,
        VCSBackendDetector,
    )
    from ghq_core.vcs.backends import RemoteURL

from ghq_core.exceptions import NoLocalRepositoryError
from ghq_core.repo.roots import get_roots
from ghq_core.vcs import get_detector


class LocalRepository:
    """A (possibly not yet cloned) repository under a local root

    A local repository is identified by its path relative to a root
    directory, e.g. ``github.com/motemen/ghq``. The first component of this
    relative path is the host (or another namespace), the remaining ones are
    typically owner and name.

    Instances are created via :meth:`from_full_path` for existing working
    copies, or via :meth:`from_url` for the location of a remote repository.
    All path properties are read-only. Only the VCS detection result is
    determined lazily (see :meth:`vcs`).
    """

    def __init__(
        self,
        full_path: Path,
        root_path: Path,
        path_parts: tuple[str, ...],
        backend: VCSBackend | None = None,
    ):
        if not path_parts:
            msg = 'a local repository needs at least one path component'
            raise ValueError(msg)
        self._full_path = Path(full_path)
        self._root_path = Path(root_path)
        self._path_parts = tuple(path_parts)
        # the detected backend and the directory its markers were found in.
        # written at most once, guarded by the lock
        self._vcs_backend = backend
        self._repo_path: Path | None = None
        self._vcs_lock = threading.Lock()

    def __str__(self) -> str:
        return self.rel_path

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}('
            f'{self._full_path!r}, root={self._root_path!r})'
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocalRepository):
            return NotImplemented
        return (self._full_path, self._root_path, self._path_parts) == (
            other._full_path,
            other._root_path,
            other._path_parts,
        )

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self._full_path))

    @property
    def full_path(self) -> Path:
        """Absolute path of the working copy"""
        return self._full_path

    @property
    def root_path(self) -> Path:
        """Root directory the working copy is located under"""
        return self._root_path

    @property
    def rel_path(self) -> str:
        """Path relative to the root, ``/``-separated on all platforms"""
        return '/'.join(self._path_parts)

    @property
    def path_parts(self) -> tuple[str, ...]:
        """Components of :attr:`rel_path`"""
        return self._path_parts

    @property
    def non_host_path(self) -> str:
        """:attr:`rel_path` without the leading host component"""
        return '/'.join(self._path_parts[1:])

    @property
    def repo_path(self) -> Path:
        """Top-level directory of the working copy

        This is the directory where VCS markers were found by :meth:`vcs`,
        which can be a parent of :attr:`full_path`. Before (or without)
        detection, this is :attr:`full_path`.
        """
        return self._repo_path or self._full_path

    @classmethod
    def from_full_path(
        cls,
        full_path: Path | str,
        backend: VCSBackend | None = None,
        *,
        roots: LocalRoots | None = None,
    ) -> LocalRepository:
        """Create an instance for a path under one of the ``roots``

        The first root containing ``full_path`` is used. ``backend`` can be
        given when the VCS kind of the working copy is already known.

        Raises
        ------
        NoLocalRepositoryError
          If no root contains ``full_path``.
        """
        if roots is None:
            roots = get_roots()
        full_path = Path(full_path).absolute()
        root = roots.find_root_for(full_path)
        if root is None:
            raise NoLocalRepositoryError(full_path)
        return cls(
            full_path=full_path,
            root_path=root,
            path_parts=full_path.relative_to(root).parts,
            backend=backend,
        )

    @classmethod
    def from_url(
        cls,
        remote_url: RemoteURL,
        *,
        roots: LocalRoots | None = None,
        detector: VCSBackendDetector | None = None,
    ) -> LocalRepository:
        """Return the local repository for a remote URL

        All ``roots`` are searched for an existing working copy with the
        relative path derived from the URL (see :func:`url_to_relpath`).
        If there is none, an instance for a new working copy under the
        primary root is returned. Such a working copy does not exist yet.
        """
        # circular import
        from ghq_core.repo.walk import walk_local_repositories

        if roots is None:
            roots = get_roots()
        rel_path, path_parts = url_to_relpath(remote_url)

        found: list[LocalRepository] = []
        lock = threading.Lock()

        def _match(repo: LocalRepository) -> None:
            if repo.rel_path != rel_path:
                return
            with lock:
                if not found:
                    found.append(repo)

        walk_local_repositories(_match, roots=roots, detector=detector)
        if found:
            return found[0]

        return cls(
            full_path=roots.primary.joinpath(*path_parts),
            root_path=roots.primary,
            path_parts=path_parts,
        )

    def subpaths(self) -> list[str]:
        """Return all trailing parts of :attr:`rel_path`, shortest first

        For ``github.com/motemen/ghq`` this is
        ``['ghq', 'motemen/ghq', 'github.com/motemen/ghq']``.
        """
        parts = self._path_parts
        return ['/'.join(parts[-(i + 1) :]) for i in range(len(parts))]

    def matches(self, query: str) -> bool:
        """Whether ``query`` is identical to any of :meth:`subpaths`"""
        return query in self.subpaths()

    def is_under_primary_root(self, roots: LocalRoots | None = None) -> bool:
        """Whether the repository is located under the primary root"""
        if roots is None:
            roots = get_roots()
        prim = roots.primary
        return self._full_path == prim or prim in self._full_path.parents

    def repo_root_candidates(self) -> list[Path]:
        """Return directories that could be the top-level of the working copy

        These are :attr:`full_path` and all its parents up to, and
        including, the host directory (longest first). For
        ``<root>/github.com/motemen/ghq/cmdutil`` these are::

          <root>/github.com/motemen/ghq/cmdutil
          <root>/github.com/motemen/ghq
          <root>/github.com/motemen
          <root>/github.com
        """
        host_root = self._root_path / self._path_parts[0]
        non_host = self._path_parts[1:]
        return [
            host_root.joinpath(*non_host[: len(non_host) - i])
            for i in range(len(non_host) + 1)
        ]

    def vcs(
        self,
        detector: VCSBackendDetector | None = None,
    ) -> tuple[VCSBackend | None, Path]:
        """Return the VCS backend and top-level directory of the working copy

        Unless the backend was already known on creation, the
        :meth:`repo_root_candidates` are probed in order, and the first
        detected backend is kept, together with the directory it was
        detected in. Once found, the result is never re-evaluated.
        If nothing is found, ``(None, full_path)`` is returned, and
        detection is attempted again on the next call.
        """
        with self._vcs_lock:
            if self._vcs_backend is None:
                if detector is None:
                    detector = get_detector()
                for candidate in self.repo_root_candidates():
                    backend = detector.find(candidate)
                    if backend is not None:
                        self._vcs_backend = backend
                        self._repo_path = candidate
                        break
            return self._vcs_backend, self.repo_path


def url_to_relpath(remote_url: RemoteURL) -> tuple[str, tuple[str, ...]]:
    """Derive the local relative path of a repository from its URL

    The path is made of the URL's host name, followed by the components of
    the URL path. A ``.git`` suffix is removed from the last component.
    Returns the ``/``-separated relative path, and its components.

    >>> url_to_relpath('https://github.com/motemen/ghq.git')
    ('github.com/motemen/ghq', ('github.com', 'motemen', 'ghq'))
    """
    url = urlsplit(remote_url) if isinstance(remote_url, str) else remote_url
    parts = [_hostname(url.netloc)]
    # empty and `.` segments do not name a directory
    parts.extend(p for p in url.path.split('/') if p not in ('', '.'))
    parts[-1] = parts[-1].removesuffix('.git')
    parts = [p for p in parts if p]
    if not parts:
        msg = f'cannot derive a local path from URL {remote_url!r}'
        raise ValueError(msg)
    return '/'.join(parts), tuple(parts)


def _hostname(netloc: str) -> str:
    # drop any user info and port, keep the case as-is
    host = netloc.rpartition('@')[2]
    if host.startswith('['):
        # IPv6 literal
        return host[1 : host.find(']')]
    return host.partition(':')[0]
