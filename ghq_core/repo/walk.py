from __future__ import annotations

import errno
import logging
import os
import stat
import threading
from concurrent.futures import (
    FIRST_COMPLETED,
    Future,
    ThreadPoolExecutor,
    wait,
)
from pathlib import Path
from typing import (
    TYPE_CHECKING,
    Callable,
)

if TYPE_CHECKING:
    from ghq_core.repo.roots import LocalRoots
    from ghq_core.vcs import VCSBackendDetector

from ghq_core.exceptions import NoLocalRepositoryError
from ghq_core.repo.local import LocalRepository
from ghq_core.repo.roots import get_roots
from ghq_core.vcs import get_detector

lgr = logging.getLogger('ghq.repo')

# a root with none of these permission bits cannot be walked
_READ_BITS = stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH


def walk_local_repositories(
    callback: Callable[[LocalRepository], None],
    *,
    roots: LocalRoots | None = None,
    detector: VCSBackendDetector | None = None,
    max_workers: int | None = None,
) -> None:
    """Report all working copies under the roots to ``callback``

    Each root is walked recursively. Every directory (or symlink to a
    directory) is checked for VCS markers with ``detector``. For each
    detected working copy, a :class:`LocalRepository` is passed to
    ``callback``.

    .. important::
      Directories are scanned by a pool of ``max_workers`` threads, and
      ``callback`` is called from these threads, possibly concurrently.
      It must be safe to use from multiple threads. There is no particular
      order in which working copies are reported.

    The walk does not descend into a detected working copy, nor into any
    symlinked directory. The root directories themselves are not
    considered working copies.

    Roots that do not exist are skipped. Entries that cannot be accessed
    due to insufficient permissions are skipped too.

    Raises
    ------
    PermissionError
      If a root directory exists, but has no read permission bits set at
      all. No partial results are reported for such a root.
    OSError
      For any other error while walking. The walk is aborted.
    """
    if roots is None:
        roots = get_roots()
    if detector is None:
        detector = get_detector()

    for root in roots:
        try:
            root_stat = root.stat()
        except FileNotFoundError:
            lgr.debug('Skipping non-existing root %s', root)
            continue
        if not root_stat.st_mode & _READ_BITS:
            raise PermissionError(
                errno.EACCES,
                'local repository root is not readable',
                str(root),
            )
        _walk_root(root, callback, roots, detector, max_workers)


def list_local_repositories(
    *,
    roots: LocalRoots | None = None,
    detector: VCSBackendDetector | None = None,
    max_workers: int | None = None,
) -> list[LocalRepository]:
    """Return all working copies under the roots

    Unlike with :func:`walk_local_repositories`, the result order is
    deterministic: repositories are sorted by the precedence of their
    root, and by their relative path within a root.
    """
    if roots is None:
        roots = get_roots()
    repos: list[LocalRepository] = []
    lock = threading.Lock()

    def _collect(repo: LocalRepository) -> None:
        with lock:
            repos.append(repo)

    walk_local_repositories(
        _collect,
        roots=roots,
        detector=detector,
        max_workers=max_workers,
    )
    root_order = {r: i for i, r in enumerate(roots)}
    repos.sort(
        key=lambda r: (root_order.get(r.root_path, len(root_order)), r.path_parts),
    )
    return repos


def _walk_root(
    root: Path,
    callback: Callable[[LocalRepository], None],
    roots: LocalRoots,
    detector: VCSBackendDetector,
    max_workers: int | None,
) -> None:
    def _scan(path: Path) -> list[Path]:
        return _scan_dir(path, callback, roots, detector)

    executor = ThreadPoolExecutor(
        max_workers=max_workers,
        thread_name_prefix='ghq-walk',
    )
    pending: set[Future] = {executor.submit(_scan, root)}
    try:
        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                # raises on a hard error, aborting the walk
                pending.update(executor.submit(_scan, d) for d in future.result())
    finally:
        # do not wait for any queued directory scans after an error
        executor.shutdown(wait=True, cancel_futures=True)


def _scan_dir(
    path: Path,
    callback: Callable[[LocalRepository], None],
    roots: LocalRoots,
    detector: VCSBackendDetector,
) -> list[Path]:
    """Inspect the entries of a directory

    Detected working copies are reported to ``callback``, all other
    directories are returned for further descent.
    """
    try:
        with os.scandir(path) as it:
            entries = list(it)
    except PermissionError:
        lgr.debug('Skipping unreadable directory %s', path)
        return []

    subdirs: list[Path] = []
    for entry in entries:
        entry_path = Path(entry.path)
        try:
            is_symlink = entry.is_symlink()
            if is_symlink:
                try:
                    is_dir = entry_path.resolve(strict=True).is_dir()
                except (OSError, RuntimeError):
                    # dangling, looping, or otherwise unresolvable link
                    lgr.debug('Skipping unresolvable symlink %s', entry_path)
                    continue
            else:
                is_dir = entry.is_dir(follow_symlinks=False)
        except PermissionError:
            lgr.debug('Skipping inaccessible %s', entry_path)
            continue
        if not is_dir:
            continue

        backend = detector.find(entry_path)
        if backend is None:
            if not is_symlink:
                subdirs.append(entry_path)
            continue

        try:
            repo = LocalRepository.from_full_path(entry_path, backend, roots=roots)
        except NoLocalRepositoryError:
            # cannot happen for paths found under a root, unless the
            # roots given do not match the walked root
            lgr.debug('Ignoring working copy outside roots: %s', entry_path)
            continue
        callback(repo)
    return subdirs
