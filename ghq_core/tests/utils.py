from __future__ import annotations

import os
import stat
from pathlib import (
    Path,
    PurePosixPath,
)
from shutil import rmtree as shutil_rmtree

from ghq_core.runners import call_git


def make_working_copy(
    root: Path,
    rel_path: str,
    marker: str = '.git',
) -> Path:
    """Create a fake working copy at ``rel_path`` under ``root``

    ``rel_path`` is ``/``-separated. Detection only needs the marker to
    exist, so the marker path is created as a directory, unless it contains
    a path separator, then its last component is created as an empty file
    (e.g., ``CVS/Repository``).

    Returns the path of the working copy.
    """
    wc = root.joinpath(*PurePosixPath(rel_path).parts)
    marker_path = wc.joinpath(*PurePosixPath(marker).parts)
    if '/' in marker:
        marker_path.parent.mkdir(parents=True, exist_ok=True)
        marker_path.touch()
    else:
        marker_path.mkdir(parents=True, exist_ok=True)
    return wc


def call_git_addcommit(
    cwd: Path,
    *,
    msg: str = 'done by call_git_addcommit()',
) -> None:
    """Commit all changes in the worktree at ``cwd``"""
    call_git(['add', '--all'], cwd=cwd, capture_output=True)
    call_git(
        ['commit', '--no-gpg-sign', '-m', msg],
        cwd=cwd,
        capture_output=True,
    )


def rmtree(path: Path) -> None:
    """``shutil.rmtree()`` that also removes read-only directories"""

    def _fix_permissions(func, p, exc_info):  # noqa: ARG001
        parent = os.path.dirname(p)
        if os.access(parent, os.W_OK | os.X_OK) and os.access(p, os.R_OK):
            raise exc_info[1]
        os.chmod(parent, stat.S_IRWXU)
        os.chmod(p, stat.S_IRWXU)
        func(p)

    # onerror= is deprecated with PY3.12, but onexc= is PY3.12+ only
    shutil_rmtree(path, onerror=_fix_permissions)
