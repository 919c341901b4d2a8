from __future__ import annotations

from abc import (
    ABC,
    abstractmethod,
)
from pathlib import Path
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Union,
)

if TYPE_CHECKING:
    from urllib.parse import (
        ParseResult,
        SplitResult,
    )

    RemoteURL = Union[str, SplitResult, ParseResult]

from ghq_core.consts import FOSSIL_REPO_NAME
from ghq_core.exceptions import UnsupportedVCSOperationError
from ghq_core.runners import call_vcs


class VCSBackend(ABC):
    """Clone/update strategy for one kind of VCS

    A backend is stateless. It decides which commands are run where, the
    commands themselves are executed via :func:`~ghq_core.runners.call_vcs`.
    Any :class:`~ghq_core.runners.CommandError` is raised as-is.
    """

    name: str = ''
    """Canonical name of the VCS kind"""
    markers: tuple[str, ...] = ()
    """Paths (relative to a directory) that identify a working copy"""

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}()'

    def contents(self) -> tuple[str, ...]:
        """Return the marker paths identifying a working copy of this kind"""
        return self.markers

    @abstractmethod
    def clone(
        self,
        remote_url: RemoteURL,
        local_path: Path,
        *,
        shallow: bool = False,
        silent: bool = False,
    ) -> None:
        """Create a new working copy of ``remote_url`` at ``local_path``

        ``shallow`` requests a partial history where the VCS supports it.
        It is ignored by backends without such support. With ``silent``,
        command output is not shown.
        """

    @abstractmethod
    def update(self, local_path: Path, *, silent: bool = False) -> None:
        """Update an existing working copy at ``local_path``"""


class GitBackend(VCSBackend):
    name = 'git'
    markers = ('.git',)

    # TODO: support submodules (--recursive on clone, and on update)
    def clone(self, remote_url, local_path, *, shallow=False, silent=False):
        _ensure_parent_dir(local_path)
        cmd = ['git', 'clone']
        if shallow:
            cmd.extend(('--depth', '1'))
        cmd.extend((_url2str(remote_url), str(local_path)))
        call_vcs(cmd, silent=silent)

    def update(self, local_path, *, silent=False):
        call_vcs(['git', 'pull', '--ff-only'], cwd=Path(local_path), silent=silent)


class SubversionBackend(VCSBackend):
    name = 'svn'
    markers = ('.svn',)

    def clone(self, remote_url, local_path, *, shallow=False, silent=False):
        _ensure_parent_dir(local_path)
        cmd = ['svn', 'checkout']
        if shallow:
            cmd.extend(('--depth', '1'))
        cmd.extend((_url2str(remote_url), str(local_path)))
        call_vcs(cmd, silent=silent)

    def update(self, local_path, *, silent=False):
        call_vcs(['svn', 'update'], cwd=Path(local_path), silent=silent)


class GitSvnBackend(VCSBackend):
    name = 'git-svn'
    markers = ('.git/svn',)

    def clone(self, remote_url, local_path, *, shallow=False, silent=False):
        # git-svn has no shallow clone
        _ensure_parent_dir(local_path)
        call_vcs(
            ['git', 'svn', 'clone', _url2str(remote_url), str(local_path)],
            silent=silent,
        )

    def update(self, local_path, *, silent=False):
        call_vcs(['git', 'svn', 'rebase'], cwd=Path(local_path), silent=silent)


class MercurialBackend(VCSBackend):
    name = 'hg'
    markers = ('.hg',)

    def clone(self, remote_url, local_path, *, shallow=False, silent=False):
        # no shallow clone for Mercurial
        _ensure_parent_dir(local_path)
        call_vcs(
            ['hg', 'clone', _url2str(remote_url), str(local_path)],
            silent=silent,
        )

    def update(self, local_path, *, silent=False):
        call_vcs(['hg', 'pull', '--update'], cwd=Path(local_path), silent=silent)


class DarcsBackend(VCSBackend):
    name = 'darcs'
    markers = ('_darcs',)

    def clone(self, remote_url, local_path, *, shallow=False, silent=False):
        _ensure_parent_dir(local_path)
        cmd = ['darcs', 'get']
        if shallow:
            cmd.append('--lazy')
        cmd.extend((_url2str(remote_url), str(local_path)))
        call_vcs(cmd, silent=silent)

    def update(self, local_path, *, silent=False):
        call_vcs(['darcs', 'pull'], cwd=Path(local_path), silent=silent)


class FossilBackend(VCSBackend):
    """Fossil clones into a repository file, and then opens a checkout

    The repository file is placed inside the checkout directory, which is
    therefore created by the backend itself.
    """

    name = 'fossil'
    markers = ('.fslckout', '_FOSSIL_')

    def clone(self, remote_url, local_path, *, shallow=False, silent=False):
        local_path = Path(local_path)
        local_path.mkdir(mode=0o755, parents=True, exist_ok=True)
        call_vcs(
            [
                'fossil',
                'clone',
                _url2str(remote_url),
                str(local_path / FOSSIL_REPO_NAME),
            ],
            silent=silent,
        )
        call_vcs(
            ['fossil', 'open', FOSSIL_REPO_NAME],
            cwd=local_path,
            silent=silent,
        )

    def update(self, local_path, *, silent=False):
        call_vcs(['fossil', 'update'], cwd=Path(local_path), silent=silent)


class BazaarBackend(VCSBackend):
    name = 'bzr'
    markers = ('.bzr',)

    def clone(self, remote_url, local_path, *, shallow=False, silent=False):
        # no shallow clone for Bazaar
        _ensure_parent_dir(local_path)
        call_vcs(
            ['bzr', 'branch', _url2str(remote_url), str(local_path)],
            silent=silent,
        )

    def update(self, local_path, *, silent=False):
        # tags that changed upstream are only pulled with --overwrite
        call_vcs(['bzr', 'pull', '--overwrite'], cwd=Path(local_path), silent=silent)


class CVSDummyBackend(VCSBackend):
    """CVS working copies can be detected, but neither cloned nor updated"""

    name = 'cvs'
    markers = ('CVS/Repository',)

    def clone(self, remote_url, local_path, *, shallow=False, silent=False):
        raise UnsupportedVCSOperationError('CVS', 'clone')

    def update(self, local_path, *, silent=False):
        raise UnsupportedVCSOperationError('CVS', 'update')


def _ensure_parent_dir(local_path: Path | str) -> None:
    Path(local_path).parent.mkdir(mode=0o755, parents=True, exist_ok=True)


def _url2str(remote_url: RemoteURL) -> str:
    # SplitResult/ParseResult would stringify as a tuple
    geturl = getattr(remote_url, 'geturl', None)
    return geturl() if geturl is not None else str(remote_url)


git = GitBackend()
svn = SubversionBackend()
git_svn = GitSvnBackend()
hg = MercurialBackend()
darcs = DarcsBackend()
fossil = FossilBackend()
bzr = BazaarBackend()
cvs = CVSDummyBackend()

VCS_REGISTRY: MappingProxyType[str, VCSBackend] = MappingProxyType(
    {
        'git': git,
        'github': git,
        'svn': svn,
        'subversion': svn,
        'git-svn': git_svn,
        'hg': hg,
        'mercurial': hg,
        'darcs': darcs,
        'fossil': fossil,
        'bzr': bzr,
        'bazaar': bzr,
        'cvs': cvs,
    }
)
"""Mapping of VCS kind names, including aliases, to backends"""


def get_backend(name: str) -> VCSBackend:
    """Return the backend registered for a VCS kind name or alias

    Raises
    ------
    ValueError
      For an unknown name.
    """
    try:
        return VCS_REGISTRY[name]
    except KeyError as e:
        msg = f'unknown VCS {name!r}, known are: {", ".join(sorted(VCS_REGISTRY))}'
        raise ValueError(msg) from e
