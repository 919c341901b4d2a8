"""pytest fixtures shared by all test modules"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path

    from ghq_core.config import ConfigManager

import pytest

from ghq_core.config import (
    GlobalGitConfig,
    get_manager,
)
from ghq_core.repo import LocalRoots
from ghq_core.runners import call_git
from ghq_core.tests.utils import call_git_addcommit

magic_marker = '3b0b5a2e-9d7e-11f0-8c4a-0f2e6b1d9a77'
test_gitconfig = f"""\
[ghqtest "magic"]
    test-marker = {magic_marker}
[user]
    name = GHQ Tester
    email = test@example.com
[init]
    defaultBranch = main
"""


@pytest.fixture(autouse=False, scope='function')  # noqa: PT003
def cfgman(monkeypatch, tmp_path_factory) -> Generator[ConfigManager]:
    """Yield the configuration manager, with a throw-away global scope

    ``GIT_CONFIG_GLOBAL`` points to a fresh file for the duration of the
    test, and the ``git-global`` source of the manager is reloaded from it.
    Tests are skipped with Git versions that ignore ``GIT_CONFIG_GLOBAL``
    (before 2.32).
    """
    manager = get_manager()
    ggc = manager.sources['git-global']
    cfgfile = tmp_path_factory.mktemp('gitcfg') / 'global'
    cfgfile.write_text(test_gitconfig)
    with monkeypatch.context() as m:
        m.setenv('GIT_CONFIG_GLOBAL', str(cfgfile))
        ggc.reinit().load()
        key = 'ghqtest.magic.test-marker'
        if key not in ggc or ggc[key].value != magic_marker:  # pragma: no cover
            pytest.skip('GIT_CONFIG_GLOBAL not honored, Git older than v2.32?')
        yield manager
    # back to the user's global scope
    ggc.reinit().load()


@pytest.fixture(autouse=True, scope='function')  # noqa: PT003
def verify_pristine_gitconfig_global():
    """Fail any test that leaves the user's global Git config modified

    Tests that need to write global configuration must use ``cfgman``.
    """

    def _snapshot():
        ggc = GlobalGitConfig()
        return {k: tuple(i.pristine_value for i in ggc.getall(k)) for k in ggc}

    before = _snapshot()
    yield
    if _snapshot() != before:  # pragma: no cover
        msg = 'test modified the global Git config, use the `cfgman` fixture'
        raise AssertionError(msg)


@pytest.fixture(autouse=False, scope='function')  # noqa: PT003
def gitrepo(tmp_path_factory, cfgman) -> Generator[Path]:  # noqa: ARG001
    """Yield the path to a Git repository with a ``README`` in one commit"""
    # separate from any `tmp_path` of the test itself
    path = tmp_path_factory.mktemp('gitrepo')
    call_git(['init'], cwd=path, capture_output=True)
    (path / 'README').write_text('ghq test repository\n')
    call_git_addcommit(path)
    return path


@pytest.fixture(autouse=False, scope='function')  # noqa: PT003
def ghq_root(tmp_path_factory) -> Generator[Path]:
    """Yield the path of an empty, existing root directory

    The path is fully resolved, like any root determined by
    :func:`~ghq_core.repo.resolve_roots`.
    """
    return tmp_path_factory.mktemp('ghqroot').resolve()


@pytest.fixture(autouse=False, scope='function')  # noqa: PT003
def local_roots(ghq_root) -> Generator[LocalRoots]:
    """Yield :class:`LocalRoots` with `ghq_root` as the only root"""
    return LocalRoots((ghq_root,))


@pytest.fixture(autouse=False, scope='function')  # noqa: PT003
def vcs_calls(monkeypatch) -> Generator[list]:
    """Record VCS commands of backends instead of executing them

    Yields a list that receives a ``(cmd, cwd, silent)`` tuple for each
    command a backend would have executed.
    """
    calls: list = []

    def _record(cmd, *, cwd=None, silent=False):
        calls.append((cmd, cwd, silent))

    monkeypatch.setattr('ghq_core.vcs.backends.call_vcs', _record)
    return calls


@pytest.fixture(autouse=False, scope='session')
def symlinks_supported(tmp_path_factory) -> bool:
    """Whether symlinks can be created in temporary test directories"""
    probe = tmp_path_factory.mktemp('symlinks') / 'link'
    try:
        probe.symlink_to(probe.parent)
    except (OSError, NotImplementedError):
        return False
    return True


@pytest.fixture(autouse=False, scope='function')  # noqa: PT003
def skip_when_symlinks_not_supported(symlinks_supported):
    if not symlinks_supported:
        pytest.skip('symlinks are not supported in temporary directories')
