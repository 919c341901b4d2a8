"""Fixture setup"""

__all__ = [
    'cfgman',
    'ghq_root',
    'gitrepo',
    'local_roots',
    'skip_when_symlinks_not_supported',
    'symlinks_supported',
    'vcs_calls',
    'verify_pristine_gitconfig_global',
]


from ghq_core.tests.fixtures import (
    # function-scope config manager with an isolated global scope
    cfgman,
    # function-scope, existing and empty root directory
    ghq_root,
    # function-scope temporary Git repo with a commit
    gitrepo,
    # function-scope LocalRoots with `ghq_root`
    local_roots,
    # function-scope auto-skip when `symlinks_supported` is False
    skip_when_symlinks_not_supported,
    # session-scope flag if symlinks are supported in test directories
    symlinks_supported,
    # function-scope recorder of commands run by VCS backends
    vcs_calls,
    # verify no test leave contaminated config behind
    verify_pristine_gitconfig_global,
)
