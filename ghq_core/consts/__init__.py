"""Assorted common constants"""

__all__ = [
    'UnsetValue',
    'GHQ_ROOT_ENVVAR',
    'GHQ_ROOT_CFGKEY',
    'GHQ_FINDVCS_CFGKEY',
    'DEFAULT_ROOT_DIRNAME',
    'FOSSIL_REPO_NAME',
]

from datasalad.settings import UnsetValue

GHQ_ROOT_ENVVAR = 'GHQ_ROOT'
"""Environment variable with a platform path-list of root directories

When set and non-empty, it takes precedence over any ``ghq.root``
configuration.
"""
GHQ_ROOT_CFGKEY = 'ghq.root'
"""Multi-valued git-config key declaring root directories"""
GHQ_FINDVCS_CFGKEY = 'ghq.findvcs'
"""Multi-valued git-config key limiting the VCS kinds used for detection

Git reports this key as ``ghq.findvcs``, users typically write it
as ``ghq.findVcs``. Both refer to the same setting.
"""
DEFAULT_ROOT_DIRNAME = '.ghq'
"""Name of the default root directory in the user's home directory"""
FOSSIL_REPO_NAME = '.fossil'
"""Name of the repository file that Fossil clones into a checkout directory"""
