"""Configuration management

Configuration is read from Git's configuration scopes, built on
`datasalad.settings
<https://datasalad.readthedocs.io/latest/generated/datasalad.settings.html>`__.

The key piece is the :class:`ConfigManager` that supports querying for
configuration settings across multiple sources. It also offers a context
manager to temporarily override particular configuration items.

Relevant settings are:

- ``ghq.root``: multi-valued, the root directories of local repositories
- ``ghq.findVcs``: multi-valued, the VCS kinds considered when detecting
  working copies

Usage
-----

No instance of :class:`~ghq_core.config.ConfigManager` is provided on
import. A common instance is obtained by calling :func:`get_manager`.
Subsequent calls will return the same instance.

.. currentmodule:: ghq_core.config
.. autosummary::
   :toctree: generated

   ConfigItem
   ConfigManager
   GitConfig
   SystemGitConfig
   GlobalGitConfig
   GitEnvironment
   ImplementationDefaults
   UnsetValue
   get_defaults
   get_manager
"""

__all__ = [
    'ConfigItem',
    'ConfigManager',
    'GitConfig',
    'SystemGitConfig',
    'GlobalGitConfig',
    'GitEnvironment',
    'ImplementationDefaults',
    'UnsetValue',
    'get_defaults',
    'get_manager',
]

from datasalad.settings import UnsetValue

from .defaults import (
    ImplementationDefaults,
    get_defaults,
)
from .git import (
    GitConfig,
    GlobalGitConfig,
    SystemGitConfig,
)
from .gitenv import GitEnvironment
from .item import ConfigItem
from .manager import (
    ConfigManager,
    get_manager,
)
