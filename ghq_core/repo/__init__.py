"""Local repositories under root directories

Local repositories are kept under one or more root directories
(:class:`LocalRoots`), at a location derived from their remote URL:
``<root>/<host>/<owner>/<name>``. The roots are declared via the
``GHQ_ROOT`` environment variable, or the ``ghq.root`` configuration, and
default to ``~/.ghq``.

A :class:`LocalRepository` represents a single working copy, or the
location a remote repository would be cloned to. All existing working
copies can be discovered with :func:`walk_local_repositories`.

Functions and methods that need the roots take them as an explicit
``roots`` parameter. If not given, the process-unique roots of
:func:`get_roots` are used.

.. currentmodule:: ghq_core.repo
.. autosummary::
   :toctree: generated

   LocalRepository
   LocalRoots
   get_primary_root
   get_roots
   list_local_repositories
   resolve_roots
   url_to_relpath
   walk_local_repositories
"""

__all__ = [
    'LocalRepository',
    'LocalRoots',
    'get_primary_root',
    'get_roots',
    'list_local_repositories',
    'resolve_roots',
    'url_to_relpath',
    'walk_local_repositories',
]

from .local import (
    LocalRepository,
    url_to_relpath,
)
from .roots import (
    LocalRoots,
    get_primary_root,
    get_roots,
    resolve_roots,
)
from .walk import (
    list_local_repositories,
    walk_local_repositories,
)
