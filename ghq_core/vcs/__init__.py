"""VCS backends and working copy detection

Each supported kind of version control system is represented by a
:class:`VCSBackend` that knows how to clone a remote repository, how
to update an existing working copy, and which marker paths identify a
working copy of its kind. Backends are stateless, and there is exactly one
instance per kind. :data:`VCS_REGISTRY` maps kind names and their aliases
(e.g., ``github`` for ``git``) to these instances.

======== ================ ======================== ================
kind     aliases          markers                  shallow clone
======== ================ ======================== ================
git      github           ``.git``                 ``--depth 1``
svn      subversion       ``.svn``                 ``--depth 1``
git-svn                   ``.git/svn``             ignored
hg       mercurial        ``.hg``                  ignored
darcs                     ``_darcs``               ``--lazy``
fossil                    ``.fslckout``,           ignored
                          ``_FOSSIL_``
bzr      bazaar           ``.bzr``                 ignored
cvs                       ``CVS/Repository``       n/a
======== ================ ======================== ================

The CVS backend only supports detection, clone and update raise
:class:`~ghq_core.exceptions.UnsupportedVCSOperationError`.

A :class:`VCSBackendDetector` determines the backend of a directory.

.. currentmodule:: ghq_core.vcs
.. autosummary::
   :toctree: generated

   VCSBackend
   VCSBackendDetector
   VCS_REGISTRY
   get_backend
   get_detector
"""

__all__ = [
    'VCSBackend',
    'VCSBackendDetector',
    'VCS_REGISTRY',
    'get_backend',
    'get_detector',
]

from .backends import (
    VCS_REGISTRY,
    VCSBackend,
    get_backend,
)
from .detect import (
    VCSBackendDetector,
    get_detector,
)
