"""Locate, model, and discover local clones of remote repositories

Repositories are kept under one or more root directories, laid out as
``<root>/<host>/<owner>/<name>``. This package answers three questions:

- which directories under the roots are VCS working copies, and of which
  kind (:mod:`ghq_core.repo`, :mod:`ghq_core.vcs`)
- what repository a full filesystem path belongs to
  (:meth:`~ghq_core.repo.LocalRepository.from_full_path`)
- where a remote URL is, or would be, cloned to
  (:meth:`~ghq_core.repo.LocalRepository.from_url`)

Clone and update operations are delegated to the respective VCS command
line tools (see :mod:`ghq_core.vcs`).
"""

__version__ = '0.1.0'
