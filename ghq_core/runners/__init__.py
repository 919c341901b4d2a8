"""Execution of subprocesses

This module provides the process-execution collaborator used by VCS
backends: :func:`~ghq_core.runners.call_vcs` runs a VCS command line tool,
either silently, or with the standard streams of the current process.
Execution errors are communicated with the
:class:`~ghq_core.runners.CommandError` exception, independent of which
tool failed.

A few Git-specific convenience functions are provided for reading
configuration via ``git config``.

.. currentmodule:: ghq_core.runners
.. autosummary::
   :toctree: generated

   call_vcs
   call_git
   call_git_lines
   iter_subproc
   iter_git_subproc
   CommandError
"""

__all__ = [
    'CommandError',
    'iter_subproc',
    'iter_git_subproc',
    'call_git',
    'call_git_lines',
    'call_vcs',
]


from .git import (
    call_git,
    call_git_lines,
    iter_git_subproc,
)
from .imports import (
    CommandError,
    iter_subproc,
)
from .vcs import call_vcs
