from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

from ghq_core.runners.imports import iter_subproc
from ghq_core.runners.vcs import _run

git_executable = 'git'


def _git_cmd(args: list[str]) -> list[str]:
    return [git_executable, *args]


def call_git(
    args: list[str],
    *,
    cwd: Path | None = None,
    capture_output: bool = False,
    force_c_locale: bool = False,
) -> None:
    """Run ``git`` with ``args``, raises on non-zero exit

    Output goes to the standard streams of the current process, unless
    ``capture_output`` is set. Only then does a raised ``CommandError``
    carry the error message of Git.
    """
    _run(
        _git_cmd(args),
        cwd=cwd,
        capture_output=capture_output,
        check=True,
        force_c_locale=force_c_locale,
    )


def call_git_lines(
    args: list[str],
    *,
    cwd: Path | None = None,
    inputs: str | None = None,
    force_c_locale: bool = False,
) -> list[str]:
    """Run ``git`` with ``args`` and return its output lines

    Meant for commands with short output. ``inputs`` is passed to the
    process' stdin.

    Raises
    ------
    CommandError
      If Git exits non-zero.
    """
    return _run(
        _git_cmd(args),
        cwd=cwd,
        capture_output=True,
        check=True,
        text=True,
        inputs=inputs,
        force_c_locale=force_c_locale,
    ).stdout.splitlines()


def iter_git_subproc(args: list[str], **kwargs):
    """Like ``iter_subproc()``, with ``args`` given to ``git``"""
    return iter_subproc(_git_cmd(args), **kwargs)
