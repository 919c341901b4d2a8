from __future__ import annotations

import logging
import os
import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

from ghq_core.runners.imports import CommandError

lgr = logging.getLogger('ghq.runners')


def _run(
    cmd: list[str],
    *,
    capture_output: bool = False,
    cwd: Path | None = None,
    check: bool = False,
    text: bool | None = None,
    inputs: str | bytes | None = None,
    force_c_locale: bool = False,
) -> subprocess.CompletedProcess:
    """Wrapper around ``subprocess.run`` for calling any VCS command

    ``cmd`` is the full command, including the executable.

    If ``force_c_locale`` is ``True`` the environment of the process
    is altered to ensure output according to the C locale.

    A ``subprocess.CalledProcessError`` is normalized to a
    :class:`CommandError`. Errors from failing to start the process at all
    (e.g., ``FileNotFoundError`` for a missing executable or ``cwd``) are
    not caught.
    """
    env = None
    if force_c_locale:
        env = dict(os.environ, LC_ALL='C')

    lgr.debug('Run %r (cwd=%s)', cmd, cwd)
    try:
        return subprocess.run(
            cmd,
            capture_output=capture_output,
            cwd=cwd,
            check=check,
            text=text,
            input=inputs,
            env=env,
        )
    except subprocess.CalledProcessError as e:
        raise CommandError(
            cmd=cmd,
            returncode=e.returncode,
            stdout=e.stdout,
            stderr=e.stderr,
            cwd=cwd,
        ) from e


def call_vcs(
    cmd: list[str],
    *,
    cwd: Path | None = None,
    silent: bool = False,
) -> None:
    """Run a VCS command, raises on non-zero exit

    ``cmd`` is the full command, e.g. ``['hg', 'pull', '--update']``.

    If ``cwd`` is not None, the command is executed in this directory.

    With ``silent=True`` all process output is captured and discarded,
    unless the command fails, in which case it is available from the raised
    :class:`CommandError`. Otherwise, the process writes to the standard
    streams of the current process.

    No timeout is imposed, the call blocks until the command exits.
    """
    _run(
        cmd,
        capture_output=silent,
        cwd=cwd,
        check=True,
    )
