from __future__ import annotations

import logging
import re
from abc import abstractmethod
from os import name as os_name
from pathlib import Path
from typing import (
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from collections.abc import (
        Generator,
        Hashable,
        Iterable,
    )

    from datasalad.settings import Setting

from datasalad.itertools import (
    decode_bytes,
    itemize,
)
from datasalad.settings import CachingSource

from ghq_core.config.item import ConfigItem
from ghq_core.config.utils import normalize_gitcfg_key
from ghq_core.runners import (
    CommandError,
    call_git,
    call_git_lines,
    iter_git_subproc,
)

lgr = logging.getLogger('ghq.config')


class GitConfig(CachingSource):
    """Base class for sources backed by a single ``git config`` scope

    Subclasses only declare the ``git config`` invocation of their scope
    (:meth:`_get_git_config_cmd`). On load, the entire scope is dumped once
    and cached. Modifications are written to the scope's file and to the
    cache.

    Keys are matched the way Git matches them: section and variable name
    are case-insensitive, subsections are case-sensitive.
    """

    # keep git-config from reporting the local scope of a repository
    # that happens to be at the CWD
    _nul = 'b:\\nul' if os_name == 'nt' else '/dev/null'

    def __str__(self) -> str:
        name = self.__class__.__name__
        if not self._sources:
            return name
        return f'{name}[{",".join(sorted(str(s) for s in self._sources))}]'

    @abstractmethod
    def _get_git_config_cmd(self) -> list[str]:
        """Return the ``git`` arguments selecting the scope"""

    def _reinit(self) -> None:
        super()._reinit()
        # files the loaded items came from
        self._sources: set[Path] = set()

    def _load(self) -> None:
        cwd = Path.cwd()
        values: dict[str, list[str]] = {}
        origins: set[str] = set()
        try:
            with iter_git_subproc(
                [*self._get_git_config_cmd(), '--show-origin', '--list', '-z'],
                inputs=None,
                cwd=cwd,
            ) as dump:
                records = itemize(decode_bytes(dump), sep='\0', keep_ends=False)
                for origin, key, value in _iter_gitcfg_items(records):
                    origins.add(origin)
                    values.setdefault(key, []).append(value)
        except CommandError as e:
            self._raise_unless_missing(e)

        self._sources = {
            cwd / o[len('file:') :] for o in origins if o.startswith('file:')
        }
        for key, vals in values.items():
            self.setall(key, tuple(ConfigItem(v) for v in vals))

    def _raise_unless_missing(self, error: CommandError) -> None:
        """Re-raise a failed load, unless the scope has no file at all

        git-config only says why it failed on stderr, which the streaming
        load does not capture. The listing is repeated to find out.
        """
        try:
            call_git_lines(
                [*self._get_git_config_cmd(), '--list'],
                force_c_locale=True,
            )
        except CommandError as e:
            if _missing_file_msg not in (e.stderr or ''):
                raise
            # an absent scope is an empty scope
            lgr.debug('No configuration file for %s', self)
            return
        raise error

    def __contains__(self, key: Hashable) -> bool:
        return normalize_gitcfg_key(key) in self.keys()

    def _get_item(self, key: Hashable) -> Setting:
        return super()._get_item(normalize_gitcfg_key(key))

    def _getall(self, key: Hashable) -> tuple[Setting, ...]:
        return super()._getall(normalize_gitcfg_key(key))

    def _setall(self, key: Hashable, values: tuple[Setting, ...]) -> None:
        # cache only, used for loading
        super()._setall(normalize_gitcfg_key(key), values)

    def _set_item(self, key: Hashable, value: Setting) -> None:
        key = normalize_gitcfg_key(key)
        self._call_git_config('--replace-all', key, str(value.value))
        super()._set_item(key, value)

    def _add(self, key: Hashable, value: Setting) -> None:
        key = normalize_gitcfg_key(key)
        self._call_git_config('--add', key, str(value.value))
        super()._add(key, value)

    def _del_item(self, key: Hashable) -> None:
        key = normalize_gitcfg_key(key)
        self._call_git_config('--unset-all', key)
        super()._del_item(key)

    def _call_git_config(self, *args: str) -> None:
        call_git([*self._get_git_config_cmd(), *args], capture_output=True)


class SystemGitConfig(GitConfig):
    """Git's ``system`` scope"""

    def _get_git_config_cmd(self) -> list[str]:
        return [f'--git-dir={self._nul}', 'config', '--system']


class GlobalGitConfig(GitConfig):
    """Git's ``global`` scope, where ``ghq.root`` is usually declared"""

    def _get_git_config_cmd(self) -> list[str]:
        return [f'--git-dir={self._nul}', 'config', '--global']


# C-locale git-config error for an absent scope file
_missing_file_msg = 'No such file or directory'

# the origin of the next item in a `--show-origin -z` dump
_origin_prefixes = ('file:', 'blob:', 'command line:', 'standard input:')

# <section>[.<subsection>].<name>, and the value on the following line(s).
# there is no value line for a key-only item
_record_regex = re.compile(
    r'(?P<key>[a-zA-Z0-9-.]+\.[^\0\n]+)(?:\n(?P<value>.*))?\Z',
    flags=re.DOTALL,
)


def _iter_gitcfg_items(
    records: Iterable[str],
) -> Generator[tuple[str, str, str]]:
    """Yield ``(origin, key, value)`` for the records of a git-config dump"""
    origin = ''
    for record in records:
        if record.startswith(_origin_prefixes):
            origin = record
            continue
        key, value = _split_record(record)
        if key is None:
            lgr.debug('Non-standard git-config output, ignoring: %r', record)
            continue
        # a key without a value is the short-hand for boolean true
        yield origin, key, 'true' if value is None else value


def _split_record(record: str) -> tuple[str | None, str | None]:
    match = _record_regex.match(record)
    if match is None:
        return None, None
    return match.group('key'), match.group('value')

