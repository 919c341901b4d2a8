from __future__ import annotations

from os import environ
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import (
        Hashable,
        Mapping,
    )


def get_gitconfig_items_from_env() -> dict[str, str | tuple[str, ...]]:
    """Read git-config items from ``GIT_CONFIG_COUNT/KEY_<n>/VALUE_<n>``

    Keys are reported verbatim. A key that is declared more than once is
    reported with a ``tuple`` of all its values, in declaration order.
    """
    items: dict[str, str | tuple[str, ...]] = {}
    count = int(environ.get('GIT_CONFIG_COUNT', '0'))
    for i in range(count):
        key = environ.get(f'GIT_CONFIG_KEY_{i}')
        if key is None:
            # git itself would refuse to run with such an environment
            continue
        val = environ.get(f'GIT_CONFIG_VALUE_{i}', '')
        present = items.get(key)
        if present is None:
            items[key] = val
        elif isinstance(present, tuple):
            items[key] = (*present, val)
        else:
            items[key] = (present, val)
    return items


def set_gitconfig_items_in_env(items: Mapping[str, str | tuple[str, ...]]) -> None:
    """Replace all git-config items in the process environment

    Any previously declared ``GIT_CONFIG_KEY/VALUE`` pairs are removed. With
    an empty mapping, ``GIT_CONFIG_COUNT`` is removed too.
    """
    _clean_env()
    count = 0
    for key, value in items.items():
        for val in value if isinstance(value, tuple) else (value,):
            environ[f'GIT_CONFIG_KEY_{count}'] = key
            environ[f'GIT_CONFIG_VALUE_{count}'] = val
            count += 1
    if count:
        environ['GIT_CONFIG_COUNT'] = str(count)


def _clean_env() -> None:
    count = int(environ.pop('GIT_CONFIG_COUNT', '0'))
    for i in range(count):
        environ.pop(f'GIT_CONFIG_KEY_{i}', None)
        environ.pop(f'GIT_CONFIG_VALUE_{i}', None)


def normalize_gitcfg_key(key: Hashable) -> str:
    """Return the canonical spelling of a git-config key

    Section and variable name are case-insensitive and come out in lower
    case. Subsections are case-sensitive and are kept as-is.
    """
    section, _, rest = str(key).partition('.')
    if not rest:
        return section.lower()
    subsection, dot, name = rest.rpartition('.')
    return f'{section.lower()}.{subsection}{dot}{name.lower()}'
