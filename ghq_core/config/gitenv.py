from __future__ import annotations

from contextlib import contextmanager
from typing import (
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from collections.abc import (
        Collection,
        Generator,
        Hashable,
    )

from datasalad.settings import (
    Setting,
    WritableMultivalueSource,
)

from ghq_core.config.item import ConfigItem
from ghq_core.config.utils import (
    get_gitconfig_items_from_env,
    normalize_gitcfg_key,
    set_gitconfig_items_in_env,
)


class GitEnvironment(WritableMultivalueSource):
    """Git's ``command`` scope, declared in the process environment

    Items are kept in the ``GIT_CONFIG_COUNT`` and ``GIT_CONFIG_KEY/VALUE_<n>``
    variables. Any VCS command started by this package inherits them, so
    Git subprocesses see the same configuration.

    Keys are matched like Git matches them, ``ghq.findVcs`` and
    ``ghq.findvcs`` are the same item. Items are written back with the
    canonical key spelling.

    Nothing is cached, every access reads the environment. Use
    :meth:`overrides` for temporary settings.
    """

    item_type = ConfigItem

    def __str__(self) -> str:
        return self.__class__.__name__

    def _reinit(self):
        """Does nothing"""

    def _load(self) -> None:
        """Does nothing"""

    def __contains__(self, key: Hashable) -> bool:
        return normalize_gitcfg_key(key) in _env_items()

    def _get_keys(self) -> Collection:
        return _env_items().keys()

    def _get_item(self, key: Hashable) -> Setting:
        # the last declaration wins, like with git-config
        return self._getall(key)[-1]

    def _getall(self, key: Hashable) -> tuple[Setting, ...]:
        vals = _env_items()[normalize_gitcfg_key(key)]
        return tuple(self.item_type(v) for v in vals)

    def _set_item(self, key: Hashable, value: Setting) -> None:
        self._setall(key, (value,))

    def _setall(self, key: Hashable, values: tuple[Setting, ...]) -> None:
        items = _env_items()
        items[normalize_gitcfg_key(key)] = tuple(str(v.value) for v in values)
        set_gitconfig_items_in_env(items)

    def _del_item(self, key: Hashable) -> None:
        items = _env_items()
        del items[normalize_gitcfg_key(key)]
        set_gitconfig_items_in_env(items)

    @contextmanager
    def overrides(
        self,
        overrides: dict[Hashable, Setting | tuple[Setting, ...]],
    ) -> Generator[None]:
        """Context manager to temporarily declare configuration items

        A ``tuple`` of settings declares all values of a multi-valued item.
        An override replaces all values of an item, in whatever spelling
        the item was declared before. On exit, the ``GIT_CONFIG_*``
        variables are restored to their state on entry. Changes made to
        this scope inside the context do not persist.
        """
        snapshot = get_gitconfig_items_from_env()
        items = _env_items()
        for k, v in overrides.items():
            vals = v if isinstance(v, tuple) else (v,)
            items[normalize_gitcfg_key(k)] = tuple(str(s.value) for s in vals)
        set_gitconfig_items_in_env(items)
        try:
            yield
        finally:
            set_gitconfig_items_in_env(snapshot)


def _env_items() -> dict[str, tuple[str, ...]]:
    # all values of keys that only differ in spelling are merged
    items: dict[str, tuple[str, ...]] = {}
    for key, val in get_gitconfig_items_from_env().items():
        nkey = normalize_gitcfg_key(key)
        vals = val if isinstance(val, tuple) else (val,)
        items[nkey] = (*items.get(nkey, ()), *vals)
    return items
