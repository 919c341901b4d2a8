from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import (
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from collections.abc import (
        Generator,
        Hashable,
        Mapping,
    )

    from datasalad.settings import (
        Setting,
        Source,
    )

from datasalad.settings import (
    Settings,
    UnsetValue,
)

from ghq_core.config.defaults import (
    ImplementationDefaults,
    get_defaults,
)
from ghq_core.config.git import (
    GlobalGitConfig,
    SystemGitConfig,
)
from ghq_core.config.gitenv import GitEnvironment
from ghq_core.config.item import ConfigItem


class ConfigManager(Settings):
    """Query configuration across Git's scopes

    Sources are consulted in this order (highest precedence first):

    - ``git-command``: :class:`GitEnvironment`
    - ``git-global``: :class:`GlobalGitConfig`
    - ``git-system``: :class:`SystemGitConfig`
    - ``defaults``: :class:`ImplementationDefaults`

    A custom ``sources`` mapping replaces the three Git scopes. The
    ``defaults`` are always consulted last.

    The repository-local scope is not a source. Settings of this package
    are about the user's environment, not about any particular repository.
    """

    def __init__(
        self,
        defaults: ImplementationDefaults,
        sources: Mapping[str, Source] | None = None,
    ):
        if sources is None:
            sources = {
                'git-command': GitEnvironment(),
                'git-global': GlobalGitConfig(),
                'git-system': SystemGitConfig(),
            }
        super().__init__({**sources, 'defaults': defaults})
        for s in self.sources.values():
            s.item_type = ConfigItem

    def __str__(self) -> str:
        # only sources that have something to say
        return self._describe(s for s in self.sources.values() if len(s))

    def __repr__(self) -> str:
        return self._describe(self.sources.values())

    def _describe(self, sources) -> str:
        return f'{self.__class__.__name__}({"<<".join(str(s) for s in sources)})'

    @contextmanager
    def overrides(
        self,
        overrides: dict[Hashable, Setting | tuple[Setting, ...]],
    ) -> Generator[ConfigManager]:
        """Temporarily set items in the ``git-command`` scope

        See :meth:`GitEnvironment.overrides`. The items are also visible
        to any Git process started inside the context.
        """
        with self.sources['git-command'].overrides(overrides):
            yield self

    def get_values(self, key: Hashable) -> tuple[str, ...]:
        """Return all values of a (multi-valued) setting as strings

        Only the source with the highest precedence that declares ``key``
        is considered, values of different sources are never merged.
        Within that source, values come in declaration order. A setting
        that is only declared without a value (e.g., in the defaults)
        yields an empty ``tuple``.
        """
        for s in self.sources.values():
            if key not in s:
                continue
            vals = tuple(
                str(v.value)
                for v in s.getall(key)
                if v.pristine_value is not UnsetValue
            )
            if vals:
                return vals
        return ()


__the_manager: ConfigManager | None = None
__the_manager_lock = threading.Lock()


def get_manager() -> ConfigManager:
    """Return the process-unique :class:`ConfigManager`"""
    global __the_manager  # noqa: PLW0603
    with __the_manager_lock:
        if __the_manager is None:
            __the_manager = ConfigManager(get_defaults())
    return __the_manager
