from __future__ import annotations

from datasalad.settings import (
    Defaults,
    UnsetValue,
)

from ghq_core.config.item import ConfigItem
from ghq_core.consts import (
    GHQ_FINDVCS_CFGKEY,
    GHQ_ROOT_CFGKEY,
)


class ImplementationDefaults(Defaults):
    """In-memory source declaring every setting queried by this package

    Settings without a static default are declared with an unset value.
    """

    def __str__(self):
        return 'ImplementationDefaults'


__the_defaults: ImplementationDefaults | None = None


def get_defaults() -> ImplementationDefaults:
    """Return the process-unique :class:`ImplementationDefaults`"""
    global __the_defaults  # noqa: PLW0603
    if __the_defaults is None:
        __the_defaults = ImplementationDefaults()
        register_defaults_ghqcfg(__the_defaults)
    return __the_defaults


def register_defaults_ghqcfg(defaults: ImplementationDefaults) -> None:
    # the default root is derived from the home directory at the time
    # roots are resolved, and all VCS kinds are detected unless limited
    for key in (GHQ_ROOT_CFGKEY, GHQ_FINDVCS_CFGKEY):
        defaults[key] = ConfigItem(UnsetValue)
