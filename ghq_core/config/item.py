from __future__ import annotations

from datasalad.settings import Setting


class ConfigItem(Setting):
    """Configuration setting read from (or posted to) a git-config scope

    This is a plain :class:`~datasalad.settings.Setting`. A dedicated type
    makes it possible for all sources of a :class:`ConfigManager` to hand
    out items of the same type, including for plain default values.
    """
