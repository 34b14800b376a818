from __future__ import annotations

from datasalad.settings import Setting


class ConfigItem(Setting):
    """Individual configuration setting

    All sources of a :class:`~p4_core.config.ConfigManager` report their
    values wrapped in this type.
    """
