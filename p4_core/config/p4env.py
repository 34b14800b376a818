from __future__ import annotations

import os
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
    UnsetValue,
    WritableMultivalueSource,
)

from p4_core.config.item import ConfigItem
from p4_core.consts import (
    P4CORE_CONFIG_PREFIX,
    P4CORE_ENV_PREFIX,
)


def key2envvar(key: str) -> str:
    """Map a configuration key to the name of an environment variable

    ``p4core.<name>`` keys map to ``P4CORE_<NAME>`` variables (with ``-``
    replaced by ``_``). Any other key is taken as a variable name verbatim.
    """
    if key.startswith(P4CORE_CONFIG_PREFIX):
        name = key[len(P4CORE_CONFIG_PREFIX) :]
        return f'{P4CORE_ENV_PREFIX}{name.upper().replace("-", "_")}'
    return key


def envvar2key(var: str) -> str | None:
    """Map an environment variable name to a configuration key

    Returns ``None`` for variables that are not ``P4*`` variables.
    """
    if var.startswith(P4CORE_ENV_PREFIX):
        name = var[len(P4CORE_ENV_PREFIX) :]
        return f'{P4CORE_CONFIG_PREFIX}{name.lower().replace("_", "-")}'
    if var.startswith('P4'):
        return var
    return None


class P4Environment(WritableMultivalueSource):
    """Source for settings in the process environment

    The Perforce client reads its connection settings (``P4PORT``,
    ``P4USER``, ``P4CLIENT``, etc.) from environment variables. These are
    reported under their variable name. Settings of this package
    (``p4core.<name>``) can be given as ``P4CORE_<NAME>`` variables.

    Environment variables are single-valued. Setting multiple values for a
    key stores the last one.

    This class is intentionally stateless, all accessors inspect the
    process environment directly. Any modification directly affects
    all ``p4`` child processes, too. The method :meth:`overrides`
    provides a context manager for setting temporary configuration.
    """

    item_type = ConfigItem

    def __str__(self) -> str:
        return self.__class__.__name__

    def _reinit(self):
        """Does nothing"""

    def _load(self) -> None:
        """Does nothing"""

    def _get_envvar(self, key: Hashable) -> str:
        # only keys that map back onto themselves are reported by this source
        var = key2envvar(str(key))
        if envvar2key(var) != key:
            raise KeyError(key)
        return var

    def _get_item(self, key: Hashable) -> Setting:
        return self.item_type(os.environ[self._get_envvar(key)])

    def _set_item(self, key: Hashable, value: Setting) -> None:
        os.environ[self._get_envvar(key)] = str(value.value)

    def _del_item(self, key: Hashable) -> None:
        del os.environ[self._get_envvar(key)]

    def _get_keys(self) -> Collection:
        return {k for k in (envvar2key(v) for v in os.environ) if k is not None}

    def _getall(
        self,
        key: Hashable,
    ) -> tuple[Setting, ...]:
        return (self._get_item(key),)

    def _setall(self, key: Hashable, values: tuple[Setting, ...]) -> None:
        self._set_item(key, values[-1])

    @contextmanager
    def overrides(
        self,
        overrides: dict[Hashable, Setting],
    ) -> Generator[None]:
        """Context manager to temporarily set configuration overrides"""
        restore: dict[Hashable, Setting] = {}

        for k, v in overrides.items():
            restore[k] = self.getall(k, self.item_type(UnsetValue))[-1]
            self[k] = v
        try:
            yield
        finally:
            for k, val in restore.items():
                if val.pristine_value is UnsetValue:
                    del self[k]
                else:
                    self[k] = val
