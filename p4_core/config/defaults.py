from __future__ import annotations

from datasalad.settings import (
    Defaults,
)
from datasalad.settings import (
    UnsetValue as Unset,
)

from p4_core.config.item import ConfigItem as Item
from p4_core.consts import (
    DEFAULT_P4_EXECUTABLE,
    P4_ENV_VARS,
)


class ImplementationDefaults(Defaults):
    """Source for registering implementation defaults of settings

    This is a in-memory only source that is populated by any
    implementations that want to expose their configuration
    options."""

    def __str__(self):
        return 'ImplementationDefaults'


__the_defaults: ImplementationDefaults | None = None


def get_defaults() -> ImplementationDefaults:
    """Return a a process-unique `ImplementationDefault` instance

    This function can be used obtain a :class:`ImplementationDefaults`
    instance for setting and/or getting defaults for settings.
    """
    global __the_defaults  # noqa: PLW0603
    if __the_defaults is None:
        __the_defaults = ImplementationDefaults()
        register_defaults_p4(__the_defaults)
    return __the_defaults


def register_defaults_p4(defaults: ImplementationDefaults) -> None:
    for k, v in _p4cfg.items():
        defaults[k] = v


def nonnegative_int(val) -> int:
    ival = int(val)
    if ival < 0:
        msg = f'{val!r} is not a non-negative integer'
        raise ValueError(msg)
    return ival


def nonnegative_float(val) -> float:
    fval = float(val)
    if fval < 0:
        msg = f'{val!r} is not a non-negative number'
        raise ValueError(msg)
    return fval


def optional_nonnegative_float(val) -> float | None:
    return None if val is None else nonnegative_float(val)


_p4cfg = {
    'p4core.executable': Item(DEFAULT_P4_EXECUTABLE),
    'p4core.retries': Item(2, coercer=nonnegative_int),
    'p4core.retry-delay': Item(0.5, coercer=nonnegative_float),
    'p4core.retry-backoff': Item(2.0, coercer=float),
    'p4core.retry-max-delay': Item(10.0, coercer=nonnegative_float),
    'p4core.timeout': Item(Unset, coercer=optional_nonnegative_float),
    # connection settings of the client itself, no defaults
    **{var: Item(Unset) for var in P4_ENV_VARS},
}
