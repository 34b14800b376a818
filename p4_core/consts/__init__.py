"""Assorted common constants"""

__all__ = [
    'DEFAULT_P4_EXECUTABLE',
    'P4_ENV_VARS',
    'P4CORE_ENV_PREFIX',
    'P4CORE_CONFIG_PREFIX',
]

DEFAULT_P4_EXECUTABLE = 'p4'
"""Name of the Perforce client binary, looked up in ``PATH``"""

P4_ENV_VARS = (
    'P4PORT',
    'P4USER',
    'P4PASSWD',
    'P4CLIENT',
    'P4CHARSET',
)
"""Environment variables of the Perforce client that define a connection"""

P4CORE_ENV_PREFIX = 'P4CORE_'
"""Prefix of environment variables that configure this package"""

P4CORE_CONFIG_PREFIX = 'p4core.'
"""Prefix of the configuration keys of this package"""
