"""Fixture setup"""

__all__ = [
    'fake_p4',
    'verify_pristine_p4_environment',
]


from p4_core.tests.fixtures import (
    # function-scope factory for fake `p4` executables
    fake_p4,
    # verify no test leave modified P4* environment variables behind
    verify_pristine_p4_environment,
)
