import pytest

from ..defaults import (
    get_defaults,
    nonnegative_float,
    nonnegative_int,
    optional_nonnegative_float,
)


def test_implementationdefaults():
    df = get_defaults()
    assert str(df) == 'ImplementationDefaults'
    assert df['p4core.executable'].value == 'p4'
    assert df['p4core.retries'].value == 2
    assert df['p4core.retry-delay'].value == 0.5
    assert 'P4PORT' in df


def test_nonnegative():
    assert nonnegative_int('3') == 3
    assert nonnegative_int(0) == 0
    assert nonnegative_float('0.25') == 0.25
    with pytest.raises(ValueError, match='not a non-negative integer'):
        nonnegative_int('-1')
    with pytest.raises(ValueError, match='not a non-negative number'):
        nonnegative_float(-0.1)
    with pytest.raises(ValueError, match='invalid literal'):
        nonnegative_int('many')
    assert optional_nonnegative_float(None) is None
    assert optional_nonnegative_float('30') == 30.0
    with pytest.raises(ValueError, match='not a non-negative number'):
        optional_nonnegative_float('-1')
