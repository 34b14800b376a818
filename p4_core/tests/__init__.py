__all__ = [
    'FakeP4',
    'make_fake_p4',
]

from .utils import (
    FakeP4,
    make_fake_p4,
)
