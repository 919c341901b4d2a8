"""Central place for runner components provided by ``datasalad``"""

__all__ = [
    'CommandError',
    'iter_subproc',
]

from datasalad.runners import (
    CommandError,
    iter_subproc,
)
