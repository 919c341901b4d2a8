__all__ = [
    'call_git_addcommit',
    'make_working_copy',
    'rmtree',
]

from .utils import (
    call_git_addcommit,
    make_working_copy,
    rmtree,
)
