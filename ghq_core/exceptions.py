"""Exception types shared across the package"""

from __future__ import annotations

from pathlib import Path


class NoLocalRepositoryError(ValueError):
    """Raised when a path is not located under any configured root"""

    def __init__(self, path: Path | str):
        super().__init__(f'no local repository found for: {path}')
        self.path = path


class UnsupportedVCSOperationError(NotImplementedError):
    """Raised by backends for operations they do not implement at all

    This is a permanent capability gap of a backend, retrying the same
    operation will fail the same way.
    """

    def __init__(self, vcs: str, operation: str):
        super().__init__(f'{vcs} {operation} is not supported')
        self.vcs = vcs
        self.operation = operation
