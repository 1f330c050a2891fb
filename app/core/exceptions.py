# app/core/exceptions.py

from typing import Optional


class PermissionFetchError(Exception):
    """The permissions feed could not be read (network, non-2xx, bad payload)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message
