# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the catalog, settings and vault layers."""

from __future__ import annotations

from pathlib import Path


class LeyVaultError(Exception):
    """Base class for every error raised by ``leyvault``."""


class CatalogFetchError(LeyVaultError):
    """Raised when a remote version catalog cannot be cached locally."""

    def __init__(self, message: str, *, url: str, path: Path) -> None:
        """Initialise the error with the catalog URL and destination path.

        Args:
            message: Human-readable description of the failure.
            url: Remote location that was being fetched.
            path: Local cache file that was being written.
        """

        super().__init__(message)
        self.url = url
        self.path = path


class NetworkError(CatalogFetchError):
    """Raised when the remote catalog is unreachable or answers with an error."""


class FilesystemError(CatalogFetchError):
    """Raised when the local cache file cannot be created, replaced or written."""


class SettingsError(LeyVaultError):
    """Raised when build settings input is invalid."""


class VaultError(LeyVaultError):
    """Raised when a vault configuration file cannot be loaded or saved."""


class AdapterError(VaultError):
    """Raised when a file adapter cannot parse or render a document."""


class RegistryError(VaultError):
    """Raised when an initializable instance is missing or registered twice."""


__all__ = [
    "AdapterError",
    "CatalogFetchError",
    "FilesystemError",
    "LeyVaultError",
    "NetworkError",
    "RegistryError",
    "SettingsError",
    "VaultError",
]
