"""Open a new release in an Ubuntu kernel packaging tree."""

from knr.services.newrelease.errors import OpenError
from knr.services.newrelease.model import (
    AbiDirectory,
    DerivativeConfig,
    OpenSummary,
    PackagingTree,
)
from knr.services.newrelease.service import ReleaseOpener

__all__ = [
    "AbiDirectory",
    "DerivativeConfig",
    "OpenError",
    "OpenSummary",
    "PackagingTree",
    "ReleaseOpener",
]
