"""Ports implemented by infrastructure."""

from eduhub.application.interfaces.services import ICacheService, IFileStorage, IOwnershipLookup

__all__ = ["ICacheService", "IFileStorage", "IOwnershipLookup"]
