"""
Core Application - Infrastructure & Base Classes

Generic base classes shared by the domain apps (no chat-specific logic):

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Services (import from core.services):
    - BaseService: Base class for service layer (logging, atomic, clock)
    - ServiceResult: Standard result wrapper for success/failure handling

Views (import from core.views):
    - health_check: Database and cache connectivity probe

Note:
    Django models are NOT imported here to avoid AppRegistryNotReady
    errors. Import them directly from their modules.
"""

from .services import BaseService, ServiceResult

__all__ = [
    "BaseService",
    "ServiceResult",
]
