"""Domain services."""

from neurochat.domain.services.protocols import MessagingService, ModelGateway

__all__ = ["MessagingService", "ModelGateway"]
