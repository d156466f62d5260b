"""Infrastructure layer: in-process event bus."""

from .messaging import EventType, EventHandler, OccupancyAuditHandler, EventBus

__all__ = ["EventType", "EventHandler", "OccupancyAuditHandler", "EventBus"]
