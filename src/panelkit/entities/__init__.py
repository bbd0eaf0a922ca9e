"""Entity queries backed by schema and configuration."""

from panelkit.entities.service import EntitiesService, EntityDiction, ReferenceField

__all__ = ["EntitiesService", "EntityDiction", "ReferenceField"]
