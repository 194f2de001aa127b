from .entities import Entity, EntityCategory  # noqa
from .registry import EntityRepository, InMemoryEntityRegistry, load_entity_registry  # noqa

__all__ = [
    "Entity",
    "EntityCategory",
    "EntityRepository",
    "InMemoryEntityRegistry",
    "load_entity_registry",
]
