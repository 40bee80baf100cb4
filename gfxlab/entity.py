"""Entities, the components they own, and the world that holds them."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

import numpy as np

from gfxlab.component import Component
from gfxlab.components import deserialize_component
from gfxlab.transform import Transform

_C = TypeVar("_C", bound=Component)


class Entity:
    """An object in a world, defined by its transform and its components.

    The transform is relative to ``parent``; an entity without a parent
    is a root of the scene.
    """

    def __init__(self, world: World | None) -> None:
        self.world = world
        self.name = ""
        self.parent: Entity | None = None
        self.local_transform = Transform()
        self._components: list[Component] = []

    def __repr__(self) -> str:
        return f"Entity(name={self.name!r}, components={len(self._components)})"

    @property
    def components(self) -> tuple[Component, ...]:
        """The components owned by this entity, in the order they were added."""
        return tuple(self._components)

    def get_local_to_world_matrix(self) -> np.ndarray:
        """Matrix taking this entity's local space to world space, through all its ancestors."""
        matrix = self.local_transform.to_mat4()
        if self.parent is not None:
            matrix = self.parent.get_local_to_world_matrix() @ matrix
        return matrix

    def deserialize(self, data: Any) -> None:
        """Read the name, the transform and the ``components`` list; other data is ignored."""
        if not isinstance(data, Mapping):
            return
        self.name = data.get("name", self.name)
        self.local_transform.deserialize(data)
        components = data.get("components")
        if isinstance(components, Sequence) and not isinstance(components, (str, bytes)):
            for component_data in components:
                deserialize_component(component_data, self)

    def add_component(self, component_type: type[_C]) -> _C:
        """Create a component of the given type, attach it to this entity and return it."""
        if not (isinstance(component_type, type) and issubclass(component_type, Component)):
            raise TypeError(f"{component_type!r} is not a component type")
        component = component_type()
        component.owner = self
        self._components.append(component)
        return component

    def get_component(self, component_type: type[_C]) -> _C | None:
        """Return the first component that is an instance of ``component_type``, or None."""
        return next((c for c in self._components if isinstance(c, component_type)), None)

    def get_component_at(
        self, index: int, component_type: type[_C] = Component  # type: ignore[assignment]
    ) -> _C | None:
        """Return the component at ``index`` if it is a ``component_type``, otherwise None."""
        if not 0 <= index < len(self._components):
            return None
        component = self._components[index]
        return component if isinstance(component, component_type) else None

    def delete_component(self, component_type: type[Component]) -> None:
        """Remove the first component that is an instance of ``component_type``, if any."""
        for position, component in enumerate(self._components):
            if isinstance(component, component_type):
                self._detach(position)
                return

    def delete_component_at(self, index: int) -> None:
        """Remove the component at ``index``; an index out of range does nothing."""
        if 0 <= index < len(self._components):
            self._detach(index)

    def remove_component(self, component: Component) -> None:
        """Remove the given component if this entity owns it."""
        for position, owned in enumerate(self._components):
            if owned is component:
                self._detach(position)
                return

    def _detach(self, position: int) -> None:
        component = self._components.pop(position)
        component.owner = None

    def _destroy(self) -> None:
        for component in self._components:
            component.owner = None
        self._components.clear()


class World:
    """A set of entities; removals are deferred until ``delete_marked_entities``."""

    def __init__(self) -> None:
        self._entities: set[Entity] = set()
        self._marked_for_removal: set[Entity] = set()

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities

    def deserialize(self, data: Any, parent: Entity | None = None) -> None:
        """Add an entity for each object in the JSON array ``data``, children recursively.

        The new entities get ``parent`` as their parent; anything but an
        array is ignored.
        """
        if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
            return
        for entity_data in data:
            entity = self.add()
            entity.parent = parent
            entity.deserialize(entity_data)
            if isinstance(entity_data, Mapping) and "children" in entity_data:
                self.deserialize(entity_data["children"], entity)

    def add(self) -> Entity:
        """Create a new entity owned by this world and return it."""
        entity = Entity(self)
        self._entities.add(entity)
        return entity

    def entities(self) -> frozenset[Entity]:
        """The entities currently in this world."""
        return frozenset(self._entities)

    def mark_for_removal(self, entity: Entity) -> None:
        """Schedule an entity of this world for removal; other entities are ignored."""
        if entity in self._entities:
            self._marked_for_removal.add(entity)

    def delete_marked_entities(self) -> None:
        """Remove and destroy every entity marked for removal."""
        for entity in self._marked_for_removal:
            if entity in self._entities:
                self._entities.discard(entity)
                entity._destroy()
        self._marked_for_removal.clear()

    def clear(self) -> None:
        """Remove and destroy every entity."""
        for entity in self._entities:
            entity._destroy()
        self._entities.clear()
        self._marked_for_removal.clear()