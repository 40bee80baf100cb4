"""Base class for the data containers attached to entities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar


class Component(ABC):
    """A piece of data owned by an entity.

    Each concrete component type declares a unique ``ID`` string, which
    scene files use to name the component, and reads its own settings in
    ``deserialize``. The owning entity sets ``owner`` when the component
    is attached.
    """

    ID: ClassVar[str] = "Component"
    owner: Any = None

    @abstractmethod
    def deserialize(self, data: Any) -> None:
        """Read the component's settings from a JSON-like object."""