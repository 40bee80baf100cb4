"""Entity-component scene model: transforms, cameras, lights, asset registries, scene loading and a frame-driven state machine."""

__version__ = "0.1.0"