"""Application core: window settings, states and the per-frame state machine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from gfxlab.diagnostics import ScreenshotQueue

_RELEASE = 0


@dataclass(frozen=True)
class WindowConfiguration:
    """Title, size in pixels (width, height) and fullscreen flag of the window."""

    title: str
    size: tuple[int, int]
    is_fullscreen: bool


class State:
    """Base class for the scenes an application can run.

    The application calls the ``on_*`` hooks. By default they keep track of
    whether the state is active, the time it has run and the input it has
    seen; subclasses override them to do their own work.
    ``application`` is the application that registered the state.
    """

    def __init__(self) -> None:
        self.application: Application | None = None
        self.active = False
        self.elapsed = 0.0
        self.gui_frames = 0
        self.pressed_keys: set[int] = set()
        self.pressed_buttons: set[int] = set()
        self.cursor: tuple[float, float] = (0.0, 0.0)
        self.cursor_inside = False
        self.scroll: tuple[float, float] = (0.0, 0.0)

    def on_initialize(self) -> None:
        """Called when the state becomes the current one."""
        self.active = True
        self.elapsed = 0.0
        self.gui_frames = 0

    def on_immediate_gui(self) -> None:
        """Called every frame to build the immediate-mode interface."""
        self.gui_frames += 1

    def on_draw(self, delta_time: float) -> None:
        """Called every frame with the time since the previous frame."""
        self.elapsed += delta_time

    def on_destroy(self) -> None:
        """Called when the state stops being the current one."""
        self.active = False
        self.pressed_keys.clear()
        self.pressed_buttons.clear()

    def on_key_event(self, key: int, scancode: int, action: int, mods: int) -> None:
        """Called for each key press, repeat or release."""
        if action == _RELEASE:
            self.pressed_keys.discard(key)
        else:
            self.pressed_keys.add(key)

    def on_cursor_move_event(self, x: float, y: float) -> None:
        """Called when the cursor moves."""
        self.cursor = (x, y)

    def on_cursor_enter_event(self, entered: int) -> None:
        """Called when the cursor enters or leaves the window."""
        self.cursor_inside = bool(entered)

    def on_mouse_button_event(self, button: int, action: int, mods: int) -> None:
        """Called for each mouse button press or release."""
        if action == _RELEASE:
            self.pressed_buttons.discard(button)
        else:
            self.pressed_buttons.add(button)

    def on_scroll_event(self, x_offset: float, y_offset: float) -> None:
        """Called when the mouse wheel scrolls."""
        self.scroll = (self.scroll[0] + x_offset, self.scroll[1] + y_offset)


def _require(value: Any, kind: type, what: str) -> Any:
    if kind is int and isinstance(value, bool):
        raise TypeError(f"{what} must be an integer, got {value!r}")
    if not isinstance(value, kind):
        raise TypeError(f"{what} must be of type {kind.__name__}, got {value!r}")
    return value


class Application:
    """Runs one registered state at a time, driven frame by frame.

    A host loop calls ``start`` once, then ``frame`` for every frame until
    ``should_close`` is set, then ``stop``. Input events are forwarded to
    the current state. State changes requested with ``change_state`` take
    effect at the end of the frame.
    """

    def __init__(self, config: Mapping[str, Any]) -> None:
        if not isinstance(config, Mapping):
            raise TypeError("the application configuration must be an object")
        self.config = config
        self.states: dict[str, State] = {}
        self.current_state: State | None = None
        self._next_state: State | None = None
        self.should_close = False
        self.current_frame = 0
        self._running = False
        self._screenshots = ScreenshotQueue(None)

    def register_state(self, name: str, state_type: type[State]) -> State:
        """Create a state of ``state_type`` under ``name``, replacing any state of that name."""
        if not (isinstance(state_type, type) and issubclass(state_type, State)):
            raise TypeError(f"{state_type!r} must derive from State")
        state = state_type()
        state.application = self
        self.states[name] = state
        return state

    def change_state(self, name: str) -> None:
        """Ask to switch to the named state at the end of the frame; unknown names are ignored."""
        state = self.states.get(name)
        if state is not None:
            self._next_state = state

    def window_configuration(self) -> WindowConfiguration:
        """Read the ``window`` section of the configuration."""
        window = _require(self.config["window"], Mapping, "window")
        title = _require(window["title"], str, "window title")
        size = _require(window["size"], Mapping, "window size")
        width = _require(size["width"], int, "window width")
        height = _require(size["height"], int, "window height")
        fullscreen = _require(window["fullscreen"], bool, "window fullscreen")
        return WindowConfiguration(title, (width, height), fullscreen)

    def start(self) -> None:
        """Schedule the configured screenshots and initialise the first state."""
        if self._running:
            raise RuntimeError("the application is already running")
        self._screenshots = ScreenshotQueue(self.config.get("screenshots"))
        self.current_frame = 0
        self.should_close = False
        if self._next_state is not None:
            self.current_state = self._next_state
            self._next_state = None
        if self.current_state is not None:
            self.current_state.on_initialize()
        self._running = True

    def frame(self, delta_time: float) -> list[str]:
        """Run one frame and return the screenshot paths requested for it."""
        if not self._running:
            raise RuntimeError("the application has not been started")
        if self.current_state is not None:
            self.current_state.on_immediate_gui()
            self.current_state.on_draw(delta_time)
        screenshots = self._screenshots.due(self.current_frame)
        while self._next_state is not None:
            if self.current_state is not None:
                self.current_state.on_destroy()
            self.current_state = self._next_state
            self._next_state = None
            self.current_state.on_initialize()
        self.current_frame += 1
        return screenshots

    def stop(self) -> None:
        """Let the current state clean up."""
        if not self._running:
            raise RuntimeError("the application has not been started")
        if self.current_state is not None:
            self.current_state.on_destroy()
        self._running = False

    def close(self) -> None:
        """Ask the host loop to end."""
        self.should_close = True

    def key_event(self, key: int, scancode: int, action: int, mods: int) -> None:
        if self.current_state is not None:
            self.current_state.on_key_event(key, scancode, action, mods)

    def cursor_move_event(self, x: float, y: float) -> None:
        if self.current_state is not None:
            self.current_state.on_cursor_move_event(x, y)

    def cursor_enter_event(self, entered: int) -> None:
        if self.current_state is not None:
            self.current_state.on_cursor_enter_event(entered)

    def mouse_button_event(self, button: int, action: int, mods: int) -> None:
        if self.current_state is not None:
            self.current_state.on_mouse_button_event(button, action, mods)

    def scroll_event(self, x_offset: float, y_offset: float) -> None:
        if self.current_state is not None:
            self.current_state.on_scroll_event(x_offset, y_offset)