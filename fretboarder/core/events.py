"""Event system for Fretboarder components."""

from typing import Any, Callable, Dict, List
from enum import Enum, auto

from ..logger import get_logger

logger = get_logger(__name__)


class GameEventType(Enum):
    """Event types emitted by the game controller."""

    STATE_CHANGED = auto()
    ROUND_COMPLETE = auto()
    GAME_OVER = auto()


class EventEmitter:
    """Event emitter for Fretboarder components."""

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners: Dict[Any, List[Callable]] = {}

    def on(self, event_type: Any, callback: Callable) -> None:
        """Register a callback for an event type.

        Args:
            event_type: Event type to listen for
            callback: Function to call when the event occurs
        """
        if event_type not in self._listeners:
            self._listeners[event_type] = []

        if callback not in self._listeners[event_type]:
            self._listeners[event_type].append(callback)
            logger.debug(f"Added listener for event {event_type}")

    def off(self, event_type: Any, callback: Callable) -> None:
        """Remove a previously registered callback, if present."""
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def emit(self, event_type: Any, *args, **kwargs) -> None:
        """Emit an event.

        Listener errors are logged and do not reach the emitter.

        Args:
            event_type: Event type to emit
            *args: Positional arguments to pass to listeners
            **kwargs: Keyword arguments to pass to listeners
        """
        if event_type not in self._listeners:
            return

        for callback in list(self._listeners[event_type]):
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in event listener for {event_type}: {e}")

    def clear(self) -> None:
        """Remove all event listeners."""
        self._listeners = {}
        logger.debug("Cleared all event listeners")


class GameEvents:
    """Event emitter specifically for game controller events."""

    def __init__(self):
        """Initialize the game events."""
        self._emitter = EventEmitter()

    def on_state_changed(self, callback: Callable) -> None:
        """Register a callback receiving ``(old_state, new_state)``."""
        self._emitter.on(GameEventType.STATE_CHANGED, callback)

    def on_round_complete(self, callback: Callable) -> None:
        """Register a callback receiving the state whose round just completed."""
        self._emitter.on(GameEventType.ROUND_COMPLETE, callback)

    def on_game_over(self, callback: Callable) -> None:
        """Register a callback receiving the final state."""
        self._emitter.on(GameEventType.GAME_OVER, callback)

    def emit_state_changed(self, old_state, new_state) -> None:
        self._emitter.emit(GameEventType.STATE_CHANGED, old_state, new_state)

    def emit_round_complete(self, state) -> None:
        self._emitter.emit(GameEventType.ROUND_COMPLETE, state)

    def emit_game_over(self, state) -> None:
        self._emitter.emit(GameEventType.GAME_OVER, state)

    def clear(self) -> None:
        """Remove all event listeners."""
        self._emitter.clear()
