"""Event emitter implementation using Observer Pattern."""
from enum import Enum
from typing import Dict, List, Callable, Optional


class EventAction(Enum):
    """Value a handler returns to steer the operation that emitted."""
    CONTINUE = 'continue'
    CANCEL = 'cancel'


class EventEmitter:
    """
    Event emitter using Observer Pattern.
    
    Handlers run synchronously, in registration order. A handler asks
    the emitting operation to stop by returning EventAction.CANCEL;
    any other return value means continue.
    """
    
    def __init__(self):
        """Initializes event emitter."""
        self._events: Dict[str, List[Callable]] = {}
    
    def on(self, event: str, callback: Callable) -> 'EventEmitter':
        """Registers an event handler."""
        if event not in self._events:
            self._events[event] = []
        self._events[event].append(callback)
        return self
    
    def emit(self, event: str, *args, **kwargs) -> bool:
        """
        Emits an event.
        
        Returns:
            True if at least one handler requested cancellation
        """
        cancel = False
        for callback in list(self._events.get(event, [])):
            if callback(*args, **kwargs) is EventAction.CANCEL:
                cancel = True
        return cancel
    
    def off(self, event: str, callback: Optional[Callable] = None) -> 'EventEmitter':
        """Removes an event handler."""
        if event not in self._events:
            return self
        
        if callback is None:
            del self._events[event]
        else:
            self._events[event] = [cb for cb in self._events[event] if cb != callback]
        
        return self
    
    def has_listeners(self, event: str) -> bool:
        """Returns True if any handler is registered for event."""
        return bool(self._events.get(event))
