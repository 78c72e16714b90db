"""Event emitter for upload notifications."""
from .event_emitter import EventEmitter, EventAction

__all__ = [
    'EventEmitter',
    'EventAction',
]
