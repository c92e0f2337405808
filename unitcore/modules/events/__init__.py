"""
Events Module - Black Box Interface

Purpose: Let callers observe what a unit does
Interface: EventEmitter.on()/once()/off()/emit(), Event, EventError
Hidden: Handler storage, wildcard pattern matching

Delivery is synchronous and in-process; handler exceptions propagate to the
emitter's caller.
"""

from .emitter import Event, EventEmitter, EventError, matches

__all__ = ["Event", "EventEmitter", "EventError", "matches"]
