"""
Capabilities Module - Black Box Interface

Purpose: Hold the named operations a unit can perform
Interface: Capabilities.create()/add()/execute()/learn()/copy()
Hidden: Storage, sync/async tagging, namespacing of learned capabilities

Unknown names fail loudly with CapabilityNotFoundError; a missing
capability is never a silent no-op.
"""

from .capabilities import Capabilities, Capability, CapabilityKind

__all__ = ["Capabilities", "Capability", "CapabilityKind"]
