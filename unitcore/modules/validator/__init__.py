"""
Validator Module - Black Box Interface

Purpose: Keep a unit's trinity consistent and check calls against schemas
Interface: Validator.create()/is_valid()/execute()/learn()/validate_compatibility()
Hidden: Type checking rules, strict vs. lenient reporting
"""

from .validator import ValidationIssue, Validator, check_type

__all__ = ["Validator", "ValidationIssue", "check_type"]
