"""Core data models for uno-groups."""

from uno_groups.core.record import FieldKey, Group, Record

__all__ = [
    "FieldKey",
    "Group",
    "Record",
]
