"""
lead-editor: change detection and partial updates for property, room and
room type records.

The engine compares a baseline record with an edited copy, submits only the
fields that changed under type-aware normalization, and keeps the
denormalized room name ("<property name> <room number>") consistent.
"""

__version__ = "0.1.0"
