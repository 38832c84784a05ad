"""
Editor services: record loading, submission and edit sessions.
"""

from .app import LeadEditor
from .editor import (
    EditSession,
    EditState,
    PropertyEditSession,
    RoomEditSession,
    RoomTypeEditSession,
    SaveOutcome,
)
from .records import RecordService
from .submitter import UpdateSubmitter

__all__ = [
    "LeadEditor",
    "RecordService",
    "UpdateSubmitter",
    "EditSession",
    "EditState",
    "SaveOutcome",
    "RoomEditSession",
    "RoomTypeEditSession",
    "PropertyEditSession",
]
