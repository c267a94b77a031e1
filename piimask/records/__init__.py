"""Record-level anonymization on top of the category maskers."""

from .comments import CommentAnonymizer
from .store import InMemoryRecordStore, Record, RecordStore
from .users import DEFAULT_META_KEYS, DEFAULT_USER_FIELDS, UserAnonymizer

__all__ = [
    "Record",
    "RecordStore",
    "InMemoryRecordStore",
    "UserAnonymizer",
    "CommentAnonymizer",
    "DEFAULT_USER_FIELDS",
    "DEFAULT_META_KEYS",
]
