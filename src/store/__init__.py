"""Persistence layer: entity models, local/remote stores and the CRUD façade."""

from .local import LocalStore
from .models import ChatMessage, ContentDraft, Memory, Product, UserProfile
from .remote import PostgrestRecordStore, RecordStore, RecordStoreError, Session
from .repository import Authenticated, ContentRepository, LocalOnly

__all__ = [
    "Authenticated",
    "ChatMessage",
    "ContentDraft",
    "ContentRepository",
    "LocalOnly",
    "LocalStore",
    "Memory",
    "PostgrestRecordStore",
    "Product",
    "RecordStore",
    "RecordStoreError",
    "Session",
    "UserProfile",
]
