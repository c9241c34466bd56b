"""CLI command modules."""

from .auth import login, logout, reset, status
from .chat import chat
from .draft import draft
from .memory import memory
from .product import product
from .profile import profile
from .voice import voice
from .write import list_frameworks, write

__all__ = [
    "login",
    "logout",
    "status",
    "reset",
    "profile",
    "memory",
    "product",
    "draft",
    "write",
    "list_frameworks",
    "chat",
    "voice",
]
