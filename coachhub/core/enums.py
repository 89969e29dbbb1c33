"""Shared enums for models and API."""

from enum import Enum


class UserType(str, Enum):
    """Role of an account."""

    TRAINEE = "trainee"
    TRAINER = "trainer"


class ContentType(str, Enum):
    """Kind of media attached to an exercise."""

    IMAGE = "image"
    VIDEO = "video"
    TEXT = "text"


class MessageType(str, Enum):
    """Kind of chat message."""

    TEXT = "text"
    IMAGE = "image"
    PROGRAM_REQUEST = "program_request"  # Trainee asks a trainer for a program


class TokenType(str, Enum):
    ACCESS = "access"
    RESET = "reset"
