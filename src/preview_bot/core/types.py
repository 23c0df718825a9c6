"""Shared types and enumerations."""

from __future__ import annotations

from enum import StrEnum


class EventType(StrEnum):
    MESSAGE_CREATE = "message_create"


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
