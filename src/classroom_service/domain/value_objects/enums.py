from __future__ import annotations

from enum import StrEnum


class AppRole(StrEnum):
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class ContentKind(StrEnum):
    CLASSWORK = "classwork"
    ANNOUNCEMENT = "announcement"


class ClassworkType(StrEnum):
    LESSON = "lesson"
    ASSIGNMENT = "assignment"


class ChangeTable(StrEnum):
    """Tables published on the change feed."""

    CLASSWORK_ITEMS = "classwork_items"
    ANNOUNCEMENTS = "announcements"
    CHAT_MESSAGES = "chat_messages"
    CLASS_MEMBERS = "class_members"


class OutboxStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    SENT = "sent"
    FAILED = "failed"
