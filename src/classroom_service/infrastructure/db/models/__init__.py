"""Import all models so metadata.create_all / Alembic see every table."""
from classroom_service.infrastructure.db.models.content import (
    AnnouncementModel,
    ClassworkItemModel,
)
from classroom_service.infrastructure.db.models.conversation import ConversationModel
from classroom_service.infrastructure.db.models.message import MessageModel
from classroom_service.infrastructure.db.models.outbox import OutboxMessageModel
from classroom_service.infrastructure.db.models.participant import ParticipantModel
from classroom_service.infrastructure.db.models.profile import ProfileModel
from classroom_service.infrastructure.db.models.read_marker import NotificationReadModel
from classroom_service.infrastructure.db.models.school_class import (
    ClassMemberModel,
    ClassModel,
    ClassTeacherModel,
)

__all__ = [
    "AnnouncementModel",
    "ClassMemberModel",
    "ClassModel",
    "ClassTeacherModel",
    "ClassworkItemModel",
    "ConversationModel",
    "MessageModel",
    "NotificationReadModel",
    "OutboxMessageModel",
    "ParticipantModel",
    "ProfileModel",
]
