from __future__ import annotations

from classroom_service.domain.entities.conversation import Conversation
from classroom_service.domain.entities.participant import Participant
from classroom_service.infrastructure.db.models.conversation import ConversationModel
from classroom_service.infrastructure.db.models.participant import ParticipantModel


def model_to_entity(model: ConversationModel) -> Conversation:
    return Conversation(
        id=model.id,
        title=model.title,
        is_direct=model.is_direct,
        class_id=model.class_id,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def entity_to_model(entity: Conversation) -> ConversationModel:
    return ConversationModel(
        id=entity.id,
        title=entity.title,
        is_direct=entity.is_direct,
        class_id=entity.class_id,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


def participant_to_entity(model: ParticipantModel) -> Participant:
    return Participant(
        conversation_id=model.conversation_id,
        user_id=model.user_id,
        joined_at=model.joined_at,
        last_read_at=model.last_read_at,
    )


def participant_to_model(entity: Participant) -> ParticipantModel:
    return ParticipantModel(
        conversation_id=entity.conversation_id,
        user_id=entity.user_id,
        joined_at=entity.joined_at,
        last_read_at=entity.last_read_at,
    )
