from __future__ import annotations

from classroom_service.domain.entities.profile import Profile
from classroom_service.infrastructure.db.models.profile import ProfileModel


def model_to_entity(model: ProfileModel) -> Profile:
    return Profile(
        user_id=model.user_id,
        email=model.email,
        full_name=model.full_name,
        avatar_url=model.avatar_url,
    )
