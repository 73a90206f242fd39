"""User aggregate, the clerk an order is placed on behalf of.

Orders only copy the user's display name; no lifecycle rule depends on it.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from storefront.domain import storefront
from storefront.identity.events import UserRegistered


@storefront.aggregate
class User:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255, unique=True)
    created_at = DateTime()

    @classmethod
    def register(cls, name, email):
        now = datetime.now(UTC)
        user = cls(name=name, email=email, created_at=now)
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                name=name,
                email=email,
                registered_at=now,
            )
        )
        return user
