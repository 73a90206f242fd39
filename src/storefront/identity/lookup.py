"""User lookup, used to attach a display name to new orders."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import UserNotFoundError
from storefront.identity.user import User


def get_user(user_id) -> User:
    try:
        return current_domain.repository_for(User).get(str(user_id))
    except ObjectNotFoundError:
        raise UserNotFoundError(str(user_id)) from None


def list_users() -> list[User]:
    users = current_domain.repository_for(User)._dao.query.all().items
    return sorted(users, key=lambda u: u.created_at)
