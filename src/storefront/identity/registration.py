"""User registration: command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User


@storefront.command(part_of="User")
class RegisterUser:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        user = User.register(name=command.name, email=command.email)
        current_domain.repository_for(User).add(user)
        return str(user.id)
