import logging

from apps.accounts.models.custom_user import CustomUser
from apps.shared.decorators.database import handle_db_errors

logger = logging.getLogger(__name__)


class UserDAL:
    """Data Access Layer for CustomUser operations"""

    @handle_db_errors(operation_type='read', model_name='User')
    def find_by_email(self, email: str, registered_only: bool = False) -> CustomUser | None:
        """Case-insensitive lookup, None when no account uses the email"""
        return CustomUser.objects.get_by_email(email, registered_only=registered_only)

    @handle_db_errors(operation_type='create', model_name='User')
    def create_registered_user(
        self, email: str, password: str, first_name: str = '', last_name: str = ''
    ) -> CustomUser:
        user = CustomUser.objects.create_user(
            email=email,
            password=password,
            is_registered=True,
            first_name=first_name,
            last_name=last_name,
        )
        logger.info(f'Created registered user: {user.email} (ID: {user.id})')
        return user

    @handle_db_errors(operation_type='create', model_name='User')
    def create_passwordless_user(self, email: str, first_name: str = '', last_name: str = '') -> CustomUser:
        user = CustomUser.objects.create_passwordless_user(
            email=email,
            first_name=first_name,
            last_name=last_name,
        )
        logger.info(f'Created passwordless user: {user.email} (ID: {user.id})')
        return user

    @handle_db_errors(operation_type='update', model_name='User')
    def claim_user(self, user: CustomUser, password: str, first_name: str = '', last_name: str = '') -> CustomUser:
        return user.claim(password, first_name=first_name, last_name=last_name)
