from apps.accounts.services.user_service import UserService

__all__ = [
    'UserService',
]
