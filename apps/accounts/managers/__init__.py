from .custom_user_manager import CustomUserManager

__all__ = ['CustomUserManager']
