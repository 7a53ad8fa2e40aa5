"""
CustomUserManager for the email-identified user model.

Registered users authenticate with email + password. Passwordless users are
attendee accounts created implicitly when a ticket is issued.
"""

from django.contrib.auth.models import BaseUserManager


class CustomUserManager(BaseUserManager):
    use_in_migrations = True

    def normalize_email(self, email):
        """Normalize email address (whole address lowercased)"""
        if email:
            return super().normalize_email(email.strip()).lower()
        return email

    def create_user(self, email: str, password: str | None = None, is_registered: bool = True, **extra_fields):
        """
        Create a user.

        Raises:
            ValueError: missing email, or a password/is_registered mismatch
        """
        if not email:
            raise ValueError('Users must have an email address')
        if is_registered and not password:
            raise ValueError('Registered users must have a password')
        if not is_registered and password:
            raise ValueError('Passwordless users cannot have passwords')

        extra_fields.setdefault('is_active', True)

        user = self.model(email=self.normalize_email(email), is_registered=is_registered, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.full_clean(exclude=['password'])
        user.save(using=self._db)
        return user

    def create_superuser(self, email: str, password: str, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if not extra_fields.get('is_staff'):
            raise ValueError('Superuser must have is_staff=True')
        if not extra_fields.get('is_superuser'):
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, is_registered=True, **extra_fields)

    def create_passwordless_user(self, email: str, **extra_fields):
        """Create an attendee account that cannot log in until claimed."""
        return self.create_user(email=email, password=None, is_registered=False, **extra_fields)

    def get_by_email(self, email: str, registered_only: bool = False):
        if not email:
            return None

        queryset = self.filter(email__iexact=self.normalize_email(email))
        if registered_only:
            queryset = queryset.filter(is_registered=True)
        return queryset.first()

    def get_by_natural_key(self, username):
        """Only registered users can authenticate."""
        if not username:
            raise self.model.DoesNotExist()
        return self.get(email__iexact=username, is_registered=True)
