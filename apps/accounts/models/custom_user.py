"""Email-identified user model for attendees and staff."""

import uuid
from typing import ClassVar

from django.contrib.auth.models import AbstractUser
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.accounts.managers.custom_user_manager import CustomUserManager
from apps.shared.base.models import BaseModel


class CustomUser(AbstractUser, BaseModel):
    """
    Single user model for attendees and staff.

    Attendees get a passwordless account (is_registered=False) the first time
    a ticket is issued for their email. Registering with that email later
    claims the same account, so every ticket stays reachable through one key.
    """

    username = None
    first_name = models.CharField(_('first name'), max_length=150, blank=True)
    last_name = models.CharField(_('last name'), max_length=150, blank=True)

    email = models.EmailField(_('email address'), unique=True)

    is_registered = models.BooleanField(
        default=False,
        db_index=True,
        help_text=_('True once the attendee has set a password'),
    )

    user_uuid = models.UUIDField(
        _('User UUID'),
        default=uuid.uuid4,
        unique=True,
        editable=False,
    )

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS: ClassVar[list[str]] = []

    objects = CustomUserManager()

    class Meta:
        db_table = 'accounts_customuser'
        verbose_name = _('User')
        verbose_name_plural = _('Users')
        indexes = [
            models.Index(fields=['email', 'is_registered'], name='accounts_email_reg_idx'),
        ]

    def clean(self):
        super().clean()
        if self.is_registered and not self.has_usable_password():
            raise ValidationError({'password': _('Password is required for registered users')})

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.__class__.objects.normalize_email(self.email)
        if self.first_name:
            self.first_name = self.first_name.strip()
        if self.last_name:
            self.last_name = self.last_name.strip()

        # Passwordless accounts must never authenticate with a password
        if not self.is_registered and self.has_usable_password():
            self.set_unusable_password()

        self.clean()
        super().save(*args, **kwargs)

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()

    @property
    def display_name(self) -> str:
        return self.full_name or self.email

    def claim(self, password: str, first_name: str = '', last_name: str = '') -> 'CustomUser':
        """Turn a passwordless attendee account into a registered one."""
        if self.is_registered:
            raise ValidationError('User is already registered')

        self.set_password(password)
        if first_name:
            self.first_name = first_name
        if last_name:
            self.last_name = last_name
        self.is_registered = True
        self.save()
        return self

    def __str__(self):
        return self.display_name

    def __repr__(self):
        return f"<CustomUser(id={self.id}, email='{self.email}', is_registered={self.is_registered})>"
