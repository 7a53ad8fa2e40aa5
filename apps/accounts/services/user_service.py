import logging

from django.db import transaction

from apps.accounts.dal.user_dal import UserDAL
from apps.accounts.exceptions import EmailAlreadyExistsError
from apps.accounts.models.custom_user import CustomUser
from apps.shared.exceptions import ValidationError

logger = logging.getLogger(__name__)


def split_full_name(full_name: str) -> tuple[str, str]:
    """'Ada King Lovelace' -> ('Ada', 'King Lovelace')"""
    parts = (full_name or '').split(None, 1)
    if not parts:
        return '', ''
    if len(parts) == 1:
        return parts[0], ''
    return parts[0], parts[1]


class UserService:
    """Service layer for user operations"""

    def __init__(self, dal: UserDAL = None, registration_dal=None):
        self.dal = dal or UserDAL()
        self._registration_dal = registration_dal

    @property
    def registration_dal(self):
        """Lazy initialization to avoid circular imports"""
        if self._registration_dal is None:
            from apps.tickets.dal.registration_dal import RegistrationDAL

            self._registration_dal = RegistrationDAL()
        return self._registration_dal

    def find_account(self, email: str) -> CustomUser | None:
        return self.dal.find_by_email(email)

    def resolve_attendee_account(self, email: str, full_name: str = '') -> CustomUser:
        """
        Return the account owning ``email``, creating a passwordless one if
        none exists yet.

        Two issuances racing on a brand new email both try to create the
        account; the loser re-reads the winner's row.
        """
        existing = self.dal.find_by_email(email)
        if existing is not None:
            return existing

        first_name, last_name = split_full_name(full_name)
        try:
            with transaction.atomic():
                return self.dal.create_passwordless_user(email, first_name=first_name, last_name=last_name)
        except ValidationError:
            existing = self.dal.find_by_email(email)
            if existing is None:
                raise
            logger.info(f'Attendee account for {email} created concurrently, reusing it')
            return existing

    @transaction.atomic
    def register_user(
        self, email: str, password: str, first_name: str = '', last_name: str = ''
    ) -> tuple[CustomUser, bool]:
        """
        Register an account for ``email``.

        Claims the passwordless account created at ticket issuance when there
        is one, then attaches older registrations made with the same email.

        Returns:
            (user, claimed) where claimed is True for an existing attendee account

        Raises:
            EmailAlreadyExistsError: a registered account already uses the email
        """
        existing = self.dal.find_by_email(email)
        if existing is not None and existing.is_registered:
            raise EmailAlreadyExistsError(email)

        if existing is not None:
            user = self.dal.claim_user(existing, password, first_name=first_name, last_name=last_name)
            claimed = True
        else:
            user = self.dal.create_registered_user(email, password, first_name=first_name, last_name=last_name)
            claimed = False

        linked = self.registration_dal.link_unclaimed_registrations(user)
        logger.info(f'Registered user {user.email} (claimed={claimed}, linked_registrations={linked})')
        return user, claimed
