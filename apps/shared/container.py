from collections.abc import Callable

from apps.accounts.dal.user_dal import UserDAL
from apps.accounts.services.user_service import UserService
from apps.events.dal.batch_dal import BatchDAL
from apps.events.dal.event_dal import EventDAL
from apps.events.services.batch_service import BatchService
from apps.events.services.event_service import EventService
from apps.shared.cache.cache_manager import CacheManager
from apps.tickets.dal.registration_dal import RegistrationDAL
from apps.tickets.services.issuer import RegistrationIssuer
from apps.tickets.services.redemption import RedemptionGate
from apps.tickets.services.registration_service import RegistrationService
from apps.tickets.services.ticket_pdf import TicketPDFRenderer
from apps.tickets.utils.qr_utils import TicketQRCodeGenerator


class Container:
    """
    Simple DI Container for managing service dependencies.

    Allows easy service creation and dependency injection without
    the complexity of enterprise factory patterns.
    """

    def __init__(self):
        # Factory functions - can be overridden for testing
        self._dal_factories = {}
        self._service_factories = {}

        self._setup_default_factories()

    def _setup_default_factories(self):
        """Set up default factory functions for services"""
        self._dal_factories = {
            'user_dal': UserDAL,
            'event_dal': EventDAL,
            'batch_dal': BatchDAL,
            'registration_dal': RegistrationDAL,
        }

        self._service_factories = {
            'cache_manager': CacheManager,
            'qr_generator': TicketQRCodeGenerator,
        }

    def user_service(self):
        return UserService(
            dal=self._dal_factories['user_dal'](),
            registration_dal=self._dal_factories['registration_dal'](),
        )

    def event_service(self):
        """Create EventService with all dependencies injected"""
        return EventService(
            dal=self._dal_factories['event_dal'](),
            cache_manager=self._service_factories['cache_manager'](),
        )

    def batch_service(self):
        return BatchService(
            dal=self._dal_factories['batch_dal'](),
            event_dal=self._dal_factories['event_dal'](),
        )

    def registration_issuer(self):
        registration_dal = self._dal_factories['registration_dal']()
        return RegistrationIssuer(
            dal=registration_dal,
            event_dal=self._dal_factories['event_dal'](),
            batch_dal=self._dal_factories['batch_dal'](),
            user_service=UserService(dal=self._dal_factories['user_dal'](), registration_dal=registration_dal),
            qr_generator=self._service_factories['qr_generator'](),
            cache_manager=self._service_factories['cache_manager'](),
        )

    def redemption_gate(self):
        return RedemptionGate(
            dal=self._dal_factories['registration_dal'](),
            cache_manager=self._service_factories['cache_manager'](),
        )

    def registration_service(self):
        return RegistrationService(
            dal=self._dal_factories['registration_dal'](),
            event_dal=self._dal_factories['event_dal'](),
            cache_manager=self._service_factories['cache_manager'](),
            qr_generator=self._service_factories['qr_generator'](),
        )

    def ticket_pdf_renderer(self):
        return TicketPDFRenderer(qr_generator=self._service_factories['qr_generator']())

    # Override methods for testing
    def override_registration_dal(self, factory: Callable):
        """Override RegistrationDAL factory for testing"""
        self._dal_factories['registration_dal'] = factory

    def reset_to_defaults(self):
        """Reset all factories to defaults - useful for test cleanup"""
        self._setup_default_factories()


# Global container instance
_container = Container()


def get_container() -> Container:
    """Get the global container instance"""
    return _container


# Convenient functions for quick service access
def get_user_service():
    return get_container().user_service()


def get_event_service():
    """Quick access to EventService"""
    return get_container().event_service()


def get_batch_service():
    return get_container().batch_service()


def get_registration_issuer():
    return get_container().registration_issuer()


def get_redemption_gate():
    return get_container().redemption_gate()


def get_registration_service():
    return get_container().registration_service()


def get_ticket_pdf_renderer():
    return get_container().ticket_pdf_renderer()
