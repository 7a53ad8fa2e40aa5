from apps.tickets.dal.registration_dal import RegistrationDAL

__all__ = ['RegistrationDAL']
