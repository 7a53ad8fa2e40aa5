from apps.events.dal.batch_dal import BatchDAL
from apps.events.dal.event_dal import EventDAL

__all__ = ['BatchDAL', 'EventDAL']
