from .base import Base
from .application_cache import ApplicationCache

__all__ = [
    'Base',
    'ApplicationCache',
]
