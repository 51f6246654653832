# Router modules for the EventHub API
# Import order matters - routers register endpoints on the shared api_router

from . import base
from . import auth
from . import users
from . import vendors
from . import events
from . import bookings
from . import chats
from . import notifications
from . import ai

__all__ = ['auth', 'users', 'vendors', 'events', 'bookings', 'chats', 'notifications', 'ai']
