"""
Infrastructure layer - external system integrations.
Keeps business logic clean from transport details.
"""

from .eventbrite_client import EventbriteClient
from .http_client import close_http_client, get_http_client

__all__ = ['EventbriteClient', 'get_http_client', 'close_http_client']
