"""
Header Meta Component
Adds <link> tags to the head of agent pages
"""
from .ticket_search import TicketSearchHeaderMeta
from .service import OpenSearchDescriptionService

__all__ = ['TicketSearchHeaderMeta', 'OpenSearchDescriptionService']
