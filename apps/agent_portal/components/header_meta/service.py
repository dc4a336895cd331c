"""
OpenSearch Description Service
Builds the documents the ticket search meta links point to
"""
from flask import render_template

OPENSEARCH_KINDS = {
    'OpenSearchDescriptionTicketNumber': {
        'param': 'TicketNumber',
        'description': 'Search tickets by ticket number',
    },
    'OpenSearchDescriptionFulltext': {
        'param': 'Fulltext',
        'description': 'Search tickets by fulltext',
    },
}


class OpenSearchDescriptionService:
    """Service for OpenSearch description documents"""

    def __init__(self, config):
        self.config = config

    def get_description(self, layout, action, subaction):
        """Template values for one description document

        Raises ValueError for an unknown subaction.
        """
        kind = OPENSEARCH_KINDS.get(subaction)
        if kind is None:
            raise ValueError(f"Unknown OpenSearch description: {subaction}")

        product_name = self.config.get('PRODUCT_NAME')
        if kind['param'] == 'TicketNumber':
            short_name = f"{product_name} ({self.config.get('TICKET_HOOK')})"
        else:
            short_name = f"{product_name} ({layout.translate('Fulltext')})"

        session = ''
        if not layout.session_id_cookie and layout.session_id:
            session = ';' + layout.session_name + '=' + layout.session_id

        return {
            # OpenSearch limits ShortName to 16 characters
            'short_name': short_name[:16],
            'description': layout.translate(kind['description']),
            'search_url': (
                layout.baselink + 'Action=' + action + ';Subaction=Search'
                + session + ';' + kind['param'] + '={searchTerms}'
            ),
            'language': layout.language.code,
        }

    def render(self, layout, action, subaction):
        """Render the OpenSearch description XML"""
        return render_template('opensearch_description.xml', **self.get_description(layout, action, subaction))
