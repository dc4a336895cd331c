"""
Ticket search header meta module
Announces the ticket number and fulltext OpenSearch descriptions
"""
from .. import header_meta_registry, register_component

OPENSEARCH_TYPE = 'application/opensearchdescription+xml'


@register_component(header_meta_registry, 'ticket_search')
class TicketSearchHeaderMeta:
    """Adds two OpenSearch MetaLink blocks to the layout"""

    def run(self, layout, config, module_config):
        session = ''
        if not layout.session_id_cookie:
            session = ';' + layout.session_name + '=' + layout.session_id

        action = module_config['action']

        title = config.get('PRODUCT_NAME')
        title += ' (' + config.get('TICKET_HOOK') + ')'
        layout.block('MetaLink', {
            'Rel': 'search',
            'Type': OPENSEARCH_TYPE,
            'Title': title,
            'Href': layout.baselink + 'Action=' + action
                + ';Subaction=OpenSearchDescriptionTicketNumber' + session,
        })

        fulltext = layout.translate('Fulltext')
        title = config.get('PRODUCT_NAME')
        title += ' (' + fulltext + ')'
        layout.block('MetaLink', {
            'Rel': 'search',
            'Type': OPENSEARCH_TYPE,
            'Title': title,
            'Href': layout.baselink + 'Action=' + action
                + ';Subaction=OpenSearchDescriptionFulltext' + session,
        })

        return True
