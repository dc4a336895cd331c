"""Tests for the ticket search header meta module and OpenSearch descriptions."""
import pytest

from apps.agent_portal.components import header_meta_registry
from apps.agent_portal.components.header_meta import OpenSearchDescriptionService, TicketSearchHeaderMeta
from apps.agent_portal.core import Language, Layout

MODULE_CONFIG = {'module': 'ticket_search', 'action': 'AgentTicketSearch'}


def _layout(portal_config, cookie, language='en', session_id='abc123'):
    return Layout(portal_config, Language(language), session_id=session_id, session_id_cookie=cookie)


def test_ticket_search_is_registered():
    assert header_meta_registry.get_component('ticket_search') is TicketSearchHeaderMeta


def test_meta_links_with_session_cookie(portal_config):
    layout = _layout(portal_config, cookie=True)

    assert TicketSearchHeaderMeta().run(layout, portal_config, MODULE_CONFIG) is True

    assert layout.get_blocks('MetaLink') == [
        {
            'Rel': 'search',
            'Type': 'application/opensearchdescription+xml',
            'Title': 'Agent Portal (Ticket#)',
            'Href': '/index?Action=AgentTicketSearch;Subaction=OpenSearchDescriptionTicketNumber',
        },
        {
            'Rel': 'search',
            'Type': 'application/opensearchdescription+xml',
            'Title': 'Agent Portal (Fulltext)',
            'Href': '/index?Action=AgentTicketSearch;Subaction=OpenSearchDescriptionFulltext',
        },
    ]


def test_meta_links_carry_session_without_cookie(portal_config):
    layout = _layout(portal_config, cookie=False)

    TicketSearchHeaderMeta().run(layout, portal_config, MODULE_CONFIG)

    hrefs = [block['Href'] for block in layout.get_blocks('MetaLink')]
    assert hrefs == [
        '/index?Action=AgentTicketSearch;Subaction=OpenSearchDescriptionTicketNumber;AgentPortalSession=abc123',
        '/index?Action=AgentTicketSearch;Subaction=OpenSearchDescriptionFulltext;AgentPortalSession=abc123',
    ]


def test_meta_links_use_script_alias_and_action(portal_config):
    portal_config['SCRIPT_ALIAS'] = '/portal/'
    layout = _layout(portal_config, cookie=True)

    TicketSearchHeaderMeta().run(layout, portal_config, {'module': 'ticket_search', 'action': 'AgentSearch'})

    href = layout.get_blocks('MetaLink')[0]['Href']
    assert href == '/portal/index?Action=AgentSearch;Subaction=OpenSearchDescriptionTicketNumber'


def test_fulltext_title_is_translated(portal_config):
    layout = _layout(portal_config, cookie=True, language='de')

    TicketSearchHeaderMeta().run(layout, portal_config, MODULE_CONFIG)

    assert layout.get_blocks('MetaLink')[1]['Title'] == 'Agent Portal (Volltext)'


def test_meta_links_render_as_link_tags(app, portal_config):
    layout = _layout(portal_config, cookie=True)
    TicketSearchHeaderMeta().run(layout, portal_config, MODULE_CONFIG)

    with app.test_request_context():
        html = layout.render_meta_links()

    assert html.count('<link rel="search"') == 2
    assert 'title="Agent Portal (Ticket#)"' in html


def test_meta_link_title_is_escaped(app, portal_config):
    portal_config['PRODUCT_NAME'] = 'Help <Desk>'
    layout = _layout(portal_config, cookie=True)
    TicketSearchHeaderMeta().run(layout, portal_config, MODULE_CONFIG)

    with app.test_request_context():
        html = layout.render_meta_links()

    assert 'Help &lt;Desk&gt; (Ticket#)' in html


def test_opensearch_description_ticket_number(portal_config):
    layout = _layout(portal_config, cookie=True)
    service = OpenSearchDescriptionService(portal_config)

    description = service.get_description(layout, 'AgentTicketSearch', 'OpenSearchDescriptionTicketNumber')

    assert description['search_url'] == (
        '/index?Action=AgentTicketSearch;Subaction=Search;TicketNumber={searchTerms}'
    )
    assert description['short_name'] == 'Agent Portal (Ti'
    assert description['language'] == 'en'


def test_opensearch_description_fulltext_with_session(portal_config):
    layout = _layout(portal_config, cookie=False, language='de')
    service = OpenSearchDescriptionService(portal_config)

    description = service.get_description(layout, 'AgentTicketSearch', 'OpenSearchDescriptionFulltext')

    assert description['search_url'] == (
        '/index?Action=AgentTicketSearch;Subaction=Search;AgentPortalSession=abc123;Fulltext={searchTerms}'
    )
    assert description['description'] == 'Tickets im Volltext durchsuchen'


def test_opensearch_description_unknown_subaction(portal_config):
    service = OpenSearchDescriptionService(portal_config)

    with pytest.raises(ValueError):
        service.get_description(_layout(portal_config, cookie=True), 'AgentTicketSearch', 'Search')
