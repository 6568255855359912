import dataclasses
import datetime
import logging

from django.apps import apps
from django.conf import settings

from oairepo.exceptions import ItemDoesNotExist, ResumptionTokenNotFound
from oairepo.items.base import ItemQuery
from oairepo.oaipmh import errors as oai_errors
from oairepo.oaipmh.verbs import OAIVerb
from oairepo.oaipmh.response_renderer import OAIRenderer
from oairepo.oaipmh.tokens import ResumptionContext
from oairepo.oaipmh.util import date_granularity, parse_date_argument


logger = logging.getLogger(__name__)

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


@dataclasses.dataclass
class ListPage:
    """one page of a list response

    `cursor` is the offset of the first entry in the complete list;
    `next_token` is None on the last page
    """
    entries: list
    cursor: int
    complete_list_size: int
    next_token: ResumptionContext | None = None
    resumed: bool = False


class OaiPmhRepository:
    """handles one OAI-PMH request

    holds per-request state (the error list), so build a new one per request;
    everything it shares with other requests (registries, item source, token
    store) is either read-only or safe for concurrent use
    """

    IDENTIFIER_DELIMITER = ':'

    def __init__(self, *, name, namespace_id, admin_emails, formats, sets, item_source, token_store, page_size):
        self.name = name
        self.namespace_id = namespace_id
        self.admin_emails = admin_emails
        self.formats = formats
        self.sets = sets
        self.item_source = item_source
        self.token_store = token_store
        self.page_size = page_size
        self.errors = []

    @classmethod
    def from_settings(cls):
        app_config = apps.get_app_config('oairepo').build()
        return cls(
            name=settings.OAIPMH_REPOSITORY_NAME,
            namespace_id=settings.OAIPMH_NAMESPACE_ID,
            admin_emails=settings.OAIPMH_ADMIN_EMAILS,
            formats=app_config.format_registry,
            sets=app_config.set_registry,
            item_source=app_config.item_source,
            token_store=app_config.token_store,
            page_size=settings.OAIPMH_LIST_LIMIT,
        )

    def handle_request(self, request, kwargs):
        """build the response document for a request

        kwargs map each argument name to the list of values given for it
        """
        xml = None
        renderer = OAIRenderer(self, request)
        verb, self.errors = OAIVerb.validate(**kwargs)

        if not self.errors:
            # No repeated arguments at this point
            kwargs = {k: v[0] for k, v in kwargs.items() if k != 'verb'}
            renderer.kwargs = {'verb': verb.name, **kwargs}
            handler_method = {
                'Identify': self._do_identify,
                'ListMetadataFormats': self._do_listmetadataformats,
                'ListSets': self._do_listsets,
                'ListIdentifiers': self._do_listidentifiers,
                'ListRecords': self._do_listrecords,
                'GetRecord': self._do_getrecord,
            }[verb.name]
            xml = handler_method(kwargs, renderer)

        if self.errors:
            logger.info('Rejected OAI-PMH request: %s', ', '.join(e.code for e in self.errors))
            if any(e.code in oai_errors.UNECHOED_CODES for e in self.errors):
                renderer.kwargs = {}
            return renderer.errors(self.errors)
        return xml

    def oai_identifier(self, item):
        return self.IDENTIFIER_DELIMITER.join(('oai', self.namespace_id, item.identifier))

    def sample_identifier(self):
        _items = self.item_source.list_items(ItemQuery(), 0, 1)
        _local_id = _items[0].identifier if _items else '1'
        return self.IDENTIFIER_DELIMITER.join(('oai', self.namespace_id, _local_id))

    def resolve_oai_identifier(self, identifier):
        splid = identifier.split(self.IDENTIFIER_DELIMITER, 2)
        if len(splid) != 3 or splid[:2] != ['oai', self.namespace_id] or not splid[2]:
            self.errors.append(oai_errors.BadRecordID(identifier))
            return None
        try:
            return self.item_source.get_item(splid[2])
        except ItemDoesNotExist:
            self.errors.append(oai_errors.BadRecordID(identifier))
            return None

    def _do_identify(self, kwargs, renderer):
        return renderer.identify(self.item_source.earliest_datestamp() or EPOCH)

    def _do_listmetadataformats(self, kwargs, renderer):
        _formats = list(self.formats)
        if 'identifier' in kwargs:
            _item = self.resolve_oai_identifier(kwargs['identifier'])
            if self.errors:
                return
            _formats = self.formats.applicable_to(_item)
        if not _formats:
            self.errors.append(oai_errors.NoMetadataFormats(kwargs.get('identifier', '')))
            return
        return renderer.listMetadataFormats(_formats)

    def _do_listsets(self, kwargs, renderer):
        if not len(self.sets):
            self.errors.append(oai_errors.NoSetHierarchy())
            return
        _cursor, _resumed = 0, False
        if 'resumptionToken' in kwargs:
            _context = self._resume(kwargs['resumptionToken'], 'ListSets')
            if self.errors:
                return
            _cursor, _resumed = _context.cursor, True
        _total = len(self.sets)
        _page = ListPage(
            entries=self.sets.page(_cursor, self.page_size),
            cursor=_cursor,
            complete_list_size=_total,
            resumed=_resumed,
        )
        _next_cursor = _cursor + len(_page.entries)
        if _next_cursor < _total:
            _page.next_token = self.token_store.mint(ResumptionContext(
                verb='ListSets',
                cursor=_next_cursor,
                complete_list_size=_total,
            ))
        return renderer.listSets(_page)

    def _do_listidentifiers(self, kwargs, renderer):
        _page, _ = self._load_page(kwargs, 'ListIdentifiers')
        if self.errors:
            return
        return renderer.listIdentifiers(_page)

    def _do_listrecords(self, kwargs, renderer):
        _page, _metadata_format = self._load_page(kwargs, 'ListRecords')
        if self.errors:
            return
        return renderer.listRecords(_page, _metadata_format)

    def _do_getrecord(self, kwargs, renderer):
        _metadata_format = self._get_metadata_format(kwargs['metadataPrefix'])
        if self.errors:
            return
        _item = self.resolve_oai_identifier(kwargs['identifier'])
        if self.errors:
            return
        if not _metadata_format.can_disseminate(_item):
            self.errors.append(oai_errors.BadFormatForRecord(kwargs['metadataPrefix']))
            return
        return renderer.getRecord(_item, _metadata_format)

    def _get_metadata_format(self, prefix):
        _metadata_format = self.formats.get(prefix)
        if _metadata_format is None:
            self.errors.append(oai_errors.BadFormat(prefix))
        return _metadata_format

    def _resume(self, token_id, verb_name):
        try:
            _context = self.token_store.resolve(token_id)
        except ResumptionTokenNotFound:
            self.errors.append(oai_errors.BadResumptionToken(token_id))
            return None
        if _context.verb != verb_name:
            self.errors.append(oai_errors.BadResumptionToken(token_id))
            return None
        return _context

    def _load_page(self, kwargs, verb_name):
        if 'resumptionToken' in kwargs:
            _context = self._resume(kwargs['resumptionToken'], verb_name)
            if self.errors:
                return None, None
            _arguments, _cursor, _resumed = _context.as_arguments(), _context.cursor, True
        else:
            _arguments, _cursor, _resumed = kwargs, 0, False

        _metadata_format = self._get_metadata_format(_arguments['metadataPrefix'])
        _query = self._item_query(_arguments)
        if self.errors:
            return None, None

        _total = self.item_source.count_items(_query)
        if not _total:
            self.errors.append(oai_errors.NoResults())
            return None, None
        _items = self.item_source.list_items(_query, _cursor, self.page_size)
        _page = ListPage(
            entries=_items,
            cursor=_cursor,
            complete_list_size=_total,
            resumed=_resumed,
        )
        _next_cursor = _cursor + len(_items)
        if _items and _next_cursor < _total:
            _page.next_token = self.token_store.mint(ResumptionContext(
                verb=verb_name,
                cursor=_next_cursor,
                complete_list_size=_total,
                metadata_prefix=_arguments['metadataPrefix'],
                from_arg=_arguments.get('from'),
                until_arg=_arguments.get('until'),
                set_spec=_arguments.get('set'),
            ))
        return _page, _metadata_format

    def _item_query(self, arguments):
        """build the item filter for list arguments, noting any invalid argument
        """
        _from_arg = arguments.get('from')
        _until_arg = arguments.get('until')
        _from = _until = None
        if _from_arg is not None:
            try:
                _from = parse_date_argument(_from_arg)
            except ValueError:
                self.errors.append(oai_errors.BadArgument('Invalid value for', 'from'))
        if _until_arg is not None:
            try:
                _until = parse_date_argument(_until_arg, end_of_day=True)
            except ValueError:
                self.errors.append(oai_errors.BadArgument('Invalid value for', 'until'))
        if _from is not None and _until is not None:
            if date_granularity(_from_arg) != date_granularity(_until_arg):
                self.errors.append(oai_errors.BadArgument('Mismatched granularity for', 'until'))
            elif _until < _from:
                self.errors.append(oai_errors.BadArgument('Earlier than from', 'until'))

        _query = ItemQuery()
        _set_spec = arguments.get('set')
        if _set_spec is not None:
            if not len(self.sets):
                self.errors.append(oai_errors.NoSetHierarchy())
            elif _set_spec not in self.sets:
                self.errors.append(oai_errors.BadArgument('Unknown set in', 'set'))
            else:
                _query = self.sets.get(_set_spec).query
        return dataclasses.replace(_query, from_date=_from, until_date=_until)
