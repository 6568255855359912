import json
import logging

from dateutil import parser as date_parser

from oairepo.exceptions import ItemDoesNotExist
from oairepo.items.base import Collection, Item, ItemSource, Media, Value, as_utc


logger = logging.getLogger(__name__)


class InMemoryItemSource(ItemSource):
    """item source over a fixed list of items, for development and tests

    options:
        items: iterable of `Item`
        collections: iterable of `Collection`
        fixture_path: path to a json file with "items" and "collections" lists
    """

    def __init__(self, items=(), collections=(), fixture_path=None, **options):
        super().__init__(**options)
        items = list(items)
        collections = list(collections)
        if fixture_path:
            _items, _collections = load_fixture(fixture_path)
            items.extend(_items)
            collections.extend(_collections)
        self._items = tuple(sorted(items, key=lambda item: item.identifier))
        self._by_identifier = {item.identifier: item for item in self._items}
        self._collections = tuple(collections)
        logger.debug('%s holding %d items', self.__class__.__name__, len(self._items))

    def get_item(self, identifier):
        try:
            item = self._by_identifier[identifier]
        except KeyError:
            raise ItemDoesNotExist(identifier)
        if item.is_deleted:
            raise ItemDoesNotExist(identifier)
        return item

    def count_items(self, query):
        return sum(1 for item in self._items if query.matches(item))

    def list_items(self, query, offset, limit):
        matching = [item for item in self._items if query.matches(item)]
        return matching[offset:offset + limit]

    def earliest_datestamp(self):
        _datestamps = [as_utc(item.modified) for item in self._items if not item.is_deleted]
        return min(_datestamps) if _datestamps else None

    def list_collections(self):
        return self._collections


def load_fixture(fixture_path):
    with open(fixture_path) as fixture_file:
        data = json.load(fixture_file)
    items = [item_from_json(item_json) for item_json in data.get('items', [])]
    collections = [Collection(**collection_json) for collection_json in data.get('collections', [])]
    return items, collections


def item_from_json(item_json):
    values = {
        term: tuple(
            Value(**{
                **value_json,
                'annotation': {
                    _term: tuple(_values)
                    for _term, _values in value_json.get('annotation', {}).items()
                },
            })
            for value_json in value_list
        )
        for term, value_list in item_json.get('values', {}).items()
    }
    return Item(
        identifier=str(item_json['identifier']),
        modified=as_utc(date_parser.isoparse(item_json['modified'])),
        set_specs=tuple(item_json.get('set_specs', ())),
        values=values,
        media=tuple(Media(**media_json) for media_json in item_json.get('media', ())),
        thumbnail_url=item_json.get('thumbnail_url'),
        url=item_json.get('url'),
        api_url=item_json.get('api_url'),
        is_deleted=item_json.get('is_deleted', False),
    )
