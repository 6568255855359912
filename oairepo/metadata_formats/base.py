from abc import ABC, abstractmethod
import typing

from lxml import etree

from oairepo.items.base import Item, Value
from oairepo.oaipmh.util import ns, SubEl


DEFAULT_PARAMS = {
    'expose_media': True,
    'append_identifier': 'url',
    'format_uri': 'uri',
}


class MetadataFormat(ABC):
    """renders an item as an XML fragment in one metadata vocabulary, meant to be
    included within the <metadata> element of an OAI-PMH `ListRecords` or
    `GetRecord` response

    subclasses set `prefix`, `namespace` and `schema`, and implement `render`.
    values pass through the configured value filters before rendering:
    `filter_values_pre` sees the whole term->values map, `filter_values` one
    element's values at a time.
    """

    prefix: str = None
    namespace: str = None
    schema: str = None

    # attributes marking a rendered value as a URI; formats without a use for
    # xsi:type override with an empty mapping
    URI_ATTRIBUTES = {ns('xsi', 'type'): 'dcterms:URI'}

    def __init__(self, params=None, value_filters=(), element_policies=()):
        self.params = {**DEFAULT_PARAMS, **(params or {})}
        self.value_filters = tuple(value_filters)
        self.element_policies = tuple(element_policies)

    def __repr__(self):
        return f'{self.__class__.__name__}(prefix={self.prefix!r})'

    @property
    def schema_location(self) -> str:
        return f'{self.namespace} {self.schema}'

    @abstractmethod
    def render(self, item: Item) -> etree.Element:
        """build the metadata element for the given item

        must not catch errors reading the item -- a record that cannot be
        rendered fails the whole response
        """
        raise NotImplementedError

    def render_text(self, item: Item) -> str:
        return etree.tostring(self.render(item), encoding='unicode')

    def can_disseminate(self, item: Item) -> bool:
        return True

    ###
    # value hooks

    def filter_values_pre(self, item: Item) -> dict[str, list[Value]]:
        values = {term: list(term_values) for term, term_values in item.values.items()}
        for value_filter in self.value_filters:
            values = value_filter.filter_values_pre(self, item, values)
        return values

    def filter_values(self, item: Item, term: str, values: list[Value]) -> list[Value]:
        for value_filter in self.value_filters:
            values = value_filter.filter_values(self, item, term, values)
        return values

    def term_values(self, item: Item, term: str, values: dict | None = None) -> list[Value]:
        if values is None:
            values = self.filter_values_pre(item)
        return self.filter_values(item, term, values.get(term, []))

    def element_name(self, local_name: str, text: str) -> str:
        for policy in self.element_policies:
            local_name = policy.element_name(local_name, text)
        return local_name

    def format_value(self, value: Value) -> tuple[str, dict[str, str]]:
        attributes = {}
        if value.type == 'uri' and value.uri:
            text = self._format_uri(value)
            if text == value.uri:
                attributes.update(self.URI_ATTRIBUTES)
        elif value.type == 'resource' and value.uri:
            text = value.uri
            attributes.update(self.URI_ATTRIBUTES)
        else:
            text = value.text
        if value.lang:
            attributes[ns('xml', 'lang')] = value.lang
        return text, attributes

    def _format_uri(self, value: Value) -> str:
        format_uri = self.params['format_uri']
        if format_uri == 'label' and value.label:
            return value.label
        if format_uri == 'uri_label' and value.label:
            return f'{value.uri} {value.label}'
        return value.uri

    ###
    # item-level identifiers

    def single_identifier(self, item: Item) -> str | None:
        """the one identifier best representing the item, if configured and known
        """
        return {
            'url': item.url,
            'api_url': item.api_url,
        }.get(self.params['append_identifier'])

    def thumbnail_url(self, item: Item) -> str | None:
        if item.thumbnail_url:
            return item.thumbnail_url
        primary_media = item.primary_media
        if primary_media is None:
            return None
        if primary_media.ingester == 'remoteFile' and primary_media.media_data.get('thumbnail'):
            return primary_media.media_data['thumbnail']
        if primary_media.has_thumbnails:
            return primary_media.thumbnail_url('medium')
        return None

    def media_urls(self, item: Item) -> list[str]:
        if not self.params['expose_media']:
            return []
        return [media.original_url for media in item.media if media.original_url]


def append_new_element(parent: etree.Element, tag_name: str, text: str, attributes: typing.Mapping[str, str] = None) -> etree.Element:
    """append a child element with the given text, skipping empty values
    """
    if not text:
        return None
    return SubEl(parent, tag_name, text, attrib=dict(attributes or {}))


class ValueFilter:
    """hook for adjusting item values before a format renders them

    registered under the `oairepo.value_filters` entry point namespace and
    enabled by name in settings.OAIPMH_VALUE_FILTERS
    """

    def filter_values_pre(self, metadata_format: MetadataFormat, item: Item, values: dict[str, list[Value]]) -> dict[str, list[Value]]:
        return values

    def filter_values(self, metadata_format: MetadataFormat, item: Item, term: str, values: list[Value]) -> list[Value]:
        return values


class ElementPolicy:
    """hook for choosing the element name a value is rendered under

    registered under the `oairepo.element_policies` entry point namespace
    """

    def element_name(self, local_name: str, text: str) -> str:
        return local_name
