from lxml import etree

from oairepo.metadata_formats.base import MetadataFormat, append_new_element
from oairepo.oaipmh.util import ns, nsmap


# each of the 15 unqualified Dublin Core elements, in the order specified by
# the oai_dc XML schema
DC_ELEMENTS = (
    'title',
    'creator',
    'subject',
    'description',
    'publisher',
    'contributor',
    'date',
    'type',
    'format',
    'identifier',
    'source',
    'language',
    'relation',
    'coverage',
    'rights',
)

ROLE_TERM = 'bf:role'


def with_roles(text, value):
    roles = value.annotation_values(ROLE_TERM)
    if roles:
        return '{} [{}]'.format(text, ', '.join(roles))
    return text


class OaiDcFormat(MetadataFormat):
    """builds an XML fragment in unqualified dublin core, the format every
    OAI-PMH repository must support

    see http://www.openarchives.org/OAI/2.0/oai_dc.xsd
    """

    prefix = 'oai_dc'
    namespace = 'http://www.openarchives.org/OAI/2.0/oai_dc/'
    schema = 'http://www.openarchives.org/OAI/2.0/oai_dc.xsd'

    def render(self, item):
        dc_element = etree.Element(
            ns('oai_dc', 'dc'),
            attrib={ns('xsi', 'schemaLocation'): self.schema_location},
            nsmap=nsmap('oai_dc', 'dc', 'xsi'),
        )
        self.append_dc_elements(dc_element, item)

        append_new_element(dc_element, ns('dc', 'identifier'), self.single_identifier(item), self.URI_ATTRIBUTES)
        append_new_element(dc_element, ns('dc', 'identifier.thumbnail'), self.thumbnail_url(item), self.URI_ATTRIBUTES)
        for media_url in self.media_urls(item):
            append_new_element(dc_element, ns('dc', 'identifier'), media_url, self.URI_ATTRIBUTES)
        return dc_element

    def append_dc_elements(self, parent, item):
        """append a `dc:*` element per value of each of the 15 elements, in schema order
        """
        values = self.filter_values_pre(item)
        for local_name in DC_ELEMENTS:
            term = f'dcterms:{local_name}'
            for value in self.filter_values(item, term, values.get(term, [])):
                text, attributes = self.format_value(value)
                if local_name == 'contributor':
                    text = with_roles(text, value)
                append_new_element(
                    parent,
                    ns('dc', self.element_name(local_name, text)),
                    text,
                    attributes,
                )
        return parent
