from lxml import etree

from oairepo.metadata_formats.base import MetadataFormat, append_new_element
from oairepo.metadata_formats.oai_dc import ROLE_TERM
from oairepo.oaipmh.util import ns, nsmap, SubEl


def mods(tag_name):
    return ns('mods', tag_name)


class ModsFormat(MetadataFormat):
    """builds a MODS 3.5 record from an item's dublin core terms

    a simple crosswalk, following the Library of Congress DC-to-MODS mapping
    https://www.loc.gov/standards/mods/dcsimple-mods.html
    """

    prefix = 'mods'
    namespace = 'http://www.loc.gov/mods/v3'
    schema = 'http://www.loc.gov/standards/mods/v3/mods-3-5.xsd'

    URI_ATTRIBUTES = {}

    def render(self, item):
        mods_element = etree.Element(
            mods('mods'),
            attrib={ns('xsi', 'schemaLocation'): self.schema_location},
            nsmap=nsmap('xsi', default='mods'),
        )
        values = self.filter_values_pre(item)

        def each(local_name):
            for value in self.term_values(item, f'dcterms:{local_name}', values):
                text, attributes = self.format_value(value)
                if text:
                    yield value, text, attributes

        for _, text, attributes in each('title'):
            title_info = SubEl(mods_element, mods('titleInfo'))
            append_new_element(title_info, mods('title'), text, attributes)

        for _, text, attributes in each('creator'):
            self._append_name(mods_element, text, attributes, roles=['creator'])

        for value, text, attributes in each('contributor'):
            roles = value.annotation_values(ROLE_TERM) or ['contributor']
            self._append_name(mods_element, text, attributes, roles=roles)

        for _, text, attributes in each('subject'):
            subject = SubEl(mods_element, mods('subject'))
            append_new_element(subject, mods('topic'), text, attributes)

        for _, text, attributes in each('description'):
            append_new_element(mods_element, mods('abstract'), text, attributes)

        publishers = list(each('publisher'))
        dates = list(each('date'))
        if publishers or dates:
            origin_info = SubEl(mods_element, mods('originInfo'))
            for _, text, attributes in publishers:
                append_new_element(origin_info, mods('publisher'), text, attributes)
            for _, text, attributes in dates:
                append_new_element(origin_info, mods('dateOther'), text, attributes)

        for _, text, attributes in each('type'):
            append_new_element(mods_element, mods('genre'), text, attributes)

        formats = list(each('format'))
        if formats:
            physical_description = SubEl(mods_element, mods('physicalDescription'))
            for _, text, attributes in formats:
                append_new_element(physical_description, mods('form'), text, attributes)

        for value, text, attributes in each('identifier'):
            if value.type in ('uri', 'resource'):
                attributes = {**attributes, 'type': 'uri'}
            append_new_element(mods_element, mods('identifier'), text, attributes)

        for _, text, attributes in each('language'):
            language = SubEl(mods_element, mods('language'))
            append_new_element(language, mods('languageTerm'), text, attributes)

        for _, text, attributes in each('source'):
            self._append_related_item(mods_element, text, attributes, related_type='original')

        for _, text, attributes in each('relation'):
            self._append_related_item(mods_element, text, attributes)

        for _, text, attributes in each('coverage'):
            subject = SubEl(mods_element, mods('subject'))
            append_new_element(subject, mods('geographic'), text, attributes)

        for _, text, attributes in each('rights'):
            append_new_element(mods_element, mods('accessCondition'), text, attributes)

        single_identifier = self.single_identifier(item)
        media_urls = self.media_urls(item)
        if single_identifier or media_urls:
            location = SubEl(mods_element, mods('location'))
            append_new_element(location, mods('url'), single_identifier, {'usage': 'primary display'})
            for media_url in media_urls:
                append_new_element(location, mods('url'), media_url)

        return mods_element

    def _append_name(self, parent, text, attributes, roles):
        if not text:
            return
        name = SubEl(parent, mods('name'))
        append_new_element(name, mods('namePart'), text, attributes)
        for role_text in roles:
            role = SubEl(name, mods('role'))
            append_new_element(role, mods('roleTerm'), role_text, {'type': 'text'})

    def _append_related_item(self, parent, text, attributes, related_type=None):
        if not text:
            return
        related_item = SubEl(parent, mods('relatedItem'))
        if related_type:
            related_item.set('type', related_type)
        title_info = SubEl(related_item, mods('titleInfo'))
        append_new_element(title_info, mods('title'), text, attributes)
