from lxml import etree

from oairepo.metadata_formats.base import MetadataFormat, append_new_element
from oairepo.metadata_formats.oai_dc import ROLE_TERM
from oairepo.oaipmh.util import ns, nsmap, SubEl


UNKNOWN = 'Unknown'


def cdwa(tag_name):
    return ns('cdwalite', tag_name)


class CdwaLiteFormat(MetadataFormat):
    """builds a CDWA Lite record (Categories for the Description of Works of Art)

    CDWA Lite requires several elements whether or not there's data for them;
    those are filled with "Unknown"

    see http://www.getty.edu/research/publications/electronic_publications/cdwa/cdwalite.html
    """

    prefix = 'cdwalite'
    namespace = 'http://www.getty.edu/CDWA/CDWALite'
    schema = 'http://www.getty.edu/CDWA/CDWALite/CDWALite-xsd-public-v1-1.xsd'

    URI_ATTRIBUTES = {}

    def render(self, item):
        wrap = etree.Element(
            cdwa('cdwaliteWrap'),
            attrib={ns('xsi', 'schemaLocation'): self.schema_location},
            nsmap=nsmap('cdwalite', 'xsi'),
        )
        cdwalite = SubEl(wrap, cdwa('cdwalite'))
        values = self.filter_values_pre(item)

        def texts(local_name):
            _texts = []
            for value in self.term_values(item, f'dcterms:{local_name}', values):
                text, _ = self.format_value(value)
                if text:
                    _texts.append(text)
            return _texts

        descriptive = SubEl(cdwalite, cdwa('descriptiveMetadata'))

        work_type_wrap = SubEl(descriptive, cdwa('objectWorkTypeWrap'))
        for work_type in texts('type') or [UNKNOWN]:
            SubEl(work_type_wrap, cdwa('objectWorkType'), work_type)

        title_wrap = SubEl(descriptive, cdwa('titleWrap'))
        for title in texts('title') or [UNKNOWN]:
            title_set = SubEl(title_wrap, cdwa('titleSet'))
            SubEl(title_set, cdwa('title'), title)

        creators = texts('creator')
        SubEl(descriptive, cdwa('displayCreator'), '; '.join(creators) or UNKNOWN)

        creator_wrap = SubEl(descriptive, cdwa('indexingCreatorWrap'))
        contributors = [
            (value, self.format_value(value)[0])
            for value in self.term_values(item, 'dcterms:contributor', values)
        ]
        for creator in creators:
            self._append_indexing_creator(creator_wrap, creator, [UNKNOWN])
        for value, contributor in contributors:
            if contributor:
                self._append_indexing_creator(creator_wrap, contributor, value.annotation_values(ROLE_TERM) or ['contributor'])
        if not len(creator_wrap):
            self._append_indexing_creator(creator_wrap, UNKNOWN, [UNKNOWN])

        SubEl(descriptive, cdwa('displayMaterialsTech'), ', '.join(texts('format')) or 'Not Applicable')

        dates = texts('date')
        SubEl(descriptive, cdwa('displayCreationDate'), ', '.join(dates) or UNKNOWN)
        dates_wrap = SubEl(descriptive, cdwa('indexingDatesWrap'))
        for date in dates:
            dates_set = SubEl(dates_wrap, cdwa('indexingDatesSet'))
            SubEl(dates_set, cdwa('earliestDate'), date)
            SubEl(dates_set, cdwa('latestDate'), date)
        if not dates:
            dates_set = SubEl(dates_wrap, cdwa('indexingDatesSet'))
            SubEl(dates_set, cdwa('earliestDate'), UNKNOWN)
            SubEl(dates_set, cdwa('latestDate'), UNKNOWN)

        location_wrap = SubEl(descriptive, cdwa('locationWrap'))
        for location in texts('coverage') or ['location not available']:
            location_set = SubEl(location_wrap, cdwa('locationSet'))
            SubEl(location_set, cdwa('locationName'), location)

        subjects = texts('subject')
        if subjects:
            classification_wrap = SubEl(descriptive, cdwa('classificationWrap'))
            for subject in subjects:
                SubEl(classification_wrap, cdwa('classification'), subject)

        descriptions = texts('description')
        if descriptions:
            note_wrap = SubEl(descriptive, cdwa('descriptiveNoteWrap'))
            for description in descriptions:
                note_set = SubEl(note_wrap, cdwa('descriptiveNoteSet'))
                SubEl(note_set, cdwa('descriptiveNote'), description)

        administrative = SubEl(cdwalite, cdwa('administrativeMetadata'))
        for rights in texts('rights'):
            SubEl(administrative, cdwa('rightsWork'), rights)

        record_wrap = SubEl(administrative, cdwa('recordWrap'))
        SubEl(record_wrap, cdwa('recordID'), item.identifier)
        SubEl(record_wrap, cdwa('recordType'), 'item')
        single_identifier = self.single_identifier(item)
        if single_identifier:
            record_info_set = SubEl(record_wrap, cdwa('recordInfoSet'))
            SubEl(record_info_set, cdwa('recordInfoLink'), single_identifier)

        media_urls = self.media_urls(item)
        if media_urls:
            resource_wrap = SubEl(administrative, cdwa('resourceWrap'))
            for media_url in media_urls:
                resource_set = SubEl(resource_wrap, cdwa('resourceSet'))
                append_new_element(resource_set, cdwa('linkResource'), media_url)

        return wrap

    def _append_indexing_creator(self, creator_wrap, name, roles):
        creator_set = SubEl(creator_wrap, cdwa('indexingCreatorSet'))
        name_set = SubEl(creator_set, cdwa('nameCreatorSet'))
        SubEl(name_set, cdwa('nameCreator'), name)
        for role in roles:
            SubEl(creator_set, cdwa('roleCreator'), role)
