from lxml import etree

from oairepo.metadata_formats.base import MetadataFormat
from oairepo.metadata_formats.oai_dc import OaiDcFormat
from oairepo.oaipmh.util import ns, nsmap, SubEl


def mets(tag_name):
    return ns('mets', tag_name)


class MetsFormat(MetadataFormat):
    """wraps an item's dublin core in a METS document, with a file section
    listing the item's media (when media are exposed)

    see http://www.loc.gov/standards/mets/
    """

    prefix = 'mets'
    namespace = 'http://www.loc.gov/METS/'
    schema = 'http://www.loc.gov/standards/mets/mets.xsd'

    DMD_ID = 'dmd-dc'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # shares value filters and element policies, so the embedded dublin
        # core matches what oai_dc would render for the same item
        self._dublin_core = OaiDcFormat(self.params, self.value_filters, self.element_policies)

    def render(self, item):
        mets_element = etree.Element(
            mets('mets'),
            attrib={
                ns('xsi', 'schemaLocation'): self.schema_location,
                'OBJID': item.url or item.identifier,
            },
            nsmap=nsmap('mets', 'dc', 'xlink', 'xsi'),
        )
        dmd_sec = SubEl(mets_element, mets('dmdSec'), ID=self.DMD_ID)
        md_wrap = SubEl(dmd_sec, mets('mdWrap'), MDTYPE='DC')
        xml_data = SubEl(md_wrap, mets('xmlData'))
        self._dublin_core.append_dc_elements(xml_data, item)

        file_ids = []
        media_list = [media for media in item.media if media.original_url] if self.params['expose_media'] else []
        if media_list:
            file_sec = SubEl(mets_element, mets('fileSec'))
            file_grp = SubEl(file_sec, mets('fileGrp'), USE='ORIGINAL')
            for index, media in enumerate(media_list, start=1):
                file_id = f'file-{index}'
                file_ids.append(file_id)
                file_element = SubEl(file_grp, mets('file'), ID=file_id)
                if media.media_type:
                    file_element.set('MIMETYPE', media.media_type)
                SubEl(
                    file_element,
                    mets('FLocat'),
                    attrib={
                        'LOCTYPE': 'URL',
                        ns('xlink', 'type'): 'simple',
                        ns('xlink', 'href'): media.original_url,
                    },
                )

        struct_map = SubEl(mets_element, mets('structMap'))
        item_div = SubEl(struct_map, mets('div'), TYPE='item', DMDID=self.DMD_ID)
        for file_id in file_ids:
            file_div = SubEl(item_div, mets('div'), TYPE='file')
            SubEl(file_div, mets('fptr'), FILEID=file_id)
        return mets_element
