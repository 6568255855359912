import dataclasses

import pytest

from oairepo.items.base import Value
from oairepo.metadata_formats.element_policies import ThesisDescriptionPolicy
from oairepo.metadata_formats.mets import MetsFormat

from tests.oairepo import factories


NAMESPACES = {
    'dc': 'http://purl.org/dc/elements/1.1/',
    'mets': 'http://www.loc.gov/METS/',
    'xlink': 'http://www.w3.org/1999/xlink',
}


@pytest.fixture
def item():
    return factories.ItemFactory(
        identifier='000042',
        url='https://example.org/items/42',
        values={
            'dcterms:title': (Value(text='Spring collection'),),
            'dcterms:description': (
                Value(text='Fashion Institute of Technology, State University of New York, M.F.A. thesis'),
            ),
        },
        media=(
            factories.MediaFactory(original_url='https://example.org/files/original/1.jpg', media_type='image/jpeg'),
            factories.MediaFactory(original_url='https://example.org/files/original/2.pdf', media_type=None),
        ),
    )


class TestMetsFormat:
    def test_document(self, item):
        mets_element = MetsFormat().render(item)
        assert mets_element.tag == '{http://www.loc.gov/METS/}mets'
        assert mets_element.get('OBJID') == 'https://example.org/items/42'

        xml_data = mets_element.xpath('mets:dmdSec[@ID="dmd-dc"]/mets:mdWrap[@MDTYPE="DC"]/mets:xmlData', namespaces=NAMESPACES)
        assert len(xml_data) == 1
        assert [e.text for e in xml_data[0].xpath('dc:title', namespaces=NAMESPACES)] == ['Spring collection']

        files = mets_element.xpath('mets:fileSec/mets:fileGrp[@USE="ORIGINAL"]/mets:file', namespaces=NAMESPACES)
        assert [f.get('ID') for f in files] == ['file-1', 'file-2']
        assert [f.get('MIMETYPE') for f in files] == ['image/jpeg', None]
        hrefs = mets_element.xpath('mets:fileSec//mets:FLocat[@LOCTYPE="URL"]/@xlink:href', namespaces=NAMESPACES)
        assert hrefs == ['https://example.org/files/original/1.jpg', 'https://example.org/files/original/2.pdf']

        item_div = mets_element.xpath('mets:structMap/mets:div[@TYPE="item"]', namespaces=NAMESPACES)[0]
        assert item_div.get('DMDID') == 'dmd-dc'
        assert item_div.xpath('mets:div[@TYPE="file"]/mets:fptr/@FILEID', namespaces=NAMESPACES) == ['file-1', 'file-2']

    def test_without_media(self, item):
        mets_element = MetsFormat({'expose_media': False}).render(item)
        assert not mets_element.xpath('mets:fileSec', namespaces=NAMESPACES)
        assert not mets_element.xpath('//mets:fptr', namespaces=NAMESPACES)
        assert len(mets_element.xpath('mets:structMap/mets:div', namespaces=NAMESPACES)) == 1

    def test_shares_element_policies(self, item):
        mets_element = MetsFormat(element_policies=[ThesisDescriptionPolicy()]).render(item)
        assert len(mets_element.xpath('//mets:xmlData/dc:description.thesis', namespaces=NAMESPACES)) == 1

    def test_objid_without_url(self, item):
        item = dataclasses.replace(item, url=None)
        assert MetsFormat().render(item).get('OBJID') == '000042'
