from django.urls import reverse
from django.utils import timezone
from lxml import etree

from oairepo.oaipmh.util import format_datetime, SubEl, ns, nsmap, SECONDS_GRANULARITY


class OAIRenderer:
    def __init__(self, repository, request):
        self.repository = repository
        self.request = request
        # request arguments echoed as attributes of <request>; left empty for
        # requests that failed with badVerb/badArgument
        self.kwargs = {}

    def identify(self, earliest_datestamp):
        identify = etree.Element(ns('oai', 'Identify'))
        SubEl(identify, ns('oai', 'repositoryName'), self.repository.name)
        SubEl(identify, ns('oai', 'baseURL'), self.base_url())
        SubEl(identify, ns('oai', 'protocolVersion'), '2.0')
        for email in self.repository.admin_emails:
            SubEl(identify, ns('oai', 'adminEmail'), email)
        SubEl(identify, ns('oai', 'earliestDatestamp'), format_datetime(earliest_datestamp))
        SubEl(identify, ns('oai', 'deletedRecord'), 'no')
        SubEl(identify, ns('oai', 'granularity'), SECONDS_GRANULARITY)

        description = SubEl(identify, ns('oai', 'description'))
        identifier = SubEl(
            description,
            ns('oai-identifier', 'oai-identifier'),
            attrib={
                ns('xsi', 'schemaLocation'): 'http://www.openarchives.org/OAI/2.0/oai-identifier http://www.openarchives.org/OAI/2.0/oai-identifier.xsd',
            },
            nsmap=nsmap('xsi', default='oai-identifier'),
        )
        SubEl(identifier, ns('oai-identifier', 'scheme'), 'oai')
        SubEl(identifier, ns('oai-identifier', 'repositoryIdentifier'), self.repository.namespace_id)
        SubEl(identifier, ns('oai-identifier', 'delimiter'), self.repository.IDENTIFIER_DELIMITER)
        SubEl(identifier, ns('oai-identifier', 'sampleIdentifier'), self.repository.sample_identifier())

        return self._render(identify)

    def listMetadataFormats(self, formats):
        list_formats = etree.Element(ns('oai', 'ListMetadataFormats'))
        for metadata_format in formats:
            format_element = SubEl(list_formats, ns('oai', 'metadataFormat'))
            SubEl(format_element, ns('oai', 'metadataPrefix'), metadata_format.prefix)
            SubEl(format_element, ns('oai', 'schema'), metadata_format.schema)
            SubEl(format_element, ns('oai', 'metadataNamespace'), metadata_format.namespace)
        return self._render(list_formats)

    def listSets(self, page):
        list_sets = etree.Element(ns('oai', 'ListSets'))
        for oai_set in page.entries:
            set_element = SubEl(list_sets, ns('oai', 'set'))
            SubEl(set_element, ns('oai', 'setSpec'), oai_set.spec)
            SubEl(set_element, ns('oai', 'setName'), oai_set.name)
            if oai_set.description:
                set_description = SubEl(set_element, ns('oai', 'setDescription'))
                dc_element = SubEl(
                    set_description,
                    ns('oai_dc', 'dc'),
                    attrib={
                        ns('xsi', 'schemaLocation'): 'http://www.openarchives.org/OAI/2.0/oai_dc/ http://www.openarchives.org/OAI/2.0/oai_dc.xsd',
                    },
                    nsmap=nsmap('oai_dc', 'dc', 'xsi'),
                )
                SubEl(dc_element, ns('dc', 'description'), oai_set.description)
        self._resumption_token(list_sets, page)
        return self._render(list_sets)

    def listIdentifiers(self, page):
        list_identifiers = etree.Element(ns('oai', 'ListIdentifiers'))
        for item in page.entries:
            list_identifiers.append(self._header(item))
        self._resumption_token(list_identifiers, page)
        return self._render(list_identifiers)

    def listRecords(self, page, metadata_format):
        list_records = etree.Element(ns('oai', 'ListRecords'))
        for item in page.entries:
            list_records.append(self._record(item, metadata_format))
        self._resumption_token(list_records, page)
        return self._render(list_records)

    def getRecord(self, item, metadata_format):
        get_record = etree.Element(ns('oai', 'GetRecord'))
        get_record.append(self._record(item, metadata_format))
        return self._render(get_record)

    def errors(self, errors):
        elements = []
        for error in errors:
            element = etree.Element(ns('oai', 'error'), code=error.code)
            element.text = error.description
            elements.append(element)
        return self._render(*elements)

    def base_url(self):
        return self.request.build_absolute_uri(reverse('oai-pmh'))

    def _render(self, *elements):
        root = etree.Element(
            ns('oai', 'OAI-PMH'),
            attrib={
                ns('xsi', 'schemaLocation'): 'http://www.openarchives.org/OAI/2.0/ http://www.openarchives.org/OAI/2.0/OAI-PMH.xsd',
            },
            nsmap=nsmap('xsi', default='oai'),
        )
        SubEl(root, ns('oai', 'responseDate'), format_datetime(timezone.now()))
        request = SubEl(root, ns('oai', 'request'), self.base_url())
        for k, v in self.kwargs.items():
            request.set(k, v)

        for element in elements:
            root.append(element)

        return etree.tostring(root, encoding='utf-8', xml_declaration=True)

    def _resumption_token(self, parent, page):
        if page.next_token is not None:
            SubEl(
                parent,
                ns('oai', 'resumptionToken'),
                page.next_token.token_id,
                expirationDate=format_datetime(page.next_token.expiration),
                completeListSize=str(page.complete_list_size),
                cursor=str(page.cursor),
            )
        elif page.resumed:
            # the last page of a resumed list: an empty token says the list is complete
            SubEl(
                parent,
                ns('oai', 'resumptionToken'),
                completeListSize=str(page.complete_list_size),
                cursor=str(page.cursor),
            )

    def _header(self, item):
        header = etree.Element(ns('oai', 'header'))
        SubEl(header, ns('oai', 'identifier'), self.repository.oai_identifier(item))
        SubEl(header, ns('oai', 'datestamp'), format_datetime(item.modified))
        for set_spec in item.set_specs:
            SubEl(header, ns('oai', 'setSpec'), set_spec)
        return header

    def _record(self, item, metadata_format):
        _record_element = etree.Element(ns('oai', 'record'))
        _record_element.append(self._header(item))
        _metadata = SubEl(_record_element, ns('oai', 'metadata'))
        _metadata.append(metadata_format.render(item))
        return _record_element
