import datetime
import re
from typing import Any

from dateutil import parser as date_parser
from lxml import etree


XML_NAMESPACES = {
    'cdwalite': 'http://www.getty.edu/CDWA/CDWALite',
    'dc': 'http://purl.org/dc/elements/1.1/',
    'mets': 'http://www.loc.gov/METS/',
    'mods': 'http://www.loc.gov/mods/v3',
    'oai': 'http://www.openarchives.org/OAI/2.0/',
    'oai_dc': 'http://www.openarchives.org/OAI/2.0/oai_dc/',
    'oai-identifier': 'http://www.openarchives.org/OAI/2.0/oai-identifier',
    'xlink': 'http://www.w3.org/1999/xlink',
    'xsi': 'http://www.w3.org/2001/XMLSchema-instance',
    'xml': 'http://www.w3.org/XML/1998/namespace',
}

DAY_GRANULARITY = 'YYYY-MM-DD'
SECONDS_GRANULARITY = 'YYYY-MM-DDThh:mm:ssZ'

DATE_PATTERNS = {
    DAY_GRANULARITY: re.compile(r'^\d{4}-\d{2}-\d{2}$'),
    SECONDS_GRANULARITY: re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$'),
}


def ns(namespace_prefix: str, tag_name: str) -> str:
    """format XML tag/attribute name with full namespace URI

    see https://lxml.de/tutorial.html#namespaces
    """
    return f'{{{XML_NAMESPACES[namespace_prefix]}}}{tag_name}'


def nsmap(*namespace_prefixes: str, default: str | None = None) -> dict[str | None, str]:
    """build a namespace map suitable for lxml

    see https://lxml.de/tutorial.html#namespaces
    """
    return {
        (None if (prefix == default) else prefix): uri
        for prefix, uri in XML_NAMESPACES.items()
        if (
            prefix in namespace_prefixes
            or prefix == default
        )
    }


# wrapper for lxml.etree.SubElement, adds `text` kwarg for convenience
def SubEl(parent: etree.Element, tag_name: str, text: str | None = None, **kwargs: Any) -> etree.SubElement:
    element = etree.SubElement(parent, tag_name, **kwargs)
    if text:
        element.text = text
    return element


def format_datetime(dt: datetime.datetime) -> str:
    """format a datetime in UTC with 'Z' timezone indicator, at seconds granularity

    https://www.openarchives.org/OAI/openarchivesprotocol.html#Dates
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def date_granularity(value: str) -> str | None:
    for granularity, pattern in DATE_PATTERNS.items():
        if pattern.match(value):
            return granularity
    return None


def parse_date_argument(value: str, *, end_of_day: bool = False) -> datetime.datetime:
    """parse a `from` or `until` argument into an aware UTC datetime

    an `until` covers the whole of its last day or second (datestamps are
    published without fractions), so pass `end_of_day=True`;
    raises ValueError for anything not in one of the two supported granularities
    """
    granularity = date_granularity(value)
    if granularity is None:
        raise ValueError(f'not a valid OAI-PMH datestamp: {value}')
    parsed = date_parser.isoparse(value)
    if granularity == DAY_GRANULARITY:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
        if end_of_day:
            parsed = parsed.replace(hour=23, minute=59, second=59)
    if end_of_day:
        parsed = parsed.replace(microsecond=999999)
    return parsed.astimezone(datetime.timezone.utc)
