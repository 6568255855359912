import re

# match characters not allowed in XML 1.0; python strings hold astral
# characters whole, so any surrogate code point is a lone one
RE_XML_ILLEGAL = re.compile('[\u0000-\u0008\u000b\u000c\u000e-\u001f\ud800-\udfff\ufffe\uffff]')


def strip_illegal_xml_chars(string):
    return RE_XML_ILLEGAL.sub('', string)


def is_xml_safe(string):
    return RE_XML_ILLEGAL.search(string) is None
