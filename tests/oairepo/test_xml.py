import pytest

from oairepo.util.xml import is_xml_safe, strip_illegal_xml_chars


@pytest.mark.parametrize('string, expected', [
    ('oai:x:1', 'oai:x:1'),
    ('tab\tnew\nline\rok', 'tab\tnew\nline\rok'),
    ('oai:x:\x01', 'oai:x:'),
    ('\x00nul\x0bvt\x1f', 'nulvt'),
    ('lone \ud800 surrogate', 'lone  surrogate'),
    ('not a char \ufffe\uffff', 'not a char '),
    ('astral \U0001f34e ok', 'astral \U0001f34e ok'),
    ('', ''),
])
def test_strip_illegal_xml_chars(string, expected):
    assert strip_illegal_xml_chars(string) == expected
    assert is_xml_safe(string) == (string == expected)
