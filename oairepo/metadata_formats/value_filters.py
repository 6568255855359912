from oairepo.metadata_formats.base import ValueFilter


class StripBlankValues(ValueFilter):
    """drop values with nothing to render"""

    def filter_values_pre(self, metadata_format, item, values):
        return {
            term: [value for value in term_values if value.text or value.uri]
            for term, term_values in values.items()
        }
