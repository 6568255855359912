from oairepo.metadata_formats.base import ElementPolicy


class ThesisDescriptionPolicy(ElementPolicy):
    """render a thesis statement from the Fashion Institute of Technology under
    `description.thesis` instead of `description`

    matches plain substrings, so e.g. "MS" also matches inside other words;
    kept as-is for compatibility with existing harvesters of this repository
    """

    INSTITUTION = 'Fashion Institute of Technology, State University of New York'
    DEGREES = (
        'M.A.',
        'MA',
        'M.F.A.',
        'MFA',
        'M.P.S.',
        'MPS',
        'M.S.',
        'MS',
        'M.B.A.',
        'MBA',
    )

    def element_name(self, local_name, text):
        if local_name == 'description' and self.is_thesis_statement(text):
            return 'description.thesis'
        return local_name

    def is_thesis_statement(self, text):
        return (
            bool(text)
            and self.INSTITUTION in text
            and any(degree in text for degree in self.DEGREES)
        )
