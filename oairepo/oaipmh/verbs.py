from oairepo.oaipmh import errors as oai_errors
from oairepo.util.xml import is_xml_safe


class OAIVerb:
    def __init__(self, name, required=frozenset(), optional=frozenset(), exclusive=None):
        self.name = name
        self.required = frozenset(required)
        self.optional = frozenset(optional)
        self.exclusive = exclusive

    def __repr__(self):
        return f'OAIVerb({self.name!r})'

    @property
    def is_resumable(self):
        return self.exclusive == 'resumptionToken'

    @classmethod
    def get(cls, name):
        return VERBS_BY_NAME.get(name)

    @classmethod
    def validate(cls, **kwargs):
        """check a request's arguments against the verb's grammar

        kwargs map argument names to lists of values (as from a QueryDict);
        returns (verb, errors), with verb None if it could not be determined
        """
        errors = []
        verbs = kwargs.pop('verb', None)
        verb = None
        if not verbs or len(verbs) > 1:
            errors.append(oai_errors.BadVerb(verbs))
        else:
            verb = cls.get(verbs[0])
            if verb is None:
                errors.append(oai_errors.BadVerb(verbs))
        if errors:
            return None, errors

        keys = set(kwargs.keys())

        illegal = keys - verb.required - verb.optional - {verb.exclusive}
        for arg in sorted(illegal):
            errors.append(oai_errors.BadArgument('Illegal', arg))

        repeated = sorted(k for k, v in kwargs.items() if len(v) > 1)
        for arg in repeated:
            errors.append(oai_errors.BadArgument('Repeated', arg))

        unsafe = sorted(
            k for k, v in kwargs.items()
            if k not in illegal and not all(is_xml_safe(value) for value in v)
        )
        for arg in unsafe:
            errors.append(oai_errors.BadArgument('Invalid characters in', arg))

        if verb.exclusive and verb.exclusive in keys:
            if len(keys) > 1 and verb.exclusive not in repeated:
                errors.append(oai_errors.BadArgument('Exclusive', verb.exclusive))
        else:
            missing = verb.required - keys
            for arg in sorted(missing):
                errors.append(oai_errors.BadArgument('Required', arg))

        return verb, errors


VERBS = (
    OAIVerb('Identify'),
    OAIVerb('ListMetadataFormats', optional={'identifier'}),
    OAIVerb('ListSets', exclusive='resumptionToken'),
    OAIVerb('ListIdentifiers', required={'metadataPrefix'}, optional={'from', 'until', 'set'}, exclusive='resumptionToken'),
    OAIVerb('ListRecords', required={'metadataPrefix'}, optional={'from', 'until', 'set'}, exclusive='resumptionToken'),
    OAIVerb('GetRecord', required={'identifier', 'metadataPrefix'}),
)

VERBS_BY_NAME = {verb.name: verb for verb in VERBS}
