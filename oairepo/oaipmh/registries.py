import logging
import types

from oairepo.exceptions import ConfigurationError
from oairepo.oai_sets.base import OaiSet
from oairepo.util import extensions


logger = logging.getLogger(__name__)


class FormatRegistry:
    """read-only mapping of `metadataPrefix` to MetadataFormat, in configured order
    """

    def __init__(self, metadata_formats):
        _formats = {}
        for metadata_format in metadata_formats:
            if metadata_format.prefix in _formats:
                raise ConfigurationError(f'duplicate metadataPrefix: {metadata_format.prefix}')
            _formats[metadata_format.prefix] = metadata_format
        self._formats = types.MappingProxyType(_formats)

    def __contains__(self, prefix):
        return prefix in self._formats

    def __iter__(self):
        return iter(self._formats.values())

    def __len__(self):
        return len(self._formats)

    def get(self, prefix):
        return self._formats.get(prefix)

    def applicable_to(self, item):
        return [
            metadata_format
            for metadata_format in self
            if metadata_format.can_disseminate(item)
        ]


class SetRegistry:
    """read-only mapping of setSpec to OaiSet, sorted by setSpec
    """

    def __init__(self, oai_sets):
        _sets = {}
        for oai_set in sorted(oai_sets, key=lambda s: s.spec):
            if oai_set.spec in _sets:
                raise ConfigurationError(f'duplicate setSpec: {oai_set.spec}')
            _sets[oai_set.spec] = oai_set
        self._sets = types.MappingProxyType(_sets)
        self._specs = tuple(_sets.keys())

    def __contains__(self, spec):
        return spec in self._sets

    def __len__(self):
        return len(self._sets)

    def get(self, spec):
        return self._sets.get(spec)

    def page(self, offset, limit):
        return [self._sets[spec] for spec in self._specs[offset:offset + limit]]


def build_format_registry(format_keys, params=None, value_filter_keys=(), element_policy_keys=()):
    value_filters = [
        filter_class()
        for filter_class in extensions.get_all(extensions.VALUE_FILTERS, value_filter_keys)
    ]
    element_policies = [
        policy_class()
        for policy_class in extensions.get_all(extensions.ELEMENT_POLICIES, element_policy_keys)
    ]
    metadata_formats = [
        extensions.instantiate(
            extensions.METADATA_FORMATS,
            format_key,
            params,
            value_filters=value_filters,
            element_policies=element_policies,
        )
        for format_key in format_keys
    ]
    logger.info('Registered metadata formats: %s', ', '.join(f.prefix for f in metadata_formats))
    return FormatRegistry(metadata_formats)


def build_set_registry(set_format_key, item_source, static_sets=None):
    oai_sets = []
    if set_format_key:
        set_format = extensions.instantiate(extensions.OAI_SETS, set_format_key, item_source)
        oai_sets.extend(set_format.build_sets())
    for spec, set_info in (static_sets or {}).items():
        oai_sets.append(OaiSet(
            spec=spec,
            name=set_info.get('name', spec),
            description=set_info.get('description'),
        ))
    logger.info('Registered %d OAI sets', len(oai_sets))
    return SetRegistry(oai_sets)
