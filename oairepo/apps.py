import logging
import threading

from django.apps import AppConfig
from django.conf import settings
from django.core import checks

from oairepo.checks import check_oaipmh_settings
from oairepo.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


class OaiRepoConfig(AppConfig):
    name = 'oairepo'
    default_auto_field = 'django.db.models.BigAutoField'

    # built on first use (so `manage.py check` can report bad settings first),
    # read-only afterward
    item_source = None
    token_store = None
    format_registry = None
    set_registry = None

    _build_lock = threading.Lock()

    def ready(self):
        checks.register(check_oaipmh_settings)

    def build(self):
        """build whatever hasn't been built yet from settings; return self
        """
        if self.is_built():
            return self
        with self._build_lock:
            self._build_missing()
        return self

    def is_built(self):
        return None not in (self.item_source, self.token_store, self.format_registry, self.set_registry)

    def _build_missing(self):
        from oairepo.oaipmh.registries import build_format_registry, build_set_registry
        from oairepo.oaipmh.tokens import TOKEN_STORES
        from oairepo.util import extensions

        if self.item_source is None:
            self.item_source = extensions.instantiate(
                extensions.ITEM_SOURCES,
                settings.OAIPMH_ITEM_SOURCE,
                **settings.OAIPMH_ITEM_SOURCE_OPTIONS,
            )
        if self.token_store is None:
            try:
                token_store_class = TOKEN_STORES[settings.OAIPMH_TOKEN_STORE]
            except KeyError:
                raise ConfigurationError(f'Unknown resumption token store in OAIPMH_TOKEN_STORE: {settings.OAIPMH_TOKEN_STORE}')
            self.token_store = token_store_class(
                expiration_minutes=settings.OAIPMH_TOKEN_EXPIRATION_MINUTES,
            )
        if self.format_registry is None:
            self.format_registry = build_format_registry(
                settings.OAIPMH_METADATA_FORMATS,
                params={
                    'expose_media': settings.OAIPMH_EXPOSE_MEDIA,
                    'append_identifier': settings.OAIPMH_APPEND_IDENTIFIER,
                    'format_uri': settings.OAIPMH_FORMAT_URI,
                },
                value_filter_keys=settings.OAIPMH_VALUE_FILTERS,
                element_policy_keys=settings.OAIPMH_DC_ELEMENT_POLICIES,
            )
        if self.set_registry is None:
            self.set_registry = build_set_registry(
                settings.OAIPMH_SET_FORMAT,
                self.item_source,
                static_sets=settings.OAIPMH_STATIC_SETS,
            )
        logger.debug('Built OAI-PMH registries for %s', settings.OAIPMH_NAMESPACE_ID)
