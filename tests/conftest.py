import logging

import pytest

from django.apps import apps

from oairepo.items.memory import InMemoryItemSource
from oairepo.oaipmh.registries import build_set_registry
from oairepo.oaipmh.tokens import InMemoryResumptionTokenStore

from tests.oairepo import factories


logger = logging.getLogger(__name__)


@pytest.fixture(autouse=True)
def apply_test_settings(settings):
    settings.OAIPMH_NAMESPACE_ID = 'oai.example.org'
    settings.OAIPMH_REPOSITORY_NAME = 'Example Repository'
    settings.OAIPMH_ADMIN_EMAILS = ['oai@example.org']
    settings.OAIPMH_LIST_LIMIT = 50


@pytest.fixture
def collections():
    return [
        factories.CollectionFactory(spec='fruit', name='Fruit'),
        factories.CollectionFactory(spec='fruit:apples', name='Apples', description='Crunchy ones'),
        factories.CollectionFactory(spec='vegetables', name='Vegetables'),
    ]


@pytest.fixture
def items():
    return []


@pytest.fixture
def token_store():
    return InMemoryResumptionTokenStore(expiration_minutes=10)


@pytest.fixture
def item_source(items, collections):
    return InMemoryItemSource(items=items, collections=collections)


@pytest.fixture
def oai_app(monkeypatch, item_source, token_store):
    """point the running app at the test item source and an in-memory token store
    """
    app_config = apps.get_app_config('oairepo')
    monkeypatch.setattr(app_config, 'item_source', item_source)
    monkeypatch.setattr(app_config, 'set_registry', build_set_registry('base', item_source))
    monkeypatch.setattr(app_config, 'token_store', token_store)
    return app_config.build()
