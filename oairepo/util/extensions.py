"""plugin lookup over stevedore entry points

each namespace is loaded on first use and kept for the life of the process
"""
import functools

from stevedore import extension

from oairepo.exceptions import OaiRepoException


METADATA_FORMATS = 'oairepo.metadata_formats'
OAI_SETS = 'oairepo.oai_sets'
ITEM_SOURCES = 'oairepo.item_sources'
VALUE_FILTERS = 'oairepo.value_filters'
ELEMENT_POLICIES = 'oairepo.element_policies'


class ExtensionsError(OaiRepoException):
    pass


def _raise_load_failure(manager, entrypoint, exception):
    raise exception


@functools.lru_cache(maxsize=None)
def _manager(namespace):
    try:
        return extension.ExtensionManager(namespace, on_load_failure_callback=_raise_load_failure)
    except Exception as exc:
        raise ExtensionsError(f'Error loading extension namespace "{namespace}"') from exc


def get_names(namespace):
    return _manager(namespace).names()


def get(namespace, name):
    manager = _manager(namespace)
    if name not in manager:
        raise ExtensionsError(f'Unknown extension ("{namespace}", "{name}"); known: {sorted(manager.names())}')
    return manager[name].plugin


def get_all(namespace, names):
    """load the named extensions, keeping the order they were configured in
    """
    return tuple(get(namespace, name) for name in names)


def instantiate(namespace, name, *args, **kwargs):
    return get(namespace, name)(*args, **kwargs)
