import dataclasses

from oairepo.items.base import ItemQuery


@dataclasses.dataclass(frozen=True)
class OaiSet:
    spec: str
    name: str
    description: str | None = None

    @property
    def query(self) -> ItemQuery:
        return ItemQuery(set_spec=self.spec)


class SetFormat:
    """builds the repository's set descriptors

    registered under the `oairepo.oai_sets` entry point namespace; the one
    named by settings.OAIPMH_SET_FORMAT is used
    """

    def __init__(self, item_source):
        self.item_source = item_source

    def build_sets(self):
        raise NotImplementedError


class BaseSetFormat(SetFormat):
    """one set per collection in the item source, in the order the source lists them
    """

    def build_sets(self):
        return [
            OaiSet(
                spec=collection.spec,
                name=collection.name,
                description=collection.description,
            )
            for collection in self.item_source.list_collections()
        ]
