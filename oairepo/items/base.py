import abc
import dataclasses
import datetime
import typing


def as_utc(dt: datetime.datetime) -> datetime.datetime:
    """naive datetimes are taken to be in UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt


@dataclasses.dataclass(frozen=True)
class Value:
    """one value of one property on an item

    `annotation` holds a nested sub-record attached to the value, mapping a
    vocabulary term to its ordered values (e.g. `{'bf:role': ('editor',)}`)
    """
    text: str = ''
    type: str = 'literal'
    uri: str | None = None
    label: str | None = None
    lang: str | None = None
    annotation: typing.Mapping[str, tuple[str, ...]] = dataclasses.field(default_factory=dict)

    def annotation_values(self, term: str) -> tuple[str, ...]:
        return tuple(self.annotation.get(term, ()))


@dataclasses.dataclass(frozen=True)
class Media:
    original_url: str
    ingester: str = 'upload'
    media_type: str | None = None
    media_data: typing.Mapping[str, typing.Any] = dataclasses.field(default_factory=dict)
    thumbnail_urls: typing.Mapping[str, str] = dataclasses.field(default_factory=dict)
    identifier: str | None = None

    @property
    def has_thumbnails(self) -> bool:
        return bool(self.thumbnail_urls)

    def thumbnail_url(self, size: str) -> str | None:
        return self.thumbnail_urls.get(size)


@dataclasses.dataclass(frozen=True)
class Item:
    identifier: str
    modified: datetime.datetime
    set_specs: tuple[str, ...] = ()
    values: typing.Mapping[str, tuple[Value, ...]] = dataclasses.field(default_factory=dict)
    media: tuple[Media, ...] = ()
    thumbnail_url: str | None = None
    url: str | None = None
    api_url: str | None = None
    is_deleted: bool = False

    @property
    def primary_media(self) -> Media | None:
        return self.media[0] if self.media else None

    def term_values(self, term: str) -> tuple[Value, ...]:
        return tuple(self.values.get(term, ()))

    def in_set(self, set_spec: str) -> bool:
        # set membership is hierarchical: `a` contains everything in `a:b`
        return any(
            _spec == set_spec or _spec.startswith(f'{set_spec}:')
            for _spec in self.set_specs
        )


@dataclasses.dataclass(frozen=True)
class ItemQuery:
    """filter over items; both date bounds inclusive
    """
    from_date: datetime.datetime | None = None
    until_date: datetime.datetime | None = None
    set_spec: str | None = None

    def matches(self, item: Item) -> bool:
        if item.is_deleted:
            return False
        modified = as_utc(item.modified)
        if self.from_date is not None and modified < self.from_date:
            return False
        if self.until_date is not None and modified > self.until_date:
            return False
        if self.set_spec is not None and not item.in_set(self.set_spec):
            return False
        return True


@dataclasses.dataclass(frozen=True)
class Collection:
    spec: str
    name: str
    description: str | None = None


class ItemSource(abc.ABC):
    """the content repository, as seen by the OAI-PMH engine

    implementations own their items; the engine only reads. failures of the
    underlying storage should propagate -- they are not protocol errors.
    """

    def __init__(self, **options):
        self.options = options

    @abc.abstractmethod
    def get_item(self, identifier: str) -> Item:
        raise NotImplementedError(f'''
            pls implement get_item on {self.__class__.__qualname__}
            to return the non-deleted item with the given local identifier,
            or raise oairepo.exceptions.ItemDoesNotExist
        ''')

    @abc.abstractmethod
    def count_items(self, query: ItemQuery) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def list_items(self, query: ItemQuery, offset: int, limit: int) -> list[Item]:
        raise NotImplementedError(f'''
            pls implement list_items on {self.__class__.__qualname__}
            to return non-deleted items matching the query, ordered by
            identifier (ascending, no ties), sliced [offset:offset + limit]
        ''')

    @abc.abstractmethod
    def earliest_datestamp(self) -> datetime.datetime | None:
        raise NotImplementedError

    def list_collections(self) -> typing.Iterable[Collection]:
        return ()
