import abc
import dataclasses
import datetime
import logging
import threading
import uuid

from django.db import transaction
from django.utils import timezone

from oairepo.exceptions import ResumptionTokenNotFound


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ResumptionContext:
    """everything needed to continue a list request from where its last page ended

    `from_arg` and `until_arg` are kept as the harvester sent them, so the
    filters are re-parsed with the same granularity on resumption
    """
    verb: str
    cursor: int
    complete_list_size: int
    metadata_prefix: str | None = None
    from_arg: str | None = None
    until_arg: str | None = None
    set_spec: str | None = None
    token_id: str | None = None
    expiration: datetime.datetime | None = None

    def is_expired(self, now=None):
        now = now or timezone.now()
        return self.expiration is not None and self.expiration <= now

    def as_arguments(self):
        """the original request arguments this context was minted from
        """
        arguments = {}
        if self.metadata_prefix:
            arguments['metadataPrefix'] = self.metadata_prefix
        if self.from_arg:
            arguments['from'] = self.from_arg
        if self.until_arg:
            arguments['until'] = self.until_arg
        if self.set_spec:
            arguments['set'] = self.set_spec
        return arguments


def new_token_id():
    return uuid.uuid4().hex


class ResumptionTokenStore(abc.ABC):
    """keyed store of resumption contexts

    tokens may be resolved any number of times until they expire; expiry is
    checked on resolve, and `create` sweeps out whatever has already expired
    """

    def __init__(self, expiration_minutes=10):
        self.expiration = datetime.timedelta(minutes=expiration_minutes)

    def create(self, context: ResumptionContext) -> str:
        """store the context under a new token id, and return the id
        """
        return self.mint(context).token_id

    def mint(self, context: ResumptionContext) -> ResumptionContext:
        """store the context under a new token id; return the stored context,
        with its `token_id` and `expiration` filled in
        """
        now = timezone.now()
        self.expire(now)
        _stored = dataclasses.replace(
            context,
            token_id=new_token_id(),
            expiration=now + self.expiration,
        )
        self._save(_stored)
        logger.debug('Created resumption token %s (cursor %d of %d)', _stored.token_id, _stored.cursor, _stored.complete_list_size)
        return _stored

    def resolve(self, token_id: str) -> ResumptionContext:
        context = self._load(token_id)
        if context is None or context.is_expired():
            raise ResumptionTokenNotFound(token_id)
        return context

    @abc.abstractmethod
    def expire(self, now: datetime.datetime | None = None) -> int:
        """delete every token expired as of `now`; return how many were deleted
        """
        raise NotImplementedError

    @abc.abstractmethod
    def _save(self, context: ResumptionContext) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def _load(self, token_id: str) -> ResumptionContext | None:
        raise NotImplementedError


class InMemoryResumptionTokenStore(ResumptionTokenStore):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._lock = threading.Lock()
        self._contexts = {}

    def __len__(self):
        with self._lock:
            return len(self._contexts)

    def expire(self, now=None):
        now = now or timezone.now()
        with self._lock:
            _expired = [
                token_id
                for token_id, context in self._contexts.items()
                if context.is_expired(now)
            ]
            for token_id in _expired:
                del self._contexts[token_id]
        return len(_expired)

    def _save(self, context):
        with self._lock:
            if context.token_id in self._contexts:
                raise ValueError(f'duplicate resumption token id: {context.token_id}')
            self._contexts[context.token_id] = context

    def _load(self, token_id):
        with self._lock:
            return self._contexts.get(token_id)


class DatabaseResumptionTokenStore(ResumptionTokenStore):
    def expire(self, now=None):
        from oairepo.models import ResumptionToken
        now = now or timezone.now()
        _deleted, _ = ResumptionToken.objects.filter(expiration__lte=now).delete()
        if _deleted:
            logger.info('Deleted %d expired resumption tokens', _deleted)
        return _deleted

    def _save(self, context):
        from oairepo.models import ResumptionToken
        with transaction.atomic():
            ResumptionToken.objects.create_from_context(context)

    def _load(self, token_id):
        from oairepo.models import ResumptionToken
        try:
            return ResumptionToken.objects.get(token_id=token_id).as_context()
        except ResumptionToken.DoesNotExist:
            return None


TOKEN_STORES = {
    'database': DatabaseResumptionTokenStore,
    'memory': InMemoryResumptionTokenStore,
}
