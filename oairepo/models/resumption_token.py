from django.db import models

from oairepo.oaipmh.tokens import ResumptionContext


class ResumptionTokenManager(models.Manager):
    def create_from_context(self, context: ResumptionContext):
        return self.create(
            token_id=context.token_id,
            verb=context.verb,
            metadata_prefix=context.metadata_prefix or '',
            from_arg=context.from_arg or '',
            until_arg=context.until_arg or '',
            set_spec=context.set_spec or '',
            cursor=context.cursor,
            complete_list_size=context.complete_list_size,
            expiration=context.expiration,
        )


class ResumptionToken(models.Model):
    token_id = models.CharField(max_length=32, unique=True)
    verb = models.TextField()
    metadata_prefix = models.TextField(blank=True)
    from_arg = models.TextField(blank=True)
    until_arg = models.TextField(blank=True)
    set_spec = models.TextField(blank=True)
    cursor = models.PositiveIntegerField()
    complete_list_size = models.PositiveIntegerField()
    created = models.DateTimeField(auto_now_add=True)
    expiration = models.DateTimeField()

    objects = ResumptionTokenManager()

    class Meta:
        indexes = [
            models.Index(fields=['expiration'], name='oairepo_token_expiration_idx'),
        ]

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f'token_id="{self.token_id}", '
            f'verb="{self.verb}", '
            f'cursor={self.cursor}, '
            f'expiration="{self.expiration.isoformat(timespec="seconds")}"'
            ')'
        )

    def __str__(self):
        return repr(self)

    def as_context(self) -> ResumptionContext:
        return ResumptionContext(
            token_id=self.token_id,
            verb=self.verb,
            metadata_prefix=self.metadata_prefix or None,
            from_arg=self.from_arg or None,
            until_arg=self.until_arg or None,
            set_spec=self.set_spec or None,
            cursor=self.cursor,
            complete_list_size=self.complete_list_size,
            expiration=self.expiration,
        )
