from oairepo.items.base import Collection, Item, ItemQuery, ItemSource, Media, Value, as_utc  # noqa: F401
