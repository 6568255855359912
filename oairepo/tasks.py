import logging

import celery

from django.apps import apps


logger = logging.getLogger(__name__)


@celery.shared_task(bind=True)
def expire_resumption_tokens(self):
    """Delete resumption tokens past their expiration, to bound the token store's growth
    """
    count = apps.get_app_config('oairepo').build().token_store.expire()
    if count:
        logger.info('Expired %d resumption tokens', count)
    return count
