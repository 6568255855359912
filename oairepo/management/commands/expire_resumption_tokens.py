from django.apps import apps
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = "Delete expired OAI-PMH resumption tokens"

    def handle(self, *args, **options):
        count = apps.get_app_config('oairepo').build().token_store.expire()
        self.stdout.write(f'Deleted {count} expired resumption tokens')
