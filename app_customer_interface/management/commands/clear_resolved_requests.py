from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from app_customer_interface.services import get_request_store


class Command(BaseCommand):
    help = 'Permanently deletes resolved waiter/bill requests'

    def add_arguments(self, parser):
        parser.add_argument(
            '--hours',
            type=int,
            default=None,
            help='Only delete requests created at least this many hours ago',
        )

    def handle(self, *args, **options):
        older_than = None
        if options['hours'] is not None:
            older_than = timezone.now() - timedelta(hours=options['hours'])

        deleted = get_request_store().purge_resolved(older_than=older_than)

        self.stdout.write(self.style.SUCCESS(f'Successfully deleted {deleted} resolved requests'))
