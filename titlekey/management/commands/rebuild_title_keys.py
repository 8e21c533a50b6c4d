"""
Management command to rebuild the titlekey table from the page table.
"""
from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError

from titlekey.conf import get_setting
from titlekey.storage import TitleKeyStorage, TitleKeySync


class Command(BaseCommand):
    help = 'Rebuilds titlekey table entries for all pages in DB'

    def add_arguments(self, parser):
        parser.add_argument(
            '--start',
            type=int,
            default=0,
            help='Page ID to start from',
        )
        parser.add_argument(
            '--batch-size',
            type=int,
            default=get_setting('TITLEKEY_BATCH_SIZE'),
            help='Number of pages to write per batch',
        )
        parser.add_argument(
            '--database',
            default='default',
            help='Database alias to rebuild',
        )

    def handle(self, *args, **options):
        start = options['start']
        batch_size = options['batch_size']
        if start < 0:
            raise CommandError('--start must not be negative')
        if batch_size < 1:
            raise CommandError('--batch-size must be at least 1')

        self.stdout.write('Rebuilding titlekey table...')
        sync = TitleKeySync(TitleKeyStorage(using=options['database']))

        def report(last_id):
            self.stdout.write(f'... {last_id}...')

        try:
            last_id = sync.rebuild(start=start, batch_size=batch_size, progress=report)
        except DatabaseError as e:
            raise CommandError(f'Rebuild failed: {e}')

        if last_id:
            self.stdout.write(self.style.SUCCESS(f'... {last_id} ok.'))
        else:
            self.stdout.write('... no pages.')
