"""
Management command to verify titlekey index consistency.

Compares pages with rows in the titlekey table to identify orphaned rows
or pages that are missing from the index.
"""
from django.core.management.base import BaseCommand

from titlekey.models import Page
from titlekey.storage import TitleKeyStorage


class Command(BaseCommand):
    help = 'Verify titlekey index consistency and optionally fix issues'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Automatically fix any inconsistencies found',
        )

    def _sample(self, ids):
        ids = sorted(ids)
        return f'{", ".join(str(i) for i in ids[:5])}{"..." if len(ids) > 5 else ""}'

    def handle(self, *args, **options):
        fix_issues = options.get('fix', False)
        storage = TitleKeyStorage()

        self.stdout.write('Verifying titlekey index consistency...\n')
        self.stdout.write(f'Found {Page.objects.count()} pages and {storage.count()} title keys')

        orphaned = storage.orphaned_page_ids()
        missing = storage.missing_page_ids()

        self.stdout.write('\n' + '=' * 60)
        if not orphaned and not missing:
            self.stdout.write(self.style.SUCCESS('\nTitlekey index is consistent!'))
            return

        if orphaned:
            self.stdout.write(self.style.ERROR(
                f'\nFound {len(orphaned)} orphaned title keys: {self._sample(orphaned)}'
            ))
        if missing:
            self.stdout.write(self.style.WARNING(
                f'\nFound {len(missing)} pages missing from the index: {self._sample(missing)}'
            ))

        if not fix_issues:
            self.stdout.write('\nRun with --fix flag to automatically fix these issues:')
            self.stdout.write('  python manage.py verify_title_keys --fix\n')
            return

        fixed_count = 0
        for page_id in sorted(orphaned):
            fixed_count += storage.delete_by_page_id(page_id)
            self.stdout.write(f'  Removed: {page_id}')

        if missing:
            pages = list(Page.objects.filter(id__in=missing).order_by('id'))
            fixed_count += storage.upsert_many({page.id: page.title_obj for page in pages})
            for page in pages:
                self.stdout.write(f'  Added: {page.id} - {page.display_name[:50]}')

        self.stdout.write(self.style.SUCCESS(f'\nFixed {fixed_count} inconsistencies!'))
