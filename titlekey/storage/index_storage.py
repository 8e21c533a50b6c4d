"""
Index storage layer - titlekey table operations.
"""
import logging
import time

from django.db import transaction
from django.utils.module_loading import import_string

from titlekey.conf import get_setting
from titlekey.models import Page, TitleKey
from titlekey.normalizer import normalize
from titlekey.titles import Title

logger = logging.getLogger('titlekey')


def _as_title(value):
    if isinstance(value, Title):
        return value
    namespace, text = value
    return Title(namespace, text)


class TitleKeyStorage:
    """Reads and writes case-folded title keys."""

    def __init__(self, using=None):
        self.using = using

    def _keys(self):
        qs = TitleKey.objects.all()
        if self.using:
            qs = qs.using(self.using)
        return qs

    def _pages(self):
        qs = Page.objects.all()
        if self.using:
            qs = qs.using(self.using)
        return qs

    def upsert_many(self, titles):
        """Replace the key rows for every ``page_id -> title`` in ``titles``.

        Titles may be Title objects or ``(namespace, text)`` pairs. All rows are
        written in one statement; pages not mentioned are untouched.
        """
        if not titles:
            return 0

        rows = []
        for page_id, value in titles.items():
            title = _as_title(value)
            rows.append(TitleKey(
                page_id=page_id,
                namespace=title.namespace,
                key=normalize(title.text),
            ))

        with transaction.atomic(using=self.using):
            TitleKey.objects.using(self.using).bulk_create(
                rows,
                update_conflicts=True,
                unique_fields=['page'],
                update_fields=['namespace', 'key'],
            )
        logger.debug(f"Upserted {len(rows)} title keys")
        return len(rows)

    def delete_by_page_id(self, page_id):
        """Remove the row for ``page_id``. A missing row is not an error."""
        with transaction.atomic(using=self.using):
            deleted, _ = self._keys().filter(page_id=page_id).delete()
        return deleted

    def query_prefix(self, namespace, key_prefix, limit, offset=0):
        """Titles in ``namespace`` whose key starts with ``key_prefix``, by key."""
        if limit <= 0:
            return []
        rows = (
            self._keys()
            .filter(namespace=namespace, key__startswith=key_prefix)
            .order_by('key', 'page_id')
            .values_list('page__namespace', 'page__title')
        )[offset:offset + limit]
        return [Title.make_from_db_key(ns, db_key) for ns, db_key in rows]

    def query_exact(self, namespace, key):
        """The first title whose key equals ``key``, lowest page id winning."""
        row = (
            self._keys()
            .filter(namespace=namespace, key=key)
            .order_by('page_id')
            .values_list('page__namespace', 'page__title')
            .first()
        )
        if row is None:
            return None
        return Title.make_from_db_key(*row)

    def iter_pages(self, start=0, batch_size=1000):
        """Yield batches of ``(page_id, Title)`` for pages with id > start."""
        last_id = start
        while True:
            batch = list(
                self._pages()
                .filter(id__gt=last_id)
                .order_by('id')
                .values_list('id', 'namespace', 'title')[:batch_size]
            )
            if not batch:
                return
            yield [(page_id, Title.make_from_db_key(ns, db_key)) for page_id, ns, db_key in batch]
            last_id = batch[-1][0]
            if len(batch) < batch_size:
                return

    def max_page_id(self):
        return self._pages().order_by('-id').values_list('id', flat=True).first() or 0

    def wait_for_replication(self):
        """Block until replicas have caught up with the writes issued so far."""
        waiter = get_setting('TITLEKEY_REPLICATION_WAIT')
        if waiter:
            if isinstance(waiter, str):
                waiter = import_string(waiter)
            waiter(self.using)
            return
        pause = get_setting('TITLEKEY_BATCH_PAUSE')
        if pause:
            time.sleep(pause)

    def orphaned_page_ids(self):
        """Ids with a key row but no page."""
        live = self._pages().values('id')
        return set(self._keys().exclude(page_id__in=live).values_list('page_id', flat=True))

    def missing_page_ids(self):
        """Ids of pages without a key row."""
        indexed = self._keys().values('page_id')
        return set(self._pages().exclude(id__in=indexed).values_list('id', flat=True))

    def count(self):
        return self._keys().count()
