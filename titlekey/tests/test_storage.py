from django.test import TestCase, override_settings

from titlekey.models import TitleKey
from titlekey.storage import TitleKeyStorage
from titlekey.titles import Title

from .helpers import make_unindexed_page

_wait_calls = []


def record_wait(using):
    _wait_calls.append(using)


class UpsertTests(TestCase):

    def setUp(self):
        self.storage = TitleKeyStorage()

    def test_empty_upsert_issues_no_query(self):
        with self.assertNumQueries(0):
            self.assertEqual(self.storage.upsert_many({}), 0)

    def test_upsert_stores_folded_key(self):
        page = make_unindexed_page('McGee')
        self.storage.upsert_many({page.pk: page.title_obj})
        row = TitleKey.objects.get(page_id=page.pk)
        self.assertEqual(row.namespace, 0)
        self.assertEqual(row.key, 'mcgee')

    def test_upsert_accepts_pairs(self):
        page = make_unindexed_page('Straße', namespace=1)
        self.storage.upsert_many({page.pk: (1, 'Straße')})
        self.assertEqual(TitleKey.objects.get(page_id=page.pk).key, 'strasse')

    def test_upsert_is_idempotent(self):
        page = make_unindexed_page('Apple')
        titles = {page.pk: page.title_obj}
        self.storage.upsert_many(titles)
        first = list(TitleKey.objects.values_list('page_id', 'namespace', 'key'))
        self.storage.upsert_many(titles)
        self.assertEqual(list(TitleKey.objects.values_list('page_id', 'namespace', 'key')), first)

    def test_upsert_overwrites_existing_row(self):
        page = make_unindexed_page('Apple')
        self.storage.upsert_many({page.pk: Title(0, 'Apple')})
        self.storage.upsert_many({page.pk: Title(2, 'Pear')})
        self.assertEqual(TitleKey.objects.filter(page_id=page.pk).count(), 1)
        row = TitleKey.objects.get(page_id=page.pk)
        self.assertEqual((row.namespace, row.key), (2, 'pear'))

    def test_upsert_leaves_other_rows_alone(self):
        a = make_unindexed_page('Alpha')
        b = make_unindexed_page('Beta')
        self.storage.upsert_many({a.pk: a.title_obj, b.pk: b.title_obj})
        self.storage.upsert_many({a.pk: Title(0, 'Gamma')})
        self.assertEqual(TitleKey.objects.get(page_id=b.pk).key, 'beta')

    @override_settings(TITLEKEY_NORMALIZER='titlekey.tests.test_storage.upper_key')
    def test_normalizer_is_pluggable(self):
        page = make_unindexed_page('McGee')
        self.storage.upsert_many({page.pk: page.title_obj})
        self.assertEqual(TitleKey.objects.get(page_id=page.pk).key, 'MCGEE')


def upper_key(text):
    return text.upper()


class DeleteTests(TestCase):

    def test_delete_existing_and_missing(self):
        storage = TitleKeyStorage()
        page = make_unindexed_page('Apple')
        storage.upsert_many({page.pk: page.title_obj})
        self.assertEqual(storage.delete_by_page_id(page.pk), 1)
        self.assertFalse(TitleKey.objects.filter(page_id=page.pk).exists())
        self.assertEqual(storage.delete_by_page_id(page.pk), 0)


class QueryTests(TestCase):

    def setUp(self):
        self.storage = TitleKeyStorage()
        pages = [
            make_unindexed_page('banana'),
            make_unindexed_page('Apple2'),
            make_unindexed_page('apple'),
            make_unindexed_page('Applesauce', namespace=1),
        ]
        self.storage.upsert_many({p.pk: p.title_obj for p in pages})

    def test_prefix_ordered_by_key(self):
        results = self.storage.query_prefix(0, 'app', 10)
        self.assertEqual(results, [Title(0, 'apple'), Title(0, 'Apple2')])

    def test_prefix_respects_namespace(self):
        self.assertEqual(self.storage.query_prefix(1, 'app', 10), [Title(1, 'Applesauce')])

    def test_prefix_pagination(self):
        self.assertEqual(self.storage.query_prefix(0, '', 2), [Title(0, 'apple'), Title(0, 'Apple2')])
        self.assertEqual(self.storage.query_prefix(0, '', 2, offset=2), [Title(0, 'banana')])
        self.assertEqual(self.storage.query_prefix(0, '', 0), [])

    def test_prefix_escapes_like_wildcards(self):
        self.assertEqual(self.storage.query_prefix(0, 'a%', 10), [])
        self.assertEqual(self.storage.query_prefix(0, '_pple', 10), [])

    def test_exact(self):
        self.assertEqual(self.storage.query_exact(0, 'apple2'), Title(0, 'Apple2'))
        self.assertIsNone(self.storage.query_exact(1, 'apple2'))
        self.assertIsNone(self.storage.query_exact(0, 'app'))

    def test_exact_collision_is_stable(self):
        first = make_unindexed_page('McGee')
        second = make_unindexed_page('MCGEE')
        self.storage.upsert_many({second.pk: second.title_obj, first.pk: first.title_obj})
        for _ in range(3):
            self.assertEqual(self.storage.query_exact(0, 'mcgee'), Title(0, 'McGee'))

    def test_vanished_pages_are_skipped(self):
        TitleKey.objects.create(page_id=99999, namespace=0, key='apple ghost')
        self.assertEqual(len(self.storage.query_prefix(0, 'apple', 10)), 2)
        self.assertIsNone(self.storage.query_exact(0, 'apple ghost'))
        self.assertEqual(self.storage.orphaned_page_ids(), {99999})


class PageIterationTests(TestCase):

    def setUp(self):
        self.storage = TitleKeyStorage()
        self.pages = [make_unindexed_page(f'Page {i}') for i in range(5)]

    def test_batches_in_id_order(self):
        batches = list(self.storage.iter_pages(batch_size=2))
        self.assertEqual([len(b) for b in batches], [2, 2, 1])
        ids = [page_id for batch in batches for page_id, _ in batch]
        self.assertEqual(ids, sorted(p.pk for p in self.pages))

    def test_start_is_exclusive(self):
        start = self.pages[1].pk
        ids = [page_id for batch in self.storage.iter_pages(start=start) for page_id, _ in batch]
        self.assertEqual(ids, [p.pk for p in self.pages[2:]])

    def test_missing_page_ids(self):
        self.assertEqual(self.storage.missing_page_ids(), {p.pk for p in self.pages})
        self.assertEqual(self.storage.max_page_id(), self.pages[-1].pk)

    @override_settings(TITLEKEY_REPLICATION_WAIT='titlekey.tests.test_storage.record_wait')
    def test_replication_wait_hook(self):
        _wait_calls.clear()
        self.storage.wait_for_replication()
        self.assertEqual(_wait_calls, [None])
