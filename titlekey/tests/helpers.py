from titlekey.models import Page
from titlekey.titles import Title


def make_page(text, namespace=0, **kwargs):
    """Create a page through the ORM, which indexes it via post_save."""
    return Page.objects.create(namespace=namespace, title=Title(namespace, text).db_key, **kwargs)


def make_unindexed_page(text, namespace=0):
    """Create a page without sending post_save, so it has no title key."""
    db_key = Title(namespace, text).db_key
    Page.objects.bulk_create([Page(namespace=namespace, title=db_key)])
    return Page.objects.get(namespace=namespace, title=db_key)


class RecordingStorage:
    """Stands in for TitleKeyStorage and records the calls made to it."""

    def __init__(self, fail=None):
        self.upserts = []
        self.deletes = []
        self.fail = fail

    def upsert_many(self, titles):
        if self.fail:
            raise self.fail
        self.upserts.append(dict(titles))
        return len(titles)

    def delete_by_page_id(self, page_id):
        if self.fail:
            raise self.fail
        self.deletes.append(page_id)
        return 1
