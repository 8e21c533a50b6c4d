"""
Synchronization between the page table and the titlekey index.

Lifecycle callbacks never raise: the index is best-effort and a failed write
is logged and left for the next rebuild to repair.
"""
import logging

from titlekey.conf import get_setting
from .index_storage import TitleKeyStorage

logger = logging.getLogger('titlekey')


class TitleKeySync:
    """Keeps the titlekey table in step with page saves, deletes and moves."""

    def __init__(self, storage=None):
        self.storage = storage or TitleKeyStorage()
        # display name -> page id, between delete start and delete completion
        self.pending_deletes = {}

    def on_save(self, page_id, title):
        """Page created or edited."""
        try:
            self.storage.upsert_many({page_id: title})
        except Exception as e:
            logger.error(f"Failed to update title key for page {page_id}: {e}")

    def on_delete_begin(self, page_id, display_name):
        """Remember which page is going away while its id is still known."""
        self.pending_deletes[display_name] = page_id

    def on_delete_complete(self, display_name, page_id=None):
        """Page deletion finished.

        When the completion event carries the page id it is used directly and
        any pending record is dropped. Otherwise the id recorded by
        on_delete_begin is used; without one there is nothing to remove.
        """
        pending_id = self.pending_deletes.pop(display_name, None)
        if page_id is None:
            page_id = pending_id
        if page_id is None:
            logger.debug(f"No pending delete recorded for {display_name!r}")
            return

        try:
            self.storage.delete_by_page_id(page_id)
        except Exception as e:
            logger.error(f"Failed to remove title key for page {page_id} ({display_name}): {e}")

    def on_undelete(self, page_id, title):
        """Page restored from the deletion archive."""
        try:
            self.storage.upsert_many({page_id: title})
        except Exception as e:
            logger.error(f"Failed to restore title key for page {page_id}: {e}")

    def on_move(self, old_title, new_title, old_page_id, new_page_id):
        """Page renamed from ``old_title`` to ``new_title``.

        ``old_page_id`` is the redirect left at the old title, or None if no
        redirect was created. Both rows are written in one batch.
        """
        titles = {new_page_id: new_title}
        if old_page_id is not None and old_page_id != new_page_id:
            titles[old_page_id] = old_title
        try:
            self.storage.upsert_many(titles)
        except Exception as e:
            logger.error(
                f"Failed to update title keys for move {old_title} -> {new_title} "
                f"(pages {old_page_id}, {new_page_id}): {e}"
            )

    def rebuild(self, start=0, batch_size=None, progress=None):
        """Rewrite key rows for every page with id > start.

        Pages are processed in id order, one batch at a time, waiting for
        replication after each batch. Returns the last page id processed,
        or 0 if there were none. Storage errors propagate.
        """
        batch_size = batch_size or get_setting('TITLEKEY_BATCH_SIZE')
        last_id = 0
        for batch in self.storage.iter_pages(start=start, batch_size=batch_size):
            self.storage.upsert_many(dict(batch))
            last_id = batch[-1][0]
            self.storage.wait_for_replication()
            if progress:
                progress(last_id)
        logger.info(f"Rebuilt title keys from page {start} through {last_id}")
        return last_id


_sync = TitleKeySync()


def get_sync():
    """The process-wide sync instance used by signal handlers."""
    return _sync
