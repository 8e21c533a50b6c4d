"""
Signal receivers that feed page lifecycle events into the title key sync.
"""
from django.db.models.signals import post_delete, post_save

from titlekey.models import Page
from titlekey.signals import page_delete_completed, page_delete_started, page_moved, page_undeleted
from titlekey.storage import get_sync


def on_page_saved(sender, instance, created, **kwargs):
    # Skip fixture loading
    if kwargs.get('raw', False):
        return
    get_sync().on_save(instance.pk, instance.title_obj)


def on_page_deleted(sender, instance, **kwargs):
    # post_delete still carries the primary key, so no pre_delete record is kept
    get_sync().on_delete_complete(instance.display_name, page_id=instance.pk)


def on_delete_started(sender, page_id, display_name, **kwargs):
    get_sync().on_delete_begin(page_id, display_name)


def on_delete_completed(sender, display_name, page_id=None, **kwargs):
    get_sync().on_delete_complete(display_name, page_id=page_id)


def on_undeleted(sender, page_id, title, **kwargs):
    get_sync().on_undelete(page_id, title)


def on_moved(sender, old_title, new_title, old_page_id, new_page_id, **kwargs):
    get_sync().on_move(old_title, new_title, old_page_id, new_page_id)


def connect_handlers():
    post_save.connect(on_page_saved, sender=Page, dispatch_uid='titlekey_page_saved')
    post_delete.connect(on_page_deleted, sender=Page, dispatch_uid='titlekey_page_deleted')
    page_delete_started.connect(on_delete_started, dispatch_uid='titlekey_delete_started')
    page_delete_completed.connect(on_delete_completed, dispatch_uid='titlekey_delete_completed')
    page_undeleted.connect(on_undeleted, dispatch_uid='titlekey_undeleted')
    page_moved.connect(on_moved, dispatch_uid='titlekey_moved')
