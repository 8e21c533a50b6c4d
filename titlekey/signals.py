"""
Page lifecycle signals for changes that do not go through a plain model save
or delete.
"""
from django.dispatch import Signal

# page_id, display_name
page_delete_started = Signal()

# display_name, page_id (None when the host only knows the name)
page_delete_completed = Signal()

# page_id, title
page_undeleted = Signal()

# old_title, new_title, old_page_id, new_page_id
page_moved = Signal()
