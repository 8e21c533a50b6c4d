"""
Storage layer for the case-folded title index.

This module provides:
- index_storage: titlekey table reads and writes
- sync: keeping the index in step with page lifecycle events
"""

from .index_storage import TitleKeyStorage
from .sync import TitleKeySync, get_sync

__all__ = ['TitleKeyStorage', 'TitleKeySync', 'get_sync']
