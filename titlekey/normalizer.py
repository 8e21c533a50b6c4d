"""
Title key normalization.

The normalizer is a plain callable ``normalize(text) -> key``. Which one is
used depends on the site's locale, so it is loaded from the
``TITLEKEY_NORMALIZER`` setting rather than hard-coded here.
"""
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string

from titlekey.conf import get_setting

_normalizer = None


def case_fold(text):
    """Default normalizer: full Unicode case folding."""
    return text.casefold()


def get_normalizer():
    global _normalizer
    if _normalizer is None:
        path = get_setting('TITLEKEY_NORMALIZER')
        _normalizer = import_string(path) if isinstance(path, str) else path
    return _normalizer


def reset_normalizer():
    global _normalizer
    _normalizer = None


def normalize(text):
    """Map title text to the key stored in the titlekey table."""
    return get_normalizer()(text)


@receiver(setting_changed)
def _reset_on_setting_change(setting, **kwargs):
    if setting == 'TITLEKEY_NORMALIZER':
        reset_normalizer()
