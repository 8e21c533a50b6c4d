"""
TitleKey settings with their defaults.
"""
from django.conf import settings

DEFAULTS = {
    'TITLEKEY_NORMALIZER': 'titlekey.normalizer.case_fold',
    'TITLEKEY_BATCH_SIZE': 1000,
    'TITLEKEY_BATCH_PAUSE': 0,
    'TITLEKEY_REPLICATION_WAIT': None,
    'TITLEKEY_REBUILD_ON_MIGRATE': True,
    'TITLEKEY_SEARCH_PRIORITY': 0,
    'TITLEKEY_CAPITAL_LINKS': True,
    'TITLEKEY_EXTRA_NAMESPACES': {},
    'TITLEKEY_MAX_LIMIT': 100,
}


def get_setting(name):
    """Return a TitleKey setting, falling back to its default."""
    return getattr(settings, name, DEFAULTS[name])
