"""
Case-insensitive title lookups backed by the titlekey table.

prefix_search() replaces the default title completion backend; near_match()
is an extra candidate tried after the plain "go to page" match has failed.
"""
import logging

from titlekey.normalizer import normalize
from titlekey.storage import TitleKeyStorage
from titlekey.titles import NS_MAIN, NS_SPECIAL, InvalidTitle, Title

logger = logging.getLogger('titlekey')


def collapse_namespaces(namespaces):
    """Pick the one namespace to search.

    Main wins whenever it is requested; otherwise the first namespace given.
    Only single-namespace search is supported.
    """
    namespaces = list(namespaces or [])
    if not namespaces or NS_MAIN in namespaces:
        return NS_MAIN
    return namespaces[0]


def prefix_search(namespaces, term, limit=10, offset=0, storage=None):
    """Titles whose folded text starts with the folded ``term``.

    Results are ordered by folded key. Returns None for a special-page-only
    search so that the host's own backend handles it.
    """
    if list(namespaces or []) == [NS_SPECIAL]:
        return None
    namespace = collapse_namespaces(namespaces)
    storage = storage or TitleKeyStorage()
    return storage.query_prefix(namespace, normalize(term), limit, offset)


def exact_match(namespace, text, storage=None):
    storage = storage or TitleKeyStorage()
    return storage.query_exact(namespace, normalize(text))


def exact_match_title(title, storage=None):
    return exact_match(title.namespace, title.text, storage=storage)


def near_match(term, storage=None):
    """Find ``McGee`` for ``mcgee``. Returns a Title or None."""
    try:
        title = Title.new_from_text(term)
    except InvalidTitle:
        logger.debug(f"Near match skipped for unparseable term {term!r}")
        return None
    return exact_match_title(title, storage=storage)
