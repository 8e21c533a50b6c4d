"""
Page titles and namespaces.

A title is a (namespace, text) pair. ``text`` is the display form with spaces;
the page table stores the database key form with underscores.
"""
import re
from collections import namedtuple

from titlekey.conf import get_setting

NS_SPECIAL = -1
NS_MAIN = 0
NS_TALK = 1
NS_USER = 2
NS_USER_TALK = 3
NS_PROJECT = 4
NS_PROJECT_TALK = 5
NS_FILE = 6
NS_FILE_TALK = 7
NS_TEMPLATE = 10
NS_TEMPLATE_TALK = 11
NS_HELP = 12
NS_HELP_TALK = 13
NS_CATEGORY = 14
NS_CATEGORY_TALK = 15

CANONICAL_NAMESPACES = {
    NS_SPECIAL: 'Special',
    NS_MAIN: '',
    NS_TALK: 'Talk',
    NS_USER: 'User',
    NS_USER_TALK: 'User talk',
    NS_PROJECT: 'Project',
    NS_PROJECT_TALK: 'Project talk',
    NS_FILE: 'File',
    NS_FILE_TALK: 'File talk',
    NS_TEMPLATE: 'Template',
    NS_TEMPLATE_TALK: 'Template talk',
    NS_HELP: 'Help',
    NS_HELP_TALK: 'Help talk',
    NS_CATEGORY: 'Category',
    NS_CATEGORY_TALK: 'Category talk',
}

MAX_TITLE_LENGTH = 255

_ILLEGAL_CHARS = re.compile(r'[#<>\[\]|{}\x00-\x1f\x7f]')
_WHITESPACE = re.compile(r'[ _\s]+')


class InvalidTitle(ValueError):
    """Raised when text cannot be parsed into a page title."""


def namespace_names():
    """Return ``{namespace_id: name}`` including site-configured namespaces."""
    names = dict(CANONICAL_NAMESPACES)
    for ns, name in get_setting('TITLEKEY_EXTRA_NAMESPACES').items():
        names[int(ns)] = name
    return names


def namespace_name(namespace):
    try:
        return namespace_names()[namespace]
    except KeyError:
        raise InvalidTitle(f"Unknown namespace {namespace}")


def namespace_by_name(name):
    """Look up a namespace id from its (case-insensitive) name, or None."""
    wanted = _WHITESPACE.sub(' ', name).strip().casefold()
    if not wanted:
        return None
    for ns, ns_name in namespace_names().items():
        if ns_name and ns_name.casefold() == wanted:
            return ns
    return None


def _capitalize(text):
    if text and get_setting('TITLEKEY_CAPITAL_LINKS'):
        return text[0].upper() + text[1:]
    return text


class Title(namedtuple('Title', ['namespace', 'text'])):
    """An immutable page title."""

    __slots__ = ()

    @classmethod
    def make_from_db_key(cls, namespace, db_key):
        """Build a title from trusted page table columns, without validation."""
        return cls(namespace, db_key.replace('_', ' '))

    @classmethod
    def new_from_text(cls, text, default_namespace=NS_MAIN):
        """
        Parse user input such as ``"talk:foo_bar"`` into a title.

        Raises InvalidTitle if the text cannot name a page.
        """
        if text is None:
            raise InvalidTitle("Empty title")
        cleaned = _WHITESPACE.sub(' ', text).strip()
        namespace = default_namespace

        if ':' in cleaned:
            prefix, rest = cleaned.split(':', 1)
            prefix_ns = namespace_by_name(prefix)
            if prefix_ns is not None:
                namespace = prefix_ns
                cleaned = rest.strip()

        if not cleaned:
            raise InvalidTitle("Empty title")
        if _ILLEGAL_CHARS.search(cleaned):
            raise InvalidTitle(f"Title contains illegal characters: {text!r}")
        if len(cleaned.encode('utf-8')) > MAX_TITLE_LENGTH:
            raise InvalidTitle(f"Title too long: {text!r}")

        return cls(namespace, _capitalize(cleaned))

    @property
    def db_key(self):
        return self.text.replace(' ', '_')

    @property
    def prefixed_text(self):
        """The fully-qualified display name, e.g. ``Talk:Foo bar``."""
        prefix = namespace_names().get(self.namespace, '')
        if prefix:
            return f"{prefix}:{self.text}"
        return self.text

    def __str__(self):
        return self.prefixed_text
