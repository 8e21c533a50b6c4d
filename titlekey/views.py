from django.http import JsonResponse
from django.shortcuts import redirect
from django.urls import reverse

from .conf import get_setting
from .models import Page
from .registry import search_hooks
from .titles import NS_MAIN, InvalidTitle, Title


def _int_param(request, name, default):
    value = request.GET.get(name, '')
    if value == '':
        return default
    return int(value)


def _parse_namespaces(raw):
    if not raw:
        return [NS_MAIN]
    return [int(ns) for ns in raw.split('|') if ns.strip()]


def default_prefix_search(namespaces, term, limit, offset):
    """Byte-exact title prefix match, used when no registered backend answers."""
    try:
        title = Title.new_from_text(term, default_namespace=namespaces[0] if namespaces else NS_MAIN)
    except InvalidTitle:
        return []
    # A range scan, since LIKE is case-insensitive on some backends
    pages = (
        Page.objects.filter(
            namespace=title.namespace,
            title__gte=title.db_key,
            title__lt=title.db_key + '\U0010ffff',
        )
        .order_by('title')
        .values_list('namespace', 'title')
    )[offset:offset + limit]
    return [Title.make_from_db_key(ns, db_key) for ns, db_key in pages]


def exact_page(term):
    """The page whose title is exactly ``term``, or None."""
    try:
        title = Title.new_from_text(term)
    except InvalidTitle:
        return None
    if Page.objects.filter(namespace=title.namespace, title=title.db_key).exists():
        return title
    return None


def suggest(request):
    """OpenSearch-style title completion: ``[term, [titles...]]``."""
    if request.method != 'GET':
        return JsonResponse({'success': False, 'error': 'GET required'}, status=400)

    term = request.GET.get('search', '')
    try:
        namespaces = _parse_namespaces(request.GET.get('namespace', ''))
        limit = _int_param(request, 'limit', 10)
        offset = _int_param(request, 'offset', 0)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid integer parameter'}, status=400)

    limit = max(1, min(limit, get_setting('TITLEKEY_MAX_LIMIT')))
    offset = max(0, offset)

    titles = search_hooks.run_prefix_search(
        namespaces, term, limit, offset, default=default_prefix_search
    )
    return JsonResponse([term, [t.prefixed_text for t in titles]], safe=False)


def go(request):
    """Jump to a page by name, ignoring case when there is no exact match."""
    term = request.GET.get('search', '').strip()
    if not term:
        return JsonResponse({'success': False, 'error': 'Search term required'}, status=400)

    title = exact_page(term) or search_hooks.run_near_match(term)
    if title is None:
        return JsonResponse({'success': False, 'error': f'No page matches "{term}"'}, status=404)
    return redirect(reverse('page_view', args=[title.prefixed_text.replace(' ', '_')]))


def page_view(request, title):
    try:
        parsed = Title.new_from_text(title)
    except InvalidTitle:
        return JsonResponse({'success': False, 'error': 'Invalid title'}, status=400)

    page = Page.objects.filter(namespace=parsed.namespace, title=parsed.db_key).first()
    if page is None:
        return JsonResponse({'success': False, 'error': 'Page not found'}, status=404)
    return JsonResponse({
        'success': True,
        'id': page.id,
        'title': page.display_name,
        'namespace': page.namespace,
        'is_redirect': page.is_redirect,
        'content': page.content,
    })
