"""
Search hook registration.

Completion backends and near-match providers are registered with an explicit
priority. Higher priorities run first; equal priorities keep registration
order. A backend returning None passes the request on to the next one.
"""
import logging

logger = logging.getLogger('titlekey')


class SearchHooks:
    def __init__(self):
        self._prefix_backends = []
        self._near_match_providers = []
        self._counter = 0

    def _add(self, hooks, name, func, priority):
        hooks[:] = [h for h in hooks if h[2] != name]
        self._counter += 1
        hooks.append((-priority, self._counter, name, func))
        hooks.sort(key=lambda h: (h[0], h[1]))

    def register_prefix_backend(self, name, func, priority=0):
        """Register ``func(namespaces, term, limit, offset)``."""
        self._add(self._prefix_backends, name, func, priority)

    def register_near_match(self, name, func, priority=0):
        """Register ``func(term)`` returning a Title or None."""
        self._add(self._near_match_providers, name, func, priority)

    def unregister(self, name):
        self._prefix_backends[:] = [h for h in self._prefix_backends if h[2] != name]
        self._near_match_providers[:] = [h for h in self._near_match_providers if h[2] != name]

    def prefix_backends(self):
        return [h[2] for h in self._prefix_backends]

    def near_match_providers(self):
        return [h[2] for h in self._near_match_providers]

    def run_prefix_search(self, namespaces, term, limit, offset=0, default=None):
        for _, _, _, func in self._prefix_backends:
            results = func(namespaces, term, limit, offset)
            if results is not None:
                return results
        if default is not None:
            return default(namespaces, term, limit, offset)
        return []

    def run_near_match(self, term):
        for _, _, name, func in self._near_match_providers:
            match = func(term)
            if match is not None:
                logger.debug(f"Near match for {term!r} from {name}: {match}")
                return match
        return None


search_hooks = SearchHooks()
