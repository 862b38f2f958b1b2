"""Resolution cache of translators by namespace."""

import threading
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from gettext_commons.i18n.models import Locale

if TYPE_CHECKING:
    from gettext_commons.i18n.translator import Translator


class ResolutionCache:
    """Maps a namespace to the translators resolved for it, one per locale.

    Lists are only appended to under the lock and iterated over snapshots,
    so concurrent resolution and visiting never see a torn list.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._by_namespace: Dict[str, List["Translator"]] = {}

    def get(self, namespace: str, locale: Locale) -> Optional["Translator"]:
        """Return the translator cached for namespace whose locale is locale.

        Raises:
            ValueError: If locale is None.
        """
        if locale is None:
            raise ValueError("locale must not be None")
        with self._lock:
            translators = list(self._by_namespace.get(namespace, ()))
        for translator in translators:
            if translator.locale == locale:
                return translator
        return None

    def put(self, namespace: str, translator: "Translator") -> "Translator":
        """Cache translator under namespace.

        If another translator for the same locale was cached first (two
        threads resolving the same namespace), that one is kept.

        Returns:
            The translator now cached for (namespace, translator.locale).
        """
        with self._lock:
            translators = self._by_namespace.setdefault(namespace, [])
            for existing in translators:
                if existing is translator:
                    return existing
                if existing.locale == translator.locale:
                    return existing
            translators.append(translator)
            return translator

    def visit(self, visitor: Callable[["Translator"], None]) -> None:
        """Call visitor for every cached translator."""
        with self._lock:
            snapshot = [list(translators) for translators in self._by_namespace.values()]
        for translators in snapshot:
            for translator in translators:
                visitor(translator)

    def clear(self) -> None:
        with self._lock:
            self._by_namespace.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(len(translators) for translators in self._by_namespace.values())
