"""Process-wide locale broadcasting.

The LocaleBroadcaster tracks every translator created through the resolver
and switches all of them to a new locale at once, then notifies locale
change listeners. It is created on first use and lives for the lifetime of
the process; reset_instance() exists for test isolation.

Listeners are callables taking a LocaleChangeEvent, or objects with a
locale_changed(event) method.
"""

import inspect
import threading
import weakref
from typing import Any, Callable, List, Optional, Union

from gettext_commons.i18n.catalogs import CatalogNotFound
from gettext_commons.i18n.models import Locale, LocaleChangeEvent, LocaleLike
from gettext_commons.i18n.translator import Translator
from gettext_commons.logging import get_module_logger

logger = get_module_logger()

LocaleChangeListener = Union[Callable[[LocaleChangeEvent], Any], Any]


class _WeakListener:
    """Holds a listener without keeping it alive.

    Bound methods are held through WeakMethod, so the listener lives as long
    as its owner rather than the short-lived bound method object.
    """

    def __init__(self, listener: LocaleChangeListener):
        if inspect.ismethod(listener):
            self._ref = weakref.WeakMethod(listener)
        else:
            self._ref = weakref.ref(listener)

    def resolve(self) -> Optional[LocaleChangeListener]:
        return self._ref()

    def refers_to(self, listener: LocaleChangeListener) -> bool:
        target = self._ref()
        return target is not None and target == listener


def _notify(listener: LocaleChangeListener, event: LocaleChangeEvent) -> None:
    handler = getattr(listener, "locale_changed", None)
    if handler is not None:
        handler(event)
    else:
        listener(event)


class LocaleBroadcaster:
    """Switches all tracked translators to a new locale and notifies listeners."""

    _instance: Optional["LocaleBroadcaster"] = None
    _instance_lock = threading.Lock()

    def __init__(self):
        self._lock = threading.Lock()
        self._translators: List[Translator] = []
        self._listeners: List[Union[LocaleChangeListener, _WeakListener]] = []

    @classmethod
    def get_instance(cls) -> "LocaleBroadcaster":
        """Return the process-wide broadcaster, creating it on first use."""
        instance = cls._instance
        if instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
                    logger.debug("locale_broadcaster_created")
                instance = cls._instance
        return instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the process-wide broadcaster.

        WARNING: This is intended for testing only.
        """
        with cls._instance_lock:
            cls._instance = None

    def register(self, translator: Translator) -> None:
        """Track translator so broadcast_locale() rebinds it."""
        with self._lock:
            if not any(existing is translator for existing in self._translators):
                self._translators.append(translator)

    def unregister(self, translator: Translator) -> None:
        with self._lock:
            self._translators = [
                existing for existing in self._translators if existing is not translator
            ]

    def translators(self) -> List[Translator]:
        """Return a snapshot of the tracked translators."""
        with self._lock:
            return list(self._translators)

    def add_listener(self, listener: LocaleChangeListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def add_weak_listener(self, listener: LocaleChangeListener) -> None:
        """Add a listener that is dropped once nothing else references it.

        Useful for objects with an indeterminate lifetime such as dialogs.
        Dead listeners are removed during the next broadcast.
        """
        with self._lock:
            self._listeners.append(_WeakListener(listener))

    def remove_listener(self, listener: LocaleChangeListener) -> None:
        """Remove the earliest registration of listener, if any."""
        with self._lock:
            for index, entry in enumerate(self._listeners):
                if isinstance(entry, _WeakListener):
                    matches = entry.refers_to(listener)
                else:
                    matches = entry == listener
                if matches:
                    del self._listeners[index]
                    return

    def listeners(self) -> List[LocaleChangeListener]:
        """Return a snapshot of the live listeners in registration order."""
        with self._lock:
            entries = list(self._listeners)
        live = []
        for entry in entries:
            if isinstance(entry, _WeakListener):
                entry = entry.resolve()
                if entry is None:
                    continue
            live.append(entry)
        return live

    def listener_count(self) -> int:
        """Return the number of registrations, including dead weak ones."""
        with self._lock:
            return len(self._listeners)

    def broadcast_locale(self, locale: LocaleLike) -> LocaleChangeEvent:
        """Switch every tracked translator to locale and notify listeners.

        Translators are rebound best-effort: one whose catalog is missing or
        unreadable for locale keeps its current catalog. Listeners are notified
        afterwards, most recently added first. A listener raising does not
        stop the broadcast.

        Args:
            locale: The new locale.

        Returns:
            The event sent to listeners.
        """
        locale = Locale.parse(locale)
        with self._lock:
            translators = list(self._translators)
            listeners = list(self._listeners)

        reloaded = 0
        for translator in translators:
            try:
                if translator.rebind(locale):
                    reloaded += 1
            except (CatalogNotFound, ValueError) as e:
                logger.warning(
                    "translator_rebind_failed",
                    catalog_name=translator.catalog_name,
                    locale=str(locale),
                    error=str(e),
                )

        logger.info(
            "locale_broadcast",
            locale=str(locale),
            translator_count=len(translators),
            reloaded_count=reloaded,
            listener_count=len(listeners),
        )

        event = LocaleChangeEvent(source=self, new_locale=locale)
        for entry in reversed(listeners):
            listener = entry
            if isinstance(entry, _WeakListener):
                listener = entry.resolve()
                if listener is None:
                    self._discard(entry)
                    continue
            try:
                _notify(listener, event)
            except Exception as e:
                logger.error(
                    "locale_listener_failed",
                    listener=getattr(listener, "__name__", repr(listener)),
                    locale=str(locale),
                    error=str(e),
                )
        return event

    set_default_locale = broadcast_locale

    def _discard(self, entry: _WeakListener) -> None:
        with self._lock:
            self._listeners = [
                existing for existing in self._listeners if existing is not entry
            ]


def get_broadcaster() -> LocaleBroadcaster:
    """Return the process-wide LocaleBroadcaster."""
    return LocaleBroadcaster.get_instance()
