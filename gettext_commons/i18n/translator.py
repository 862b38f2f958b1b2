"""Translator for looking up and formatting translated messages.

A Translator is bound to one catalog at a time. Lookups read the current
binding once and never take a lock; rebinding swaps the binding as a unit,
so a concurrent lookup sees either the old or the new catalog.
"""

import re
import threading
from typing import Any, NamedTuple, Optional, Sequence

from gettext_commons.configuration import settings
from gettext_commons.i18n.catalogs import Catalog, PluralCatalog
from gettext_commons.i18n.loader import CatalogLoader
from gettext_commons.i18n.models import CONTEXT_GLUE, Locale, LocaleLike
from gettext_commons.logging import get_module_logger

logger = get_module_logger()

_PLACEHOLDER = re.compile(r"\{(\d+)\}")


def marktr(text: str) -> str:
    """Mark text for extraction without translating it.

    Use where a message has to be declared before a translator is available
    (e.g., module level constants); translate it later with tr().
    """
    return text


def format_message(message: str, args: Sequence[Any]) -> str:
    """Substitute positional placeholders ({0}, {1}, ...) in message.

    Placeholders may appear in any order and more than once. Placeholders
    without a matching argument are left untouched.
    """

    def _replace(match: "re.Match[str]") -> str:
        index = int(match.group(1))
        if index < len(args):
            return str(args[index])
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, message)


class _Binding(NamedTuple):
    catalog: Catalog
    catalog_name: Optional[str]
    loader: Optional[CatalogLoader]
    locale: Locale


class Translator:
    """Translates messages with context, plural and argument handling.

    A translator created from a catalog name and loader can reload itself
    for another locale (see rebind()); one created from a catalog object
    only records the new locale.

    Attributes:
        catalog: The bound catalog.
        catalog_name: Name the catalog was loaded under, or None.
        locale: The locale the translator was last bound or rebound to.
        source_locale: Language the untranslated source strings are in.
    """

    marktr = staticmethod(marktr)

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        *,
        catalog_name: Optional[str] = None,
        locale: Optional[LocaleLike] = None,
        loader: Optional[CatalogLoader] = None,
        source_locale: Optional[LocaleLike] = None,
    ):
        """Initialize Translator from a catalog or a catalog name.

        Args:
            catalog: Catalog to bind directly.
            catalog_name: Dotted catalog name to load (requires locale and loader).
            locale: Locale to load the catalog for.
            loader: CatalogLoader used now and on every rebind.
            source_locale: Source language (default: settings.i18n.SOURCE_LOCALE).

        Raises:
            ValueError: If neither a catalog nor a complete catalog name,
                locale and loader are given.
            CatalogNotFound: If the named catalog cannot be loaded.
        """
        self._lock = threading.Lock()
        self._source_locale = Locale.parse(
            source_locale if source_locale is not None else settings.i18n.SOURCE_LOCALE
        )
        if catalog is not None:
            self.bind_catalog(catalog)
        else:
            self.bind(catalog_name, locale, loader)

    def __repr__(self) -> str:
        binding = self._binding
        return (
            f"<Translator catalog_name={binding.catalog_name!r} "
            f"locale={str(binding.locale)!r}>"
        )

    @property
    def catalog(self) -> Catalog:
        return self._binding.catalog

    @property
    def catalog_name(self) -> Optional[str]:
        return self._binding.catalog_name

    @property
    def loader(self) -> Optional[CatalogLoader]:
        return self._binding.loader

    @property
    def locale(self) -> Locale:
        return self._binding.locale

    @property
    def source_locale(self) -> Locale:
        return self._source_locale

    def set_source_locale(self, locale: LocaleLike) -> None:
        """Set the language the untranslated source strings are written in.

        trc() returns source text unchanged while the bound catalog's
        locale equals this locale.

        Raises:
            ValueError: If locale is None.
        """
        if locale is None:
            raise ValueError("locale must not be None")
        self._source_locale = Locale.parse(locale)

    def bind_catalog(self, catalog: Catalog) -> None:
        """Bind a catalog directly.

        Forgets the catalog name and loader, so a later rebind() only
        records the locale.

        Raises:
            ValueError: If catalog is None.
        """
        if catalog is None:
            raise ValueError("catalog must not be None")
        with self._lock:
            self._binding = _Binding(catalog, None, None, catalog.locale)

    def bind(
        self,
        catalog_name: Optional[str],
        locale: Optional[LocaleLike],
        loader: Optional[CatalogLoader],
    ) -> None:
        """Load the named catalog for locale and bind it.

        Raises:
            ValueError: If an argument is None.
            CatalogNotFound: If the loader cannot find the catalog.
        """
        if catalog_name is None:
            raise ValueError("catalog_name must not be None")
        if locale is None:
            raise ValueError("locale must not be None")
        if loader is None:
            raise ValueError("loader must not be None")

        locale = Locale.parse(locale)
        with self._lock:
            catalog = loader.load(catalog_name, locale)
            self._binding = _Binding(catalog, catalog_name, loader, locale)

    def rebind(self, locale: LocaleLike) -> bool:
        """Switch the translator to another locale.

        Args:
            locale: The new locale.

        Returns:
            True if the catalog was reloaded for locale, False if the
            translator has no catalog name and loader and only recorded
            the locale.

        Raises:
            CatalogNotFound: If the catalog cannot be loaded for locale.
        """
        locale = Locale.parse(locale)
        with self._lock:
            binding = self._binding
            if binding.catalog_name is not None and binding.loader is not None:
                catalog = binding.loader.load(binding.catalog_name, locale)
                self._binding = _Binding(
                    catalog, binding.catalog_name, binding.loader, locale
                )
                return True
            self._binding = binding._replace(locale=locale)
            return False

    set_locale = rebind

    def tr(self, text: str, *args: Any) -> str:
        """Translate text.

        Args:
            text: Source text, used as the catalog key.
            *args: Values for positional placeholders ({0}, {1}, ...).

        Returns:
            The translation, or text itself if there is none.
        """
        translated = self._lookup(self._binding.catalog, text)
        if translated is None:
            translated = text
        return format_message(translated, args) if args else translated

    def trn(self, text: str, plural_text: str, n: int, *args: Any) -> str:
        """Translate text in the plural form matching n.

        Args:
            text: Singular source text, used as the catalog key.
            plural_text: Plural source text.
            n: Count deciding the plural form.
            *args: Values for positional placeholders.

        Returns:
            The plural form selected by the catalog's plural rule, or
            text if n == 1 and plural_text otherwise when untranslated.
        """
        translated = self._lookup_plural(self._binding.catalog, text, n)
        if translated is None:
            translated = text if n == 1 else plural_text
        return format_message(translated, args) if args else translated

    def trc(self, context: str, text: str) -> str:
        """Translate text disambiguated by context.

        Returns text unchanged while the bound catalog is in the source
        language, or when the catalog has no entry for the context.
        """
        catalog = self._binding.catalog
        if self._source_locale == catalog.locale:
            return text
        translated = self._lookup(catalog, f"{context}{CONTEXT_GLUE}{text}")
        return text if translated is None else translated

    def trnc(
        self, context: str, text: str, plural_text: str, n: int, *args: Any
    ) -> str:
        """Translate text disambiguated by context in the plural form for n."""
        translated = self._lookup_plural(
            self._binding.catalog, f"{context}{CONTEXT_GLUE}{text}", n
        )
        if translated is None:
            translated = text if n == 1 else plural_text
        return format_message(translated, args) if args else translated

    @staticmethod
    def _lookup(catalog: Catalog, key: str) -> Optional[str]:
        try:
            return catalog.get(key)
        except KeyError:
            return None

    @staticmethod
    def _lookup_plural(catalog: Catalog, key: str, n: int) -> Optional[str]:
        for current in catalog.chain():
            value = current.lookup(key)
            if value is None:
                continue
            if not isinstance(value, tuple):
                return value
            if not isinstance(current, PluralCatalog):
                return value[0]
            try:
                index = current.plural_index(n)
            except (ArithmeticError, TypeError, ValueError):
                logger.warning(
                    "plural_rule_failed",
                    key=key,
                    n=n,
                    locale=str(current.locale),
                )
                continue
            if not 0 <= index < len(value):
                index = 0
            return value[index]
        return None
