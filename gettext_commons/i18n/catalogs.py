"""Translation catalogs.

A catalog maps message keys to translations for one locale. Catalogs form
a parent chain (de_DE -> de -> root) that is consulted when a key is missing.
Whether a catalog carries plural metadata is decided when it is loaded:

- PlainCatalog: key -> string
- PluralCatalog: key -> string or tuple of plural forms, plus a plural rule
- EmptyCatalog: no entries at all
"""

import gettext
import re
import threading
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Callable, Dict, Iterator, Mapping, Optional, Tuple, Union

from gettext_commons.i18n.models import Locale

CatalogValue = Union[str, Tuple[str, ...]]

DEFAULT_PLURAL_FORMS = "nplurals=2; plural=(n != 1);"

_PLURAL_EXPR = re.compile(r"plural\s*=\s*([^;]+)")


class CatalogNotFound(LookupError):
    """No catalog could be located for a name and locale.

    Attributes:
        catalog_name: The catalog name that was requested.
        namespace: The namespace the resolution started from, if any.
        locale: The requested locale, if known.
    """

    def __init__(
        self,
        message: str,
        catalog_name: str,
        namespace: Optional[str] = None,
        locale: Optional[Locale] = None,
    ):
        super().__init__(message)
        self.catalog_name = catalog_name
        self.namespace = namespace
        self.locale = locale


class Catalog(ABC):
    """Abstract base for translation catalogs.

    Attributes:
        locale: Locale of the translations held by this catalog.
        parent: Next catalog in the fallback chain, or None.
    """

    def __init__(self, locale: Locale, parent: Optional["Catalog"] = None):
        self._locale = locale
        self._parent = parent

    @property
    def locale(self) -> Locale:
        return self._locale

    @property
    def parent(self) -> Optional["Catalog"]:
        return self._parent

    @abstractmethod
    def lookup(self, key: str) -> Optional[CatalogValue]:
        """Return the entry stored for key in this catalog only.

        Args:
            key: Message key (msgid, optionally prefixed with a context).

        Returns:
            The translated string, a tuple of plural forms, or None.
        """

    @abstractmethod
    def keys(self) -> Iterator[str]:
        """Iterate over the keys held by this catalog only."""

    def chain(self) -> Iterator["Catalog"]:
        """Iterate over this catalog followed by its parents."""
        catalog: Optional[Catalog] = self
        while catalog is not None:
            yield catalog
            catalog = catalog.parent

    def get(self, key: str) -> str:
        """Return the translation for key, consulting parent catalogs.

        Plural entries yield their first form.

        Raises:
            KeyError: If no catalog in the chain has an entry for key.
        """
        for catalog in self.chain():
            value = catalog.lookup(key)
            if value is None:
                continue
            if isinstance(value, tuple):
                return value[0]
            return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return any(catalog.lookup(key) is not None for catalog in self.chain())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} locale={str(self.locale)!r}>"


class PlainCatalog(Catalog):
    """Catalog without plural metadata."""

    def __init__(
        self,
        messages: Mapping[str, str],
        locale: Locale,
        parent: Optional[Catalog] = None,
    ):
        super().__init__(locale, parent)
        self._messages = MappingProxyType(dict(messages))

    def lookup(self, key: str) -> Optional[CatalogValue]:
        return self._messages.get(key)

    def keys(self) -> Iterator[str]:
        return iter(self._messages)


def compile_plural_forms(plural_forms: Optional[str]) -> Callable[[int], int]:
    """Compile a gettext Plural-Forms header into a plural index function.

    Accepts the full header value ("nplurals=2; plural=(n != 1);") or the
    bare expression ("n != 1").

    Raises:
        ValueError: If the expression is not a valid plural rule.
    """
    expression = plural_forms or DEFAULT_PLURAL_FORMS
    match = _PLURAL_EXPR.search(expression)
    if match is not None:
        expression = match.group(1)
    return gettext.c2py(expression.strip())


class PluralCatalog(Catalog):
    """Catalog whose entries may hold several plural forms.

    Attributes:
        plural_forms: The Plural-Forms rule the catalog was compiled with.
    """

    def __init__(
        self,
        messages: Mapping[str, CatalogValue],
        locale: Locale,
        parent: Optional[Catalog] = None,
        plural_forms: Optional[str] = None,
    ):
        super().__init__(locale, parent)
        self._messages = MappingProxyType(
            {
                key: tuple(value) if isinstance(value, (list, tuple)) else value
                for key, value in messages.items()
            }
        )
        self.plural_forms = plural_forms or DEFAULT_PLURAL_FORMS
        self._plural = compile_plural_forms(self.plural_forms)

    def lookup(self, key: str) -> Optional[CatalogValue]:
        return self._messages.get(key)

    def keys(self) -> Iterator[str]:
        return iter(self._messages)

    def plural_index(self, n: int) -> int:
        """Return the index of the plural form to use for count n."""
        return int(self._plural(n))


class EmptyCatalog(Catalog):
    """Catalog with no entries; every lookup misses.

    One shared instance exists per locale, see for_locale().
    """

    _instances: Dict[Locale, "EmptyCatalog"] = {}
    _instances_lock = threading.Lock()

    def __init__(self, locale: Locale):
        super().__init__(locale, None)

    @classmethod
    def for_locale(cls, locale: Locale) -> "EmptyCatalog":
        with cls._instances_lock:
            catalog = cls._instances.get(locale)
            if catalog is None:
                catalog = cls(locale)
                cls._instances[locale] = catalog
            return catalog

    def lookup(self, key: str) -> Optional[CatalogValue]:
        return None

    def keys(self) -> Iterator[str]:
        return iter(())
