"""i18n system - translation lookup for code locations.

Resolves the translation catalog responsible for a module, translates
messages with context, plural and positional argument handling, and
switches every live translator to a new locale on request.

Main components:
- models: Locale, ResolveFlags, LocaleChangeEvent
- catalogs: Catalog, PlainCatalog, PluralCatalog, EmptyCatalog, CatalogNotFound
- loader: CatalogLoader, GettextCatalogLoader and YAMLCatalogLoader
- translator: Translator with tr / trn / trc / trnc
- factory: resolve() and get_translator() with a resolution cache
- manager: LocaleBroadcaster for process-wide locale changes
"""

from gettext_commons.i18n.cache import ResolutionCache
from gettext_commons.i18n.catalogs import (
    Catalog,
    CatalogNotFound,
    EmptyCatalog,
    PlainCatalog,
    PluralCatalog,
)
from gettext_commons.i18n.factory import (
    clear_cache,
    get_default_loader,
    get_translator,
    resolve,
    set_default_loader,
)
from gettext_commons.i18n.loader import (
    CatalogLoader,
    GettextCatalogLoader,
    YAMLCatalogLoader,
)
from gettext_commons.i18n.manager import LocaleBroadcaster, get_broadcaster
from gettext_commons.i18n.models import (
    CONTEXT_GLUE,
    EXTRACTION_KEYWORDS,
    Locale,
    LocaleChangeEvent,
    ResolveFlags,
)
from gettext_commons.i18n.resolvers import LocaleResolver
from gettext_commons.i18n.translator import Translator, marktr

__all__ = [
    "CONTEXT_GLUE",
    "EXTRACTION_KEYWORDS",
    "Locale",
    "LocaleChangeEvent",
    "ResolveFlags",
    "Catalog",
    "PlainCatalog",
    "PluralCatalog",
    "EmptyCatalog",
    "CatalogNotFound",
    "CatalogLoader",
    "GettextCatalogLoader",
    "YAMLCatalogLoader",
    "LocaleResolver",
    "ResolutionCache",
    "Translator",
    "marktr",
    "LocaleBroadcaster",
    "get_broadcaster",
    "resolve",
    "get_translator",
    "clear_cache",
    "get_default_loader",
    "set_default_loader",
]
