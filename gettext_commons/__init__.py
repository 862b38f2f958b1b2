"""gettext-commons - gettext based translation helpers.

Example:
    from gettext_commons import get_translator, get_broadcaster

    i18n = get_translator(__name__)
    print(i18n.tr("Hello, {0}", user))
    print(i18n.trn("One file", "{0} files", count, count))

    # Switch every translator to German
    get_broadcaster().broadcast_locale("de")
"""

from gettext_commons.i18n import (
    CONTEXT_GLUE,
    EXTRACTION_KEYWORDS,
    Catalog,
    CatalogLoader,
    CatalogNotFound,
    EmptyCatalog,
    GettextCatalogLoader,
    Locale,
    LocaleBroadcaster,
    LocaleChangeEvent,
    LocaleResolver,
    PlainCatalog,
    PluralCatalog,
    ResolveFlags,
    Translator,
    YAMLCatalogLoader,
    clear_cache,
    get_broadcaster,
    get_translator,
    marktr,
    resolve,
)

__version__ = "0.9.7"

__all__ = [
    "CONTEXT_GLUE",
    "EXTRACTION_KEYWORDS",
    "Catalog",
    "CatalogLoader",
    "CatalogNotFound",
    "EmptyCatalog",
    "GettextCatalogLoader",
    "Locale",
    "LocaleBroadcaster",
    "LocaleChangeEvent",
    "LocaleResolver",
    "PlainCatalog",
    "PluralCatalog",
    "ResolveFlags",
    "Translator",
    "YAMLCatalogLoader",
    "clear_cache",
    "get_broadcaster",
    "get_translator",
    "marktr",
    "resolve",
]
