"""Catalog resolution: the factory for Translator instances.

Finds the catalog responsible for a code location by walking its dotted
namespace outward, and caches the resulting translators so every caller in
a namespace shares one translator per locale.

Usage:
    from gettext_commons.i18n import get_translator

    i18n = get_translator(__name__)
    print(i18n.tr("Hello, World"))
"""

import inspect
import threading
from types import ModuleType
from typing import Any, Iterator, Optional

from gettext_commons.configuration import settings
from gettext_commons.i18n.cache import ResolutionCache
from gettext_commons.i18n.catalogs import CatalogNotFound, EmptyCatalog
from gettext_commons.i18n.loader import CatalogLoader, GettextCatalogLoader
from gettext_commons.i18n.manager import LocaleBroadcaster
from gettext_commons.i18n.models import Locale, LocaleLike, ResolveFlags
from gettext_commons.i18n.resolvers import LocaleResolver
from gettext_commons.i18n.translator import Translator
from gettext_commons.logging import get_module_logger

logger = get_module_logger()

# Cache key of translators backed by an EmptyCatalog. Not a valid module
# name, so a fallback never pre-empts a catalog found at the root level.
FALLBACK_NAMESPACE = "<fallback>"

_cache = ResolutionCache()
_default_loader: Optional[CatalogLoader] = None
_loader_lock = threading.Lock()


def get_default_loader() -> CatalogLoader:
    """Return the loader used when none is passed, creating it on first use."""
    global _default_loader
    with _loader_lock:
        if _default_loader is None:
            _default_loader = GettextCatalogLoader()
        return _default_loader


def set_default_loader(loader: Optional[CatalogLoader]) -> None:
    """Replace the default loader; None recreates it from settings on next use."""
    global _default_loader
    with _loader_lock:
        _default_loader = loader


def get_cache() -> ResolutionCache:
    return _cache


def clear_cache() -> None:
    """Forget all cached translators and stop broadcasting to them.

    WARNING: This is intended for testing only.
    """
    broadcaster = LocaleBroadcaster.get_instance()
    _cache.visit(broadcaster.unregister)
    _cache.clear()
    logger.debug("cleared_resolution_cache")


def namespace_of(target: Any) -> str:
    """Return the dotted namespace of a code location.

    Strings are taken as module names. Modules yield their name, classes
    and functions the name of the module defining them.
    """
    if isinstance(target, str):
        return target
    if isinstance(target, ModuleType):
        return target.__name__
    module = inspect.getmodule(target)
    if module is not None:
        return module.__name__
    name = getattr(target, "__module__", None)
    if name:
        return name
    raise ValueError(f"Cannot derive a namespace from {target!r}")


def _levels(namespace: str) -> Iterator[str]:
    """Yield the enclosing levels of namespace, innermost first, root ("") last.

    "myapp.ui.dialogs" yields "myapp.ui", "myapp", "".
    """
    prefix = namespace
    while True:
        index = prefix.rfind(".")
        prefix = prefix[:index] if index != -1 else ""
        yield prefix
        if index == -1:
            return


def find_by_catalog_name(
    catalog_name: str,
    locale: Locale,
    loader: CatalogLoader,
    flags: ResolveFlags = ResolveFlags.DEFAULT,
) -> Optional[Translator]:
    """Create a translator for catalog_name, or return None if it is missing.

    Unless NO_CACHE is set, the translator is registered with the
    LocaleBroadcaster.
    """
    try:
        translator = Translator(catalog_name=catalog_name, locale=locale, loader=loader)
    except CatalogNotFound:
        return None
    if not flags & ResolveFlags.NO_CACHE:
        LocaleBroadcaster.get_instance().register(translator)
    return translator


def _remember(level: str, translator: Translator, flags: ResolveFlags) -> Translator:
    if flags & ResolveFlags.NO_CACHE:
        return translator
    cached = _cache.put(level, translator)
    if cached is not translator:
        # Another thread resolved the same level first
        LocaleBroadcaster.get_instance().unregister(translator)
    return cached


def resolve(
    namespace: str,
    catalog_name: str,
    locale: LocaleLike,
    flags: ResolveFlags = ResolveFlags.DEFAULT,
    loader: Optional[CatalogLoader] = None,
) -> Translator:
    """Return the translator responsible for namespace in locale.

    Resolution order:
    1. Walk the namespace outward. At each level return a cached translator
       for the locale; with READ_CONFIG, load the catalog named by the
       level's config resource.
    2. Walk the namespace outward again, loading "<level>.<catalog_name>"
       (just catalog_name at the root).
    3. With FALLBACK, return a translator backed by an EmptyCatalog.

    Args:
        namespace: Dotted namespace of the code location.
        catalog_name: Catalog name looked up relative to each level.
        locale: Locale to translate to.
        flags: Combination of ResolveFlags.
        loader: CatalogLoader to use (default: get_default_loader()).

    Returns:
        Translator: created or cached translator.

    Raises:
        CatalogNotFound: If no catalog is found and FALLBACK is not set.
        ValueError: If locale is None.
    """
    if locale is None:
        raise ValueError("locale must not be None")
    locale = Locale.parse(locale)
    flags = ResolveFlags(flags)
    loader = loader or get_default_loader()
    use_cache = not flags & ResolveFlags.NO_CACHE

    for level in _levels(namespace):
        if use_cache:
            cached = _cache.get(level, locale)
            if cached is not None:
                return cached

        if flags & ResolveFlags.READ_CONFIG:
            configured = loader.read_config(level)
            if configured:
                translator = find_by_catalog_name(configured, locale, loader, flags)
                if translator is not None:
                    logger.debug(
                        "translator_resolved",
                        namespace=namespace,
                        level=level,
                        catalog_name=configured,
                        locale=str(locale),
                        source="config",
                    )
                    return _remember(level, translator, flags)
                logger.warning(
                    "configured_catalog_missing",
                    namespace=level,
                    catalog_name=configured,
                    locale=str(locale),
                )

    for level in _levels(namespace):
        name = f"{level}.{catalog_name}" if level else catalog_name
        translator = find_by_catalog_name(name, locale, loader, flags)
        if translator is not None:
            logger.debug(
                "translator_resolved",
                namespace=namespace,
                level=level,
                catalog_name=name,
                locale=str(locale),
                source="catalog_name",
            )
            return _remember(level, translator, flags)

    if flags & ResolveFlags.FALLBACK:
        if use_cache:
            cached = _cache.get(FALLBACK_NAMESPACE, locale)
            if cached is not None:
                return cached
        translator = Translator(EmptyCatalog.for_locale(locale))
        logger.info(
            "translator_fallback_to_empty_catalog",
            namespace=namespace,
            catalog_name=catalog_name,
            locale=str(locale),
        )
        if not use_cache:
            return translator
        LocaleBroadcaster.get_instance().register(translator)
        return _remember(FALLBACK_NAMESPACE, translator, flags)

    raise CatalogNotFound(
        f"No catalog {catalog_name} found for namespace {namespace!r}",
        catalog_name=catalog_name,
        namespace=namespace,
        locale=locale,
    )


def get_translator(
    target: Any,
    catalog_name: Optional[str] = None,
    locale: Optional[LocaleLike] = None,
    flags: Optional[ResolveFlags] = None,
    loader: Optional[CatalogLoader] = None,
) -> Translator:
    """Return the translator for a code location.

    Args:
        target: Module name, module, class or function whose namespace is
            resolved (typically __name__).
        catalog_name: Catalog name to look for. When omitted the default
            catalog name (settings.i18n.DEFAULT_CATALOG_NAME) is used and
            config resources are consulted.
        locale: Locale to translate to (default: LocaleResolver.default_locale()).
        flags: ResolveFlags; defaults to READ_CONFIG without a catalog_name
            and DEFAULT with one.
        loader: CatalogLoader to use (default: get_default_loader()).

    Raises:
        CatalogNotFound: If no catalog is found and FALLBACK is not set.

    Usage:
        # Catalog found through i18n.yml or <package>/i18n/Messages_<locale>.mo
        i18n = get_translator(__name__)

        # Explicit catalog name and locale, never failing
        i18n = get_translator(__name__, "Messages", "de", ResolveFlags.FALLBACK)
    """
    if flags is None:
        flags = ResolveFlags.READ_CONFIG if catalog_name is None else ResolveFlags.DEFAULT
    if catalog_name is None:
        catalog_name = settings.i18n.DEFAULT_CATALOG_NAME
    if locale is None:
        locale = LocaleResolver.default_locale()

    return resolve(namespace_of(target), catalog_name, locale, flags, loader)
