"""Catalog loading interface and implementations.

Defines the contract for loading catalogs and provides a gettext (.mo/.po)
loader backed by Babel and a YAML loader.

Catalog names are dotted (e.g., "myapp.ui.i18n.Messages") and map to paths
below the loader's search roots ("myapp/ui/i18n/Messages"). A locale's
catalog lives in <path>_<locale>.<ext>; the root catalog has no locale suffix.
"""

import os
import sys
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import yaml
from babel.messages.mofile import read_mo
from babel.messages.pofile import PoFileError, read_po

from gettext_commons.configuration import settings
from gettext_commons.i18n.catalogs import (
    Catalog,
    CatalogNotFound,
    CatalogValue,
    PlainCatalog,
    PluralCatalog,
)
from gettext_commons.i18n.models import CONTEXT_GLUE, Locale
from gettext_commons.i18n.resolvers import LocaleResolver
from gettext_commons.logging import get_module_logger

logger = get_module_logger()

CONFIG_BASENAME_KEY = "basename"


def default_search_paths() -> List[Path]:
    """Return the configured search roots, or the directories on sys.path."""
    configured = settings.i18n.SEARCH_PATHS
    if configured:
        return [Path(path) for path in configured]
    return [
        Path(entry or os.curdir)
        for entry in sys.path
        if os.path.isdir(entry or os.curdir)
    ]


class CatalogLoader(ABC):
    """Abstract base for catalog loaders.

    Subclasses define the file extensions they understand and how a single
    file is parsed. Locating files, linking the parent chain and caching
    are shared.

    Attributes:
        search_paths: Directories searched for catalog and config files.
        use_cache: Whether loaded catalogs are memoized per (name, locale).
        config_filename: Name of the per-namespace config resource.
    """

    extensions: Tuple[str, ...] = ()

    def __init__(
        self,
        search_paths: Optional[Iterable[os.PathLike]] = None,
        use_cache: Optional[bool] = None,
        config_filename: Optional[str] = None,
    ):
        self.search_paths: List[Path] = (
            [Path(path) for path in search_paths]
            if search_paths is not None
            else default_search_paths()
        )
        self.use_cache = (
            use_cache if use_cache is not None else settings.i18n.USE_LOADER_CACHE
        )
        self.config_filename = config_filename or settings.i18n.CONFIG_FILENAME
        self.cache: Dict[Tuple[str, Locale], Catalog] = {}
        self._cache_lock = threading.Lock()

        logger.debug(
            "initialized_catalog_loader",
            loader=type(self).__name__,
            search_paths=[str(path) for path in self.search_paths],
            use_cache=self.use_cache,
        )

    def load(self, name: str, locale: Locale) -> Catalog:
        """Load the catalog chain for a catalog name and locale.

        Every candidate locale (see LocaleResolver.candidate_locales) with
        a file on disk contributes one catalog; the most specific one is
        returned with the others reachable through its parent chain.

        Args:
            name: Dotted catalog name.
            locale: Requested locale.

        Returns:
            The most specific Catalog found.

        Raises:
            CatalogNotFound: If no file exists for any candidate locale.
            ValueError: If a catalog file exists but cannot be parsed.
        """
        if not name:
            raise ValueError("catalog name must not be empty")
        if locale is None:
            raise ValueError("locale must not be None")

        cache_key = (name, locale)
        if self.use_cache:
            with self._cache_lock:
                cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        base_path = name.replace(".", "/")
        catalog: Optional[Catalog] = None
        loaded_files = []
        for candidate in reversed(LocaleResolver.candidate_locales(locale)):
            relative = base_path if candidate.is_root else f"{base_path}_{candidate}"
            path = self.find_resource(relative, self.extensions)
            if path is None:
                continue
            catalog = self.read(path, candidate, catalog)
            loaded_files.append(str(path))

        if catalog is None:
            raise CatalogNotFound(
                f"No catalog {name} found for locale {locale!s}",
                catalog_name=name,
                locale=locale,
            )

        logger.debug(
            "catalog_loaded",
            catalog_name=name,
            locale=str(locale),
            files=loaded_files,
        )

        if self.use_cache:
            with self._cache_lock:
                catalog = self.cache.setdefault(cache_key, catalog)

        return catalog

    def find_resource(
        self, relative: str, extensions: Sequence[str] = ("",)
    ) -> Optional[Path]:
        """Return the first existing file for relative + extension, or None.

        Roots are tried in order; within a root, extensions are tried in order.
        """
        for root in self.search_paths:
            for extension in extensions:
                path = root / f"{relative}{extension}"
                if path.is_file():
                    return path
        return None

    def read_config(self, namespace: str) -> Optional[str]:
        """Read the catalog name configured for a namespace level.

        Looks for the config resource (default: i18n.yml) in the directory
        of the namespace ("myapp.ui" -> myapp/ui/i18n.yml; the root namespace
        "" -> i18n.yml) and returns its ``basename`` value.

        Returns:
            The configured catalog name, or None if there is no config
            resource or it does not name a catalog.
        """
        relative = (
            f"{namespace.replace('.', '/')}/{self.config_filename}"
            if namespace
            else self.config_filename
        )
        path = self.find_resource(relative)
        if path is None:
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.warning("config_parse_error", file=str(path), error=str(e))
            return None

        if not isinstance(data, dict):
            logger.warning("invalid_config_format", file=str(path), expected="dict")
            return None

        basename = data.get(CONFIG_BASENAME_KEY)
        return str(basename) if basename else None

    @abstractmethod
    def read(self, path: Path, locale: Locale, parent: Optional[Catalog]) -> Catalog:
        """Parse a single catalog file.

        Args:
            path: File to parse.
            locale: Locale the file holds translations for.
            parent: Catalog to chain to on a miss.

        Returns:
            The parsed Catalog.

        Raises:
            ValueError: If the file cannot be parsed.
        """

    def clear_cache(self) -> None:
        """Clear all memoized catalogs."""
        with self._cache_lock:
            self.cache.clear()
        logger.debug("cleared_catalog_cache", loader=type(self).__name__)


class GettextCatalogLoader(CatalogLoader):
    """Loader for GNU gettext catalogs.

    Prefers compiled .mo files and falls back to .po sources, both parsed
    with Babel. Context messages are keyed as context + "\\x04" + msgid,
    plural messages hold a tuple of forms, and the Plural-Forms header
    provides the plural rule. Untranslated and fuzzy entries are skipped.
    """

    extensions = (".mo", ".po")

    def read(self, path: Path, locale: Locale, parent: Optional[Catalog]) -> Catalog:
        try:
            with open(path, "rb") as f:
                if path.suffix == ".mo":
                    babel_catalog = read_mo(f)
                else:
                    babel_catalog = read_po(f)
        except (OSError, PoFileError, ValueError) as e:
            logger.error("catalog_parse_error", file=str(path), error=str(e))
            raise ValueError(f"Failed to parse {path}: {e}") from e

        messages: Dict[str, CatalogValue] = {}
        for message in babel_catalog:
            if not message.id or message.fuzzy:
                continue
            if message.pluralizable:
                forms = tuple(message.string or ())
                if not any(forms):
                    continue
                key, value = message.id[0], forms
            else:
                if not message.string:
                    continue
                key, value = message.id, message.string
            context = message.context
            # read_mo leaves contexts undecoded
            if isinstance(context, bytes):
                context = context.decode(babel_catalog.charset or "utf-8")
            if context:
                key = f"{context}{CONTEXT_GLUE}{key}"
            messages[key] = value

        plural_forms = (
            f"nplurals={babel_catalog.num_plurals}; "
            f"plural={babel_catalog.plural_expr};"
        )
        return PluralCatalog(messages, locale, parent, plural_forms=plural_forms)


class YAMLCatalogLoader(CatalogLoader):
    """Loader for YAML catalog files.

    Expected format:

        plural_forms: "nplurals=2; plural=(n != 1);"   # optional
        messages:
          house: Haus
          "{0} Files": ["{0} Datei", "{0} Dateien"]
        contexts:                                       # optional
          verb:
            chat: Chatten

    A flat mapping of key -> message (no ``messages`` section) is also
    accepted. Catalogs with list entries or a ``plural_forms`` rule load as
    PluralCatalog, all others as PlainCatalog.
    """

    extensions = (".yml", ".yaml")

    def read(self, path: Path, locale: Locale, parent: Optional[Catalog]) -> Catalog:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("yaml_parse_error", file=str(path), error=str(e))
            raise ValueError(f"Failed to parse {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping in {path}")

        plural_forms = data.get("plural_forms")
        raw_messages = data.get("messages") if "messages" in data else data
        messages: Dict[str, CatalogValue] = {}
        self._merge_yaml_messages(messages, raw_messages or {}, path)

        for context, entries in (data.get("contexts") or {}).items():
            if not isinstance(entries, dict):
                logger.warning(
                    "invalid_context_format", file=str(path), context=context
                )
                continue
            contextual: Dict[str, CatalogValue] = {}
            self._merge_yaml_messages(contextual, entries, path)
            for key, value in contextual.items():
                messages[f"{context}{CONTEXT_GLUE}{key}"] = value

        if plural_forms or any(isinstance(v, tuple) for v in messages.values()):
            return PluralCatalog(messages, locale, parent, plural_forms=plural_forms)
        return PlainCatalog(messages, locale, parent)

    def _merge_yaml_messages(
        self,
        target: Dict[str, CatalogValue],
        data: Dict,
        source_file: Path,
    ) -> None:
        if not isinstance(data, dict):
            logger.warning(
                "invalid_yaml_format", file=str(source_file), expected="dict"
            )
            return

        for key, value in data.items():
            if key in ("plural_forms", "contexts"):
                continue
            if isinstance(value, str):
                target[str(key)] = value
            elif isinstance(value, list) and all(isinstance(v, str) for v in value):
                target[str(key)] = tuple(value)
            else:
                logger.warning(
                    "invalid_message_format",
                    file=str(source_file),
                    key=str(key),
                    expected="str or list of str",
                )
