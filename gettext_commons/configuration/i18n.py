"""Translation lookup and catalog resolution settings."""

import json
import os
from typing import Annotated, Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import NoDecode, SettingsConfigDict

from gettext_commons.configuration.base import LibrarySettings


class I18nSettings(LibrarySettings):
    """Catalog resolution configuration.

    Environment Variables:
        GETTEXT_COMMONS_DEFAULT_LOCALE: Locale used when none is requested
            (default: detected from LANGUAGE, LC_ALL, LC_MESSAGES, LANG)
        GETTEXT_COMMONS_SOURCE_LOCALE: Language the source strings are written in (default: en)
        GETTEXT_COMMONS_DEFAULT_CATALOG_NAME: Catalog name searched for when a
            namespace has no config resource (default: i18n.Messages)
        GETTEXT_COMMONS_CONFIG_FILENAME: Per-namespace config resource (default: i18n.yml)
        GETTEXT_COMMONS_SEARCH_PATHS: Catalog search roots, separated by os.pathsep
            or given as a JSON list (default: directories on sys.path)
        GETTEXT_COMMONS_USE_LOADER_CACHE: Memoize loaded catalogs (default: True)

    Example:
        ```python
        from gettext_commons.configuration import settings

        catalog_name = settings.i18n.DEFAULT_CATALOG_NAME
        roots = settings.i18n.SEARCH_PATHS
        ```
    """

    model_config = SettingsConfigDict(env_prefix="GETTEXT_COMMONS_")

    DEFAULT_LOCALE: Optional[str] = Field(
        default=None,
        description="Locale used when none is requested",
    )
    SOURCE_LOCALE: str = Field(
        default="en",
        description="Language the untranslated source strings are written in",
    )
    DEFAULT_CATALOG_NAME: str = Field(
        default="i18n.Messages",
        description="Catalog name searched for when no config resource names one",
    )
    CONFIG_FILENAME: str = Field(
        default="i18n.yml",
        description="Name of the per-namespace config resource",
    )
    SEARCH_PATHS: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        description="Directories searched for catalogs and config resources",
    )
    USE_LOADER_CACHE: bool = Field(
        default=True,
        description="Memoize loaded catalogs per (name, locale)",
    )

    @field_validator("SEARCH_PATHS", mode="before")
    @classmethod
    def split_search_paths(cls, v: Any) -> Any:
        """Accept an os.pathsep separated string or a JSON list."""
        if v is None:
            return []
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [part for part in v.split(os.pathsep) if part]
        return v
