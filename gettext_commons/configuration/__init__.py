"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Catalog resolution settings class (for testing)

Example:
    ```python
    from gettext_commons.configuration import settings

    catalog_name = settings.i18n.DEFAULT_CATALOG_NAME
    ```
"""

from gettext_commons.configuration.i18n import I18nSettings
from gettext_commons.configuration.settings import Settings, settings

__all__ = ["Settings", "I18nSettings", "settings"]
