"""gettext-commons configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from gettext_commons.configuration.i18n import I18nSettings


class Settings(BaseSettings):
    """Library configuration settings - main aggregator.

    Environment Variables:
        LOG_LEVEL: Level used by logging.configure_logging (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from gettext_commons.configuration import settings

        source = settings.i18n.SOURCE_LOCALE
        ```
    """

    LOG_LEVEL: str = "INFO"

    i18n: I18nSettings

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "i18n": I18nSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
