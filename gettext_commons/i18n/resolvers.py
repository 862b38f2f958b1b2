"""Locale resolution logic.

Determines the default locale of the process (settings, then the POSIX
locale environment variables) and the chain of candidate locales searched
when loading a catalog (de_DE@euro -> de_DE -> de -> root).
"""

import os
import threading
from typing import List, Mapping, Optional

from gettext_commons.configuration import settings
from gettext_commons.i18n.models import Locale, LocaleLike
from gettext_commons.logging import get_module_logger

logger = get_module_logger()

# Same precedence gettext.find() uses
ENVIRONMENT_VARIABLES = ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG")


class LocaleResolver:
    """Resolves the default locale from configuration and environment.

    Fallback chain:
    1. Locale set explicitly with set_default()
    2. settings.i18n.DEFAULT_LOCALE
    3. LANGUAGE, LC_ALL, LC_MESSAGES, LANG environment variables
    4. English
    """

    _override: Optional[Locale] = None
    _lock = threading.Lock()

    @classmethod
    def default_locale(cls) -> Locale:
        """Return the locale used when a caller does not request one."""
        override = cls._override
        if override is not None:
            return override

        if settings.i18n.DEFAULT_LOCALE:
            try:
                return Locale.parse(settings.i18n.DEFAULT_LOCALE)
            except ValueError:
                logger.warning(
                    "invalid_default_locale_setting",
                    value=settings.i18n.DEFAULT_LOCALE,
                )

        return cls.resolve_from_environment(os.environ) or Locale.ENGLISH

    @classmethod
    def set_default(cls, locale: Optional[LocaleLike]) -> None:
        """Override the default locale; None restores environment detection."""
        with cls._lock:
            cls._override = Locale.parse(locale) if locale is not None else None
        logger.debug("default_locale_set", locale=str(cls._override))

    @staticmethod
    def resolve_from_environment(environ: Mapping[str, str]) -> Optional[Locale]:
        """Resolve a locale from POSIX locale variables.

        LANGUAGE may hold a colon separated preference list; its first
        parseable entry wins. "C" and "POSIX" mean no locale preference.

        Args:
            environ: Environment mapping (usually os.environ).

        Returns:
            Resolved Locale, or None if no variable names a usable locale.
        """
        for name in ENVIRONMENT_VARIABLES:
            value = environ.get(name)
            if not value:
                continue
            for candidate in value.split(":"):
                candidate = candidate.strip()
                if not candidate or candidate.split(".")[0] in ("C", "POSIX"):
                    continue
                try:
                    return Locale.parse(candidate)
                except ValueError:
                    logger.debug(
                        "skipped_unparseable_locale", variable=name, value=candidate
                    )
        return None

    @staticmethod
    def resolve_from_string(locale_str: str) -> Locale:
        """Parse and validate a locale string.

        Raises:
            ValueError: If locale_str is not a recognised locale identifier.
        """
        try:
            return Locale.parse(locale_str)
        except ValueError:
            logger.warning("invalid_locale_string", locale_str=locale_str)
            raise

    @staticmethod
    def candidate_locales(locale: Locale) -> List[Locale]:
        """Return the locales searched for a catalog, most specific first.

        The root locale is always last, so de_DE@euro yields
        [de_DE@euro, de_DE, de, root].
        """
        candidates: List[Locale] = []
        if locale.variant:
            candidates.append(locale)
        if locale.territory:
            candidates.append(Locale(locale.language, locale.territory))
        if locale.language:
            candidates.append(Locale(locale.language))
        candidates.append(Locale.ROOT)

        unique: List[Locale] = []
        for candidate in candidates:
            if candidate not in unique:
                unique.append(candidate)
        return unique
