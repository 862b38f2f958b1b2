"""Core value types for the i18n system.

Defines locales, resolution flags and the locale change event.
"""

import re
from dataclasses import dataclass
from enum import IntFlag
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

# Separates a message context from its msgid in a composed catalog key,
# the same separator GNU gettext writes into compiled catalogs.
CONTEXT_GLUE = "\x04"

# Marker functions recognised when extracting messages, in the keyword spec
# format understood by babel.messages.extract (and `pybabel extract -k`).
EXTRACTION_KEYWORDS: Dict[str, Optional[Tuple[Any, ...]]] = {
    "tr": None,
    "marktr": None,
    "trn": (1, 2),
    "trc": ((1, "c"), 2),
    "trnc": ((1, "c"), 2, 3),
}

_LOCALE_PATTERN = re.compile(
    r"^(?P<language>[A-Za-z]{2,8})?"
    r"(?:[_-](?P<territory>[A-Za-z]{2}|\d{3}))?"
    r"(?:\.[^@]*)?"
    r"(?:[@_-](?P<variant>[A-Za-z0-9]+))?$"
)


@dataclass(frozen=True)
class Locale:
    """A language, an optional territory and an optional variant.

    Frozen so locales can be compared by value and used as dict keys.
    The root locale has every part empty and renders as "".

    Attributes:
        language: Lowercase ISO 639 code (e.g., "de").
        territory: Uppercase ISO 3166 code (e.g., "DE").
        variant: Free-form variant (e.g., "euro").
    """

    language: str = ""
    territory: str = ""
    variant: str = ""

    ENGLISH: ClassVar["Locale"]
    GERMAN: ClassVar["Locale"]
    FRENCH: ClassVar["Locale"]
    ITALIAN: ClassVar["Locale"]
    ROOT: ClassVar["Locale"]

    def __post_init__(self):
        object.__setattr__(self, "language", self.language.lower())
        object.__setattr__(self, "territory", self.territory.upper())

    def __str__(self) -> str:
        """Return the gettext form of the locale (e.g., "de_DE", "de_DE@euro")."""
        value = self.language
        if self.territory:
            value = f"{value}_{self.territory}"
        if self.variant:
            value = f"{value}@{self.variant}"
        return value

    @classmethod
    def parse(cls, value: Union["Locale", str]) -> "Locale":
        """Convert a locale identifier to a Locale.

        Accepts gettext and POSIX forms ("de", "de_DE", "de_DE.UTF-8",
        "de_DE@euro") as well as IETF tags ("de-DE"). A Locale is returned
        unchanged.

        Args:
            value: Locale or locale string.

        Returns:
            Parsed Locale.

        Raises:
            ValueError: If the value is None or not a recognised identifier.
        """
        if isinstance(value, Locale):
            return value
        if value is None:
            raise ValueError("locale must not be None")

        match = _LOCALE_PATTERN.match(value.strip())
        if match is None:
            raise ValueError(f"Unsupported locale: {value}")
        return cls(
            language=match.group("language") or "",
            territory=match.group("territory") or "",
            variant=match.group("variant") or "",
        )

    @classmethod
    def root(cls) -> "Locale":
        return cls.ROOT

    @property
    def is_root(self) -> bool:
        return not (self.language or self.territory or self.variant)


Locale.ENGLISH = Locale("en")
Locale.GERMAN = Locale("de")
Locale.FRENCH = Locale("fr")
Locale.ITALIAN = Locale("it")
Locale.ROOT = Locale()

LocaleLike = Union[Locale, str]


class ResolveFlags(IntFlag):
    """Options controlling catalog resolution.

    DEFAULT: plain resolution, raise when no catalog is found.
    FALLBACK: return a translator backed by an empty catalog instead of raising.
    READ_CONFIG: consult per-namespace config resources naming a catalog.
    NO_CACHE: bypass the resolution cache and locale broadcasts.
    """

    DEFAULT = 0
    FALLBACK = 1
    READ_CONFIG = 2
    NO_CACHE = 4


@dataclass(frozen=True)
class LocaleChangeEvent:
    """Sent to locale change listeners after a locale broadcast.

    Attributes:
        source: The object that performed the broadcast.
        new_locale: The locale every tracked translator was switched to.
    """

    source: Any
    new_locale: Locale
