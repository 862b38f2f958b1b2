"""Feature-level fixtures for i18n system tests.

Builds a catalog tree below a temporary search root:

- testapp/i18n/Messages_de.mo        German messages with plurals and contexts
- testapp/i18n/Messages_en.mo        English messages (the source language)
- testapp/testpackage/i18n.yml       basename: testapp.testpackage.TestMessages
- testapp/testpackage/TestMessages_de.po, TestMessages_fr.po
- testapp/own/i18n/Messages_de.mo    catalog owned by testapp.own
- DefaultMessages_en.po              catalog at the root level
"""

import pytest

from gettext_commons.i18n import GettextCatalogLoader, YAMLCatalogLoader
from tests.factories.i18n import write_gettext_catalog, write_namespace_config

GERMAN_MESSAGES = {
    "house": "Haus",
    "mouse": "Maus",
    "Automatic": "Automatisch",
    "Completion": "Ergänzung",
    ("File", "{0} Files"): ("Datei", "{0} Dateien"),
}

GERMAN_CONTEXTS = {
    "noun": {"chat": "Chat"},
    "verb": {"chat": "Chatten"},
    "files": {("File", "{0} Files"): ("Akte", "{0} Akten")},
}


@pytest.fixture
def catalog_root(tmp_path):
    """Create the catalog tree and return its search root."""
    write_gettext_catalog(
        tmp_path,
        "testapp.i18n.Messages",
        GERMAN_MESSAGES,
        locale="de",
        contexts=GERMAN_CONTEXTS,
    )
    write_gettext_catalog(
        tmp_path,
        "testapp.i18n.Messages",
        {"house": "house"},
        locale="en",
        contexts={"verb": {"chat": "chat (verb)"}},
    )

    write_namespace_config(
        tmp_path, "testapp.testpackage", "testapp.testpackage.TestMessages"
    )
    write_gettext_catalog(
        tmp_path,
        "testapp.testpackage.TestMessages",
        {"value": "Wert"},
        locale="de",
        compiled=False,
    )
    write_gettext_catalog(
        tmp_path,
        "testapp.testpackage.TestMessages",
        {"value": "valeur"},
        locale="fr",
        compiled=False,
    )

    write_gettext_catalog(
        tmp_path, "testapp.own.i18n.Messages", {"own": "yes"}, locale="de"
    )
    write_gettext_catalog(
        tmp_path,
        "DefaultMessages",
        {"source": "DefaultBundle"},
        locale="en",
        compiled=False,
    )
    return tmp_path


@pytest.fixture
def gettext_loader(catalog_root):
    """Create GettextCatalogLoader for the temporary catalog tree."""
    return GettextCatalogLoader(search_paths=[catalog_root], use_cache=False)


@pytest.fixture
def gettext_loader_with_cache(catalog_root):
    """Create GettextCatalogLoader with caching enabled."""
    return GettextCatalogLoader(search_paths=[catalog_root], use_cache=True)


@pytest.fixture
def yaml_loader(tmp_path):
    """Create YAMLCatalogLoader for an empty temporary search root."""
    return YAMLCatalogLoader(search_paths=[tmp_path], use_cache=False)
