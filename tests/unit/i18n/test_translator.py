"""Tests for gettext_commons.i18n.translator module."""

import threading

import pytest

from gettext_commons.i18n import (
    CatalogNotFound,
    EmptyCatalog,
    Locale,
    Translator,
    marktr,
)
from gettext_commons.i18n.translator import format_message
from tests.factories.i18n import make_plain_catalog, make_plural_catalog

CATALOG_NAME = "testapp.i18n.Messages"


@pytest.fixture
def translator_de(gettext_loader):
    """Translator bound to the German test catalog."""
    return Translator(catalog_name=CATALOG_NAME, locale="de", loader=gettext_loader)


@pytest.fixture
def translator_en(gettext_loader):
    """Translator bound to the English test catalog."""
    return Translator(catalog_name=CATALOG_NAME, locale="en", loader=gettext_loader)


@pytest.mark.unit
class TestTranslatorInitialization:
    """Tests for Translator construction and binding."""

    def test_init_with_catalog(self):
        """Translator binds a catalog passed directly."""
        catalog = make_plain_catalog()
        translator = Translator(catalog)
        assert translator.catalog is catalog
        assert translator.locale == Locale.GERMAN
        assert translator.catalog_name is None
        assert translator.loader is None

    def test_init_with_catalog_name(self, translator_de, gettext_loader):
        """Translator loads a named catalog through the loader."""
        assert translator_de.catalog_name == CATALOG_NAME
        assert translator_de.loader is gettext_loader
        assert translator_de.locale == Locale.GERMAN
        assert translator_de.catalog.locale == Locale.GERMAN

    def test_init_without_catalog_raises_error(self):
        """Translator() without a catalog or catalog name raises ValueError."""
        with pytest.raises(ValueError):
            Translator(None)

    def test_init_missing_catalog_raises_not_found(self, gettext_loader):
        """Translator raises CatalogNotFound for an unknown catalog name."""
        with pytest.raises(CatalogNotFound) as exc_info:
            Translator(catalog_name="nowhere.Messages", locale="de", loader=gettext_loader)
        assert exc_info.value.catalog_name == "nowhere.Messages"

    def test_bind_requires_all_arguments(self, translator_de, gettext_loader):
        """bind() raises ValueError when an argument is None."""
        with pytest.raises(ValueError):
            translator_de.bind(None, "de", gettext_loader)
        with pytest.raises(ValueError):
            translator_de.bind(CATALOG_NAME, None, gettext_loader)
        with pytest.raises(ValueError):
            translator_de.bind(CATALOG_NAME, "de", None)

    def test_bind_catalog_none_raises_error(self, translator_de):
        """bind_catalog(None) raises ValueError."""
        with pytest.raises(ValueError):
            translator_de.bind_catalog(None)

    def test_default_source_locale_is_english(self):
        """Source locale defaults to English."""
        translator = Translator(make_plain_catalog())
        assert translator.source_locale == Locale.ENGLISH


@pytest.mark.unit
class TestTr:
    """Tests for tr()."""

    def test_tr(self, translator_de):
        """tr() returns the German translation."""
        assert translator_de.tr("house") == "Haus"
        assert translator_de.tr("mouse") == "Maus"
        assert translator_de.tr("Automatic") == "Automatisch"
        assert translator_de.tr("Completion") == "Ergänzung"

    def test_tr_missing_key_returns_text(self, translator_de):
        """tr() returns the key itself when there is no translation."""
        assert translator_de.tr("no such message") == "no such message"

    def test_tr_empty_catalog_returns_text(self):
        """tr() on an EmptyCatalog returns the key itself."""
        translator = Translator(EmptyCatalog.for_locale(Locale.GERMAN))
        assert translator.tr("anything") == "anything"

    def test_tr_one_argument(self, translator_en):
        """tr() substitutes a single positional argument."""
        assert translator_en.tr("House Nr. {0} ", 2) == "House Nr. 2 "
        assert translator_en.tr("{0}", "0") == "0"

    def test_tr_two_arguments(self, translator_en):
        """tr() substitutes arguments independent of placeholder order."""
        assert translator_en.tr("Foo {1} {0}", "foo", "bar") == "Foo bar foo"
        assert translator_en.tr("Foo {0} {1}", "foo", "bar") == "Foo foo bar"
        assert translator_en.tr("{1} {0}", "foo", "bar") == "bar foo"

    def test_tr_three_arguments(self, translator_en):
        assert translator_en.tr("Foo {1} {2} {0}", "foo", "bar", "baz") == "Foo bar baz foo"
        assert translator_en.tr("Foo {0} {1} {2}", "foo", "bar", "baz") == "Foo foo bar baz"

    def test_tr_four_arguments(self, translator_en):
        assert (
            translator_en.tr("Foo {1} {2} {3} {0}", "foo", "bar", "baz", "boing")
            == "Foo bar baz boing foo"
        )
        assert (
            translator_en.tr("{0} {1} {2} {3}", "foo", "bar", "baz", "boing")
            == "foo bar baz boing"
        )

    def test_tr_formats_translation(self):
        """tr() substitutes arguments into the translated text."""
        translator = Translator(make_plain_catalog({"{0} houses": "{0} Häuser"}))
        assert translator.tr("{0} houses", 3) == "3 Häuser"

    def test_marktr(self):
        """marktr() returns its argument unchanged."""
        assert marktr("Foo") == "Foo"
        assert Translator.marktr("Foo") == "Foo"


@pytest.mark.unit
class TestFormatMessage:
    """Tests for positional placeholder substitution."""

    def test_repeated_placeholder(self):
        assert format_message("{0} and {0}", ["x"]) == "x and x"

    def test_missing_argument_left_untouched(self):
        assert format_message("{0} {1}", ["x"]) == "x {1}"

    def test_named_braces_left_untouched(self):
        assert format_message("{name} {0}", ["x"]) == "{name} x"


@pytest.mark.unit
class TestTrn:
    """Tests for trn()."""

    def test_trn_untranslated_english(self, translator_en):
        """trn() falls back to singular/plural source text."""
        assert translator_en.trn("Foo", "{0} Bars", 1) == "Foo"
        assert translator_en.trn("Foo", "{0} Bars", 2) == "{0} Bars"
        assert translator_en.trn("Foo", "{0} Bars", 2, 2) == "2 Bars"

    def test_trn_german(self, translator_de):
        """trn() selects the plural form from the catalog's plural rule."""
        assert translator_de.trn("File", "{0} Files", 1, 1) == "Datei"
        assert translator_de.trn("File", "{0} Files", 2, 2) == "2 Dateien"
        assert translator_de.trn("File", "{0} Files", 0, 0) == "0 Dateien"

    def test_trn_arguments(self, translator_en):
        assert translator_en.trn("Foo {0} ", "Foos {0}", 1, "foo") == "Foo foo "
        assert translator_en.trn("Foo {1} {0}", "Foos", 1, "foo", "bar") == "Foo bar foo"
        assert (
            translator_en.trn("Foo {1} {2} {3} {0}", "Foos", 1, "foo", "bar", "baz", "boing")
            == "Foo bar baz boing foo"
        )

    def test_trn_plain_catalog_ignores_count(self):
        """A catalog without plural metadata returns its translation for any n."""
        translator = Translator(make_plain_catalog({"File": "Datei"}))
        for n in (0, 1, 2, 5, 100):
            assert translator.trn("File", "{0} Files", n) == "Datei"

    def test_trn_plain_string_in_plural_catalog(self):
        """A plain entry in a plural catalog does not depend on n."""
        translator = Translator(make_plural_catalog({"house": "Haus"}))
        assert translator.trn("house", "houses", 1) == "Haus"
        assert translator.trn("house", "houses", 7) == "Haus"

    def test_trn_index_out_of_range_uses_first_form(self):
        """A plural index beyond the available forms selects form 0."""
        catalog = make_plural_catalog(
            {"File": ("Datei", "Dateien")},
            plural_forms="nplurals=3; plural=n;",
        )
        translator = Translator(catalog)
        assert translator.trn("File", "Files", 1) == "Dateien"
        assert translator.trn("File", "Files", 5) == "Datei"

    def test_trn_walks_parent_chain(self):
        """trn() consults parent catalogs when the bound catalog misses."""
        parent = make_plural_catalog({"File": ("Datei", "Dateien")}, locale="de")
        child = make_plural_catalog({"house": "Haus"}, locale="de_AT", parent=parent)
        translator = Translator(child)
        assert translator.trn("File", "Files", 2) == "Dateien"

    def test_trn_missing_everywhere(self):
        """trn() falls back to source text when the chain is exhausted."""
        parent = make_plain_catalog({"house": "Haus"})
        child = make_plural_catalog({"mouse": "Maus"}, locale="de_AT", parent=parent)
        translator = Translator(child)
        assert translator.trn("File", "Files", 1) == "File"
        assert translator.trn("File", "Files", 3) == "Files"


@pytest.mark.unit
class TestTrc:
    """Tests for trc() and trnc()."""

    def test_trc(self, translator_en, translator_de):
        """trc() disambiguates by context."""
        assert translator_en.trc("noun", "chat") == "chat"
        assert translator_en.trc("verb", "chat") == "chat"
        assert translator_de.trc("noun", "chat") == "Chat"
        assert translator_de.trc("verb", "chat") == "Chatten"

    def test_trc_source_locale_skips_lookup(self, translator_en):
        """trc() returns text unchanged when the catalog is in the source language."""
        # the English catalog has an entry for verb/chat, which is not used
        assert translator_en.trc("verb", "chat") == "chat"

    def test_trc_returns_text_when_translation_not_found(self, translator_de):
        """trc() returns text, not the composed key, on a miss."""
        assert translator_de.trc("dont translate to German", "baobab") == "baobab"

    def test_set_source_locale(self, translator_de):
        """set_source_locale() changes when trc() skips translation."""
        translator_de.set_source_locale(Locale.GERMAN)
        assert translator_de.trc("verb", "chat") == "chat"
        translator_de.set_source_locale("en")
        assert translator_de.trc("verb", "chat") == "Chatten"

    def test_set_source_locale_none_raises_error(self, translator_de):
        with pytest.raises(ValueError):
            translator_de.set_source_locale(None)

    def test_trnc(self, translator_de):
        """trnc() selects plural forms of a context entry."""
        assert translator_de.trnc("files", "File", "{0} Files", 1, 1) == "Akte"
        assert translator_de.trnc("files", "File", "{0} Files", 3, 3) == "3 Akten"

    def test_trnc_missing_context(self, translator_de):
        """trnc() falls back to source text for an unknown context."""
        assert translator_de.trnc("unknown", "File", "{0} Files", 1) == "File"
        assert translator_de.trnc("unknown", "File", "{0} Files", 4, 4) == "4 Files"


@pytest.mark.unit
class TestRebind:
    """Tests for rebind(), bind_catalog() and concurrent lookups."""

    def test_rebind_without_loader_records_locale(self):
        """rebind() returns False for a translator bound to a catalog object."""
        catalog = make_plain_catalog()
        translator = Translator(catalog)
        assert translator.rebind(Locale.FRENCH) is False
        assert translator.locale == Locale.FRENCH
        assert translator.catalog is catalog

    def test_rebind_with_loader_reloads(self, gettext_loader):
        """rebind() reloads the catalog for the new locale."""
        translator = Translator(make_plain_catalog())
        translator.bind("testapp.testpackage.TestMessages", "de", gettext_loader)
        assert translator.tr("value") == "Wert"
        assert translator.rebind(Locale.FRENCH) is True
        assert translator.locale == Locale.FRENCH
        assert translator.catalog.locale == Locale.FRENCH
        assert translator.tr("value") == "valeur"

    def test_set_locale_alias(self, translator_de):
        assert translator_de.set_locale("en") is True
        assert translator_de.tr("house") == "house"

    def test_rebind_missing_locale_keeps_catalog(self, translator_de):
        """rebind() to a locale without catalog raises and keeps the binding."""
        catalog = translator_de.catalog
        with pytest.raises(CatalogNotFound):
            translator_de.rebind(Locale.ITALIAN)
        assert translator_de.catalog is catalog
        assert translator_de.tr("house") == "Haus"

    def test_bind_catalog_forgets_loader(self, translator_de):
        """After bind_catalog(), rebind() can no longer reload."""
        catalog = make_plain_catalog({"house": "Maison"}, locale="fr")
        translator_de.bind_catalog(catalog)
        assert translator_de.catalog_name is None
        assert translator_de.loader is None
        assert translator_de.tr("house") == "Maison"
        assert translator_de.rebind(Locale.GERMAN) is False
        assert translator_de.tr("house") == "Maison"

    def test_lookups_during_rebind_see_whole_catalogs(self, gettext_loader):
        """Concurrent lookups observe either the old or the new catalog."""
        translator = Translator(
            catalog_name="testapp.testpackage.TestMessages",
            locale="de",
            loader=gettext_loader,
        )
        seen = set()
        stop = threading.Event()

        def read():
            while not stop.is_set():
                seen.add(translator.tr("value"))

        readers = [threading.Thread(target=read) for _ in range(4)]
        for reader in readers:
            reader.start()
        for i in range(50):
            translator.rebind("fr" if i % 2 == 0 else "de")
        stop.set()
        for reader in readers:
            reader.join()

        assert seen <= {"Wert", "valeur"}
