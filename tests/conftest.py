"""Shared fixtures for the gettext-commons test suite."""

import pytest

from gettext_commons.i18n import LocaleBroadcaster, LocaleResolver
from gettext_commons.i18n.factory import clear_cache, set_default_loader


@pytest.fixture(autouse=True)
def isolated_i18n_state():
    """Reset process-wide i18n state around every test.

    Clears the resolution cache, drops the LocaleBroadcaster singleton, the
    default locale override and the default loader.
    """
    clear_cache()
    LocaleBroadcaster.reset_instance()
    LocaleResolver.set_default(None)
    set_default_loader(None)
    yield
    clear_cache()
    LocaleBroadcaster.reset_instance()
    LocaleResolver.set_default(None)
    set_default_loader(None)
