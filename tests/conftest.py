import pytest

from pain_rulesets.catalog import ScaleCatalog, get_catalog, install_catalog


@pytest.fixture(scope="session")
def catalog():
    """Load the shipped catalog once for the entire test session."""
    return ScaleCatalog().load()


@pytest.fixture
def restore_shared_catalog():
    """Put the process-wide catalog back after a test swaps it."""
    original = get_catalog()
    yield original
    install_catalog(original)
