"""Smoke tests for the package layout."""

from catalog_api.services.slug_service import derive_base_slug


def test_slug_derivation_smoke():
    """The allocator's pure helper works without a database."""
    assert derive_base_slug("Hello World") == "hello-world"


def test_import_app():
    """Test that we can import the app module."""
    from catalog_api.main import create_app
    app = create_app()
    assert app is not None
    paths = {route.path for route in app.routes}
    assert "/v1/search/suggest" in paths
    assert "/v1/packages/slug/{slug}" in paths
