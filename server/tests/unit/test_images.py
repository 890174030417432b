"""Unit tests for image URL normalization."""

import pytest

from catalog_api.core import images
from catalog_api.core.config import settings
from catalog_api.core.images import (
    first_image,
    get_image_url,
    process_image_urls,
    process_single_image,
    resolve_base_url,
)

BASE = "https://api.example.com"


@pytest.mark.parametrize("stored, expected", [
    ("kerala.jpg", f"{BASE}/uploads/kerala.jpg"),
    ("/kerala.jpg", f"{BASE}/uploads/kerala.jpg"),
    ("uploads/kerala.jpg", f"{BASE}/uploads/kerala.jpg"),
    ("/uploads/kerala.jpg", f"{BASE}/uploads/kerala.jpg"),
    ("/uploads/2024/05/kerala.jpg", f"{BASE}/uploads/2024/05/kerala.jpg"),
])
def test_relative_paths_are_absolutized(stored, expected):
    assert process_single_image(stored, BASE) == expected


def test_trailing_slash_on_base_url():
    assert get_image_url("goa.png", BASE + "/") == f"{BASE}/uploads/goa.png"


def test_relative_url_without_base():
    assert get_image_url("goa.png") == "/uploads/goa.png"
    assert get_image_url("/uploads/goa.png", "") == "/uploads/goa.png"


def test_absolute_urls_pass_through():
    url = "https://cdn.example.com/images/goa.png"
    assert process_single_image(url, BASE) == url
    assert process_single_image("http://old.example.com/uploads/x.png", BASE) == "http://old.example.com/uploads/x.png"


def test_double_prefixed_urls_are_repaired():
    broken = f"{BASE}/uploads/{BASE}/uploads/goa.png"
    assert process_single_image(broken, BASE) == f"{BASE}/uploads/goa.png"


@pytest.mark.parametrize("value", [None, "", 42, ["goa.png"], {"url": "goa.png"}])
def test_invalid_single_values_yield_empty_string(value):
    assert process_single_image(value, BASE) == ""


def test_process_image_urls():
    assert process_image_urls(["a.jpg", "https://cdn.example.com/b.jpg"], BASE) == [
        f"{BASE}/uploads/a.jpg",
        "https://cdn.example.com/b.jpg",
    ]
    assert process_image_urls(None, BASE) == []
    assert process_image_urls("a.jpg", BASE) == []


def test_first_image():
    assert first_image(["", "a.jpg", "b.jpg"], BASE) == f"{BASE}/uploads/a.jpg"
    assert first_image([], BASE) is None
    assert first_image(None, BASE) is None


def test_configured_backend_url_wins(monkeypatch):
    assert resolve_base_url("http://internal:8000/") == "http://internal:8000/"

    monkeypatch.setattr(settings, "backend_url", BASE)
    assert resolve_base_url("http://internal:8000/") == BASE


def test_custom_uploads_path(monkeypatch):
    monkeypatch.setattr(images.settings, "uploads_path", "/media")
    assert get_image_url("/media/goa.png", BASE) == f"{BASE}/media/goa.png"
    assert get_image_url("goa.png", BASE) == f"{BASE}/media/goa.png"
