"""Shared test fixtures."""

import logging

import pytest

from protech.core.types import Coordinates, ServiceLocation
from protech.locations.catalog import LocationCatalog


def make_location(name: str, state_code: str = "OH", lat: float = 41.0, lng: float = -81.5, **kwargs) -> ServiceLocation:
    slug = f"{name.lower().replace(' ', '-')}-{state_code.lower()}"
    return ServiceLocation(
        id=kwargs.pop("id", slug),
        name=name,
        state=kwargs.pop("state", "Ohio" if state_code == "OH" else state_code),
        state_code=state_code,
        coordinates=Coordinates(lat, lng),
        **kwargs,
    )


def make_html(body: str, title: str = "Page", description: str = "", main: bool = True) -> str:
    meta = f'<meta name="description" content="{description}">' if description else ""
    content = f"<main>{body}</main>" if main else body
    return (
        f"<html><head><title>{title}</title>{meta}</head>"
        f"<body><nav>Home Services Contact</nav>{content}<footer>ProTech</footer></body></html>"
    )


@pytest.fixture
def mixed_catalog() -> LocationCatalog:
    """A small catalog with one out-of-state entry."""
    return LocationCatalog(
        core=[
            make_location("Akron", lat=41.0814, lng=-81.5190, primary_area=True, zip_codes=("44301",)),
            make_location("Cleveland", lat=41.4993, lng=-81.6944, zip_codes=("44101",)),
        ],
        expanded=[
            make_location("Erie", state_code="PA", lat=42.1292, lng=-80.0851),
            make_location("Kent", lat=41.1537, lng=-81.3579),
        ],
    )


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """setup_logging() replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def location_factory():
    return make_location


@pytest.fixture
def html_factory():
    return make_html
