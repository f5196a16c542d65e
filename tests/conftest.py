"""pytest global fixtures: environment isolation."""

import pytest


@pytest.fixture(autouse=True)
def no_real_apis(monkeypatch):
    """Keep tests offline: mock geocoder, bundled data, default grid."""
    for name in (
        "GEOCODER_PROVIDER",
        "GEOCODER_BASE_URL",
        "GEOCODER_USER_AGENT",
        "GEOCODER_TIMEOUT_SECONDS",
        "GEOCODE_CACHE_TTL_SECONDS",
        "LAYOUT_SLOT_MINUTES",
        "ATTRACTION_DATA_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
