"""Test configuration."""

import json
import os
from collections.abc import Generator

import pytest

os.environ.setdefault("LOCATIONIQ_API_KEY", "test_key")

from geonorm.core.logging import configure_logging  # noqa: E402
from tests.fixtures.locationiq import FakeTransport, json_place  # noqa: E402

configure_logging(testing=True)


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Transport with an empty body; tests set ``body`` as needed."""
    return FakeTransport()


@pytest.fixture
def autocomplete_json() -> str:
    """Autocomplete body with a city, a plain suburb and La Défense."""
    return json.dumps(
        [
            json_place(),
            json_place(
                place_id="2",
                type="suburb",
                address={"name": "Belleville", "state": "Île-de-France", "postcode": "75020"},
            ),
            json_place(
                place_id="3",
                type="suburb",
                address={
                    "name": "La Défense",
                    "state": "Île-de-France",
                    "county": "Hauts-de-Seine",
                    "postcode": "92400",
                },
            ),
        ]
    )


@pytest.fixture
def clean_provider_singleton() -> Generator[None, None, None]:
    """Reset the shared provider around a test."""
    import geonorm.geocoding.provider as provider_module

    provider_module._provider = None
    yield
    provider_module._provider = None
