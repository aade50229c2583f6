"""Test fixture package for geonorm.

Contains LocationIQ response payloads and a canned transport.
"""

from .locationiq import (
    EMPTY_SEARCH_XML,
    REVERSE_ERROR_XML,
    REVERSE_XML,
    SEARCH_XML,
    FakeTransport,
    json_place,
)

__all__ = [
    "EMPTY_SEARCH_XML",
    "REVERSE_ERROR_XML",
    "REVERSE_XML",
    "SEARCH_XML",
    "FakeTransport",
    "json_place",
]
