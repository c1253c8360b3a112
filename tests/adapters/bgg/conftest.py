"""Shared fixtures for BoardGameGeek adapter tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from shelfsync.config.bgg import BggConfig
from shelfsync.config.http_resilience import ResilienceConfig

FIXTURES = Path(__file__).resolve().parents[2] / "data" / "bgg"


def load_fixture(name: str) -> bytes:
    return (FIXTURES / name).read_bytes()


@pytest.fixture
def search_xml() -> bytes:
    return load_fixture("search_azul.xml")


@pytest.fixture
def thing_xml() -> bytes:
    return load_fixture("thing_azul.xml")


@pytest.fixture
def error_xml() -> bytes:
    return load_fixture("error.xml")


@pytest.fixture
def bgg_config() -> BggConfig:
    return BggConfig(
        resilience=ResilienceConfig(name="bgg", base_url="https://bgg.test/xmlapi2/", cache=None)
    )
