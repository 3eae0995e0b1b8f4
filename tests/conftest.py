"""Pytest configuration and shared fixtures."""

import json

import pytest

from snowseeker.catalog import build_catalog
from snowseeker.models import Resort


def make_resort(rid, name, country, runs=10, **extra):
    return Resort(id=rid, name=name, country=country, runs=runs, **extra)


@pytest.fixture
def two_resorts():
    """The Zell am See / Chamonix pair in load order."""
    return [
        make_resort("zell", "Zell am See", "Austria", 40),
        make_resort("chamonix", "Chamonix", "France", 80),
    ]


@pytest.fixture
def mixed_resorts():
    """Resorts with case differences, ties and accents."""
    return [
        make_resort("r1", "banff", "Canada", 20),
        make_resort("r2", "Aspen", "united states", 30),
        make_resort("r3", "Åre", "Sweden", 89),
        make_resort("r4", "Banff", "canada", 25),
        make_resort("r5", "Chamonix", "France", 80),
        make_resort("r6", "Val d'Isère", "France", 154),
        make_resort("r7", "123 Peak", "Canada", 5),
    ]


@pytest.fixture
def catalog(mixed_resorts):
    return build_catalog(mixed_resorts)


@pytest.fixture
def write_dataset(tmp_path):
    """Write a list of raw records as a JSON dataset and return its path."""
    def _write(records, name="resorts.json"):
        path = tmp_path / name
        path.write_text(json.dumps(records), encoding="utf-8")
        return path
    return _write
