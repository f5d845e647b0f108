"""Shared test fixtures."""

from __future__ import annotations

import pytest

from pymap2row.keys import DEFAULT_KEY_MAPPER, IDENTITY_KEY_MAPPER, KeyMapper
from pymap2row.schema import DataType, Field, Schema


@pytest.fixture
def default_mapper():
    return DEFAULT_KEY_MAPPER


@pytest.fixture
def identity_mapper():
    return IDENTITY_KEY_MAPPER


@pytest.fixture
def prefix_mapper():
    """Mapper with a convention no built-in rule would produce."""
    return KeyMapper(
        decode=lambda name: name.removeprefix("COL_").lower(),
        encode=lambda key: "COL_" + key.upper(),
    )


@pytest.fixture
def employee_schema():
    return Schema([
        Field(name="ID", type=DataType.INTEGER, nullable=False),
        Field(name="NAME", type=DataType.STRING, nullable=False),
        Field(name="AGE", type=DataType.INTEGER, nullable=True),
    ])
