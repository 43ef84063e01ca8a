"""Shared fixtures for pyfront tests."""

import pytest

from pyfront.location import Location
from pyfront.tokens import Tok


@pytest.fixture
def loc():
    return Location(row=3, column=7)


@pytest.fixture
def name_tok():
    return Tok("NAME", "spam")


@pytest.fixture
def valid_source():
    return '''
def greet(name):
    if name:
        return f"hello {name!r:>10}"
    return "hello"
'''
