from __future__ import annotations

import pytest

from json2zig import TypeBuilder


@pytest.fixture
def builder() -> TypeBuilder:
    return TypeBuilder()
