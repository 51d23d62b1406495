from __future__ import annotations

import pytest

from helpers import GatedTask


@pytest.fixture
def gated() -> GatedTask:
    return GatedTask()
