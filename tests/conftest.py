"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from inkwell.ai.client import ClientSettings
from inkwell.editor.session import EditorSession
from tests.helpers import FakeClock


@pytest.fixture
def session() -> EditorSession:
    return EditorSession()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def client_settings() -> ClientSettings:
    return ClientSettings(base_url="http://local", api_key="test-key", model="stub-model")
