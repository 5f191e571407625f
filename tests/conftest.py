"""Shared fixtures: a stub transport and a client wired to it."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.dirname(__file__))

from stubs import TOKEN, StubHttpClient  # noqa: E402
from telegram_sdk.client import TelegramBotClient  # noqa: E402


@pytest.fixture
def transport() -> StubHttpClient:
    return StubHttpClient()


@pytest.fixture
def client(transport: StubHttpClient) -> TelegramBotClient:
    return TelegramBotClient(TOKEN, http_client=transport)


@pytest.fixture
def async_client(transport: StubHttpClient) -> TelegramBotClient:
    return TelegramBotClient(TOKEN, is_async=True, http_client=transport)
