"""Shared fixtures for Pronto tests."""

from unittest.mock import MagicMock

import pytest
import requests

from pronto.api_client import ComposeClient
from pronto.config_store import ConfigStore
from tests.helpers import API_URL, DEPLOYMENT_BODY, FakePrompter, make_response


@pytest.fixture
def store(tmp_path):
    return ConfigStore(tmp_path / "config" / "pronto.json")


@pytest.fixture
def events():
    return []


@pytest.fixture
def prompter(events):
    return FakePrompter(events=events)


@pytest.fixture
def session(events):
    """Session mock answering the happy-path scenario and logging call order."""
    session = MagicMock(spec=requests.Session)

    def _get(url, **kwargs):
        events.append("GET " + url[len(API_URL):])
        return make_response(200, {"id": "acct_1"})

    def _post(url, **kwargs):
        events.append("POST " + url[len(API_URL):])
        return make_response(200, DEPLOYMENT_BODY)

    session.get.side_effect = _get
    session.post.side_effect = _post
    return session


@pytest.fixture
def client(session):
    return ComposeClient(base_url=API_URL, session=session)
