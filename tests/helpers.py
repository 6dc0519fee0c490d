"""Test helpers: fake HTTP responses and a scripted prompter."""

import json
from contextlib import contextmanager
from typing import List, Optional

import requests

from pronto.prompts import Prompter

API_URL = "https://api.compose.test/2016-07"

DEPLOYMENT_BODY = {
    "id": "dep_1",
    "ca_certificate_base64": "QUJD",
    "connection_strings": {"cli": ["cli://x"], "direct": ["mongodb://y"]},
}


def make_response(status_code: int, body=None, text: Optional[str] = None) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    if body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = (text or "").encode("utf-8")
    return response


class FakePrompter(Prompter):
    """Prompter that answers from fixed values and records what was asked."""

    def __init__(self, token: str = "tok_abc", database: str = "mongodb", events: List[str] = None):
        self.token = token
        self.database = database
        self.events = events if events is not None else []
        self.offered = None

    def request_token(self) -> str:
        self.events.append("request_token")
        return self.token

    def choose_database(self, choices) -> str:
        self.events.append("choose_database")
        self.offered = list(choices)
        return self.database

    @contextmanager
    def deploying(self, database):
        self.events.append(f"deploying:{database.value}")
        yield


