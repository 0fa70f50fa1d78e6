import json
from unittest.mock import MagicMock

import pytest
import requests


def make_response(status: int, body=None, reason: str = "", url: str = "https://api.example.com/items") -> requests.Response:
    """Build a requests.Response without touching the network."""
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp.url = url
    if body is None:
        resp._content = b""
    elif isinstance(body, (dict, list)):
        resp._content = json.dumps(body).encode()
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = str(body).encode()
    return resp


def telegram_reply(ok: bool = True, status: int = 200, description: str = "Bad Request") -> MagicMock:
    reply = MagicMock(ok=ok and status < 400, status_code=status, text="")
    if ok:
        reply.json.return_value = {"ok": True, "result": {"message_id": 42}}
    else:
        reply.json.return_value = {"ok": False, "error_code": status, "description": description}
    return reply


@pytest.fixture
def telegram_session() -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.post.return_value = telegram_reply()
    return session


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "logs" / "error.log"
