import json

import pytest
import requests

from models import Modality, Program


def make_response(status_code=200, payload=None, url="http://test"):
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = url
    resp.encoding = "utf-8"
    resp._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    return resp


class FakeSession:
    """Records requests and replays queued responses or exceptions."""

    def __init__(self, *responses):
        self.headers = {}
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def catalog():
    return [
        Program(1, "Desarrollo de Software", Modality.PRESENCIAL),
        Program(2, "Redes y Telecomunicaciones", Modality.PRESENCIAL),
        Program(3, "Administración", Modality.ON_LINE),
        Program(4, "Contabilidad", Modality.ON_LINE),
        Program(5, "Diseño Gráfico", Modality.HIBRIDA),
    ]
