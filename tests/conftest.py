import pytest


class FakeResponse:
    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Stands in for requests.Session; records every post() call."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def make_session():
    def _make(status_code=None, text='', error=None):
        response = FakeResponse(status_code, text) if status_code is not None else None
        return FakeSession(response, error)
    return _make
