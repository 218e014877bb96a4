import itertools
import os

import pytest

os.environ.setdefault('APP_ENV', 'test')

from server import create_app  # noqa: E402
from services.automaton_service import AutomatonService  # noqa: E402


@pytest.fixture
def app():
    app = create_app('test')
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def reset_current_result():
    AutomatonService.reset()
    yield
    AutomatonService.reset()


def all_strings(alphabet, max_len):
    for n in range(max_len + 1):
        for chars in itertools.product(alphabet, repeat=n):
            yield ''.join(chars)
