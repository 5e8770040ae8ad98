import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models import FakeListChatModel

from tests.stubs import EchoChatModel, make_client


@pytest.fixture
def hello_client() -> TestClient:
    """Client whose backend always answers 'hello'."""
    return make_client(FakeListChatModel(responses=["hello"]))


@pytest.fixture
def echo_client() -> TestClient:
    return make_client(EchoChatModel())
