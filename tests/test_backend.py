import asyncio

import pytest
from langchain_core.language_models import FakeListChatModel
from langchain_ollama import ChatOllama

from config.settings import Settings
from llm.backend import InferenceBackend, build_backend, build_prompt
from llm.core.memory import ChatMessage, start_conversation

from tests.stubs import EchoChatModel, FailingChatModel


def test_prompt_substitutes_question():
    prompt = build_prompt()
    assert prompt.input_variables == ["question"]
    assert prompt.format(question="Why?") == (
        "You are a helpful assistant. Answer the following question: Why?"
    )


def test_chat_returns_reply_and_extended_conversation():
    backend = InferenceBackend(FakeListChatModel(responses=["hello"]))
    conversation = start_conversation("hi")

    reply, updated = asyncio.run(backend.chat(conversation))

    assert reply == "hello"
    assert updated == [
        ChatMessage(role="user", content="hi"),
        ChatMessage(role="assistant", content="hello"),
    ]
    assert conversation == [ChatMessage(role="user", content="hi")]


def test_chat_sends_full_conversation():
    backend = InferenceBackend(EchoChatModel())
    conversation = [
        ChatMessage(role="user", content="one"),
        ChatMessage(role="assistant", content="two"),
        ChatMessage(role="user", content="three"),
    ]

    reply, updated = asyncio.run(backend.chat(conversation))

    assert reply == "one\ntwo\nthree"
    assert len(updated) == 4


def test_complete_runs_template_through_model():
    backend = InferenceBackend(EchoChatModel())
    result = asyncio.run(backend.complete("What is 2+2?"))
    assert result == "You are a helpful assistant. Answer the following question: What is 2+2?"


def test_errors_propagate_from_backend():
    backend = InferenceBackend(FailingChatModel(error=RuntimeError("down")))
    with pytest.raises(RuntimeError, match="down"):
        asyncio.run(backend.complete("anything"))
    with pytest.raises(RuntimeError, match="down"):
        asyncio.run(backend.chat(start_conversation("anything")))


def test_build_backend_uses_local_ollama():
    backend = build_backend(Settings())
    assert isinstance(backend.model, ChatOllama)
    assert backend.model.model == "llama3.2:1b"
    assert backend.model.base_url == "http://localhost:11434"
