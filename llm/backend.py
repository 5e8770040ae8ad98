from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import PromptTemplate
from langchain_core.runnables import Runnable
from langchain_ollama import ChatOllama

from config.settings import Settings, get_settings
from llm.core.memory import ChatMessage, append_reply, message_text, to_lc_messages
from llm.core.prompt import COMPLETION_TEMPLATE


logger = logging.getLogger(__name__)


def build_prompt() -> PromptTemplate:
    return PromptTemplate.from_template(COMPLETION_TEMPLATE)


def build_completion_chain(model: BaseChatModel, prompt: Optional[PromptTemplate] = None) -> Runnable:
    return (prompt or build_prompt()) | model | StrOutputParser()


class InferenceBackend:
    """Chat-completion backend behind two call shapes.

    ``chat`` sends a full message list to the model; ``complete`` runs the
    fixed question template through ``prompt | model | parser``. Instances
    hold no per-request state and are safe to share across requests.
    """

    def __init__(self, model: BaseChatModel, prompt: Optional[PromptTemplate] = None):
        self.model = model
        self.chain = build_completion_chain(model, prompt)

    async def chat(self, conversation: Sequence[ChatMessage]) -> Tuple[str, List[ChatMessage]]:
        """Run one conversational turn.

        Returns the reply text together with the conversation extended by
        the assistant's message.
        """
        response = await self.model.ainvoke(to_lc_messages(conversation))
        reply = message_text(response)
        logger.info("Chat turn completed: history=%s reply_len=%s", len(conversation), len(reply))
        return reply, append_reply(conversation, reply)

    async def complete(self, question: str) -> str:
        result = await self.chain.ainvoke({"question": question})
        logger.info("Completion finished: reply_len=%s", len(result))
        return result


def build_chat_model(settings: Optional[Settings] = None) -> ChatOllama:
    settings = settings or get_settings()
    return ChatOllama(
        model=settings.ollama_model,
        base_url=settings.ollama_base_url,
    )


def build_backend(settings: Optional[Settings] = None) -> InferenceBackend:
    settings = settings or get_settings()
    logger.info(
        "Inference backend: model=%s base_url=%s",
        settings.ollama_model,
        settings.ollama_base_url,
    )
    return InferenceBackend(build_chat_model(settings))
