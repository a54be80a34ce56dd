"""Shopping-only chat assistant on top of the analysis LLM endpoint."""
import logging
from typing import Optional

from langchain_core.prompts import ChatPromptTemplate

from thriftcart.app.settings import settings
from thriftcart.prompts.assistant_prompt import ASSISTANT_SYSTEM, ASSISTANT_USER_TEMPLATE, OFF_TOPIC_REPLY
from thriftcart.tools.llm import ainvoke_with_retry, build_chat_llm

logger = logging.getLogger(__name__)

UNAVAILABLE_REPLY = "I couldn't generate a response right now. Please try again."


class ShoppingAssistant:
    def __init__(self, llm=None, api_key: Optional[str] = None):
        self._llm = llm
        self.api_key = api_key if api_key is not None else settings.groq_api_key
        self.prompt = ChatPromptTemplate.from_messages(
            [("system", ASSISTANT_SYSTEM), ("user", ASSISTANT_USER_TEMPLATE)]
        ).partial(off_topic=OFF_TOPIC_REPLY)

    @property
    def available(self) -> bool:
        return self._llm is not None or bool(self.api_key)

    async def answer(self, query: str) -> str:
        if not query.strip():
            return OFF_TOPIC_REPLY
        if not self.available:
            logger.warning("Assistant called without an API key configured")
            return UNAVAILABLE_REPLY
        try:
            if self._llm is None:
                self._llm = build_chat_llm(temperature=settings.assistant_temperature)
            messages = self.prompt.format_messages(query=query)
            answer = await ainvoke_with_retry(self._llm, messages)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Assistant generation failed: %s", exc)
            return UNAVAILABLE_REPLY
        return answer.strip() or UNAVAILABLE_REPLY
