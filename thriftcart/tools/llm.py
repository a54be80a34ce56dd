from typing import Any, Dict

from langchain_openai import ChatOpenAI

from thriftcart.app.settings import settings
from thriftcart.tools.openai_retry import retry_with_backoff


def build_chat_llm(temperature: float, max_tokens: int | None = None, json_mode: bool = False):
    """ChatOpenAI pointed at the configured OpenAI-compatible endpoint (Groq by default)."""
    kwargs: Dict[str, Any] = {
        "model": settings.analysis_model,
        "temperature": temperature,
        "timeout": settings.request_timeout,
        "base_url": settings.analysis_base_url,
        # rate limits are retried by tools.openai_retry
        "max_retries": 0,
    }
    if max_tokens:
        kwargs["max_tokens"] = max_tokens
    if settings.groq_api_key:
        kwargs["api_key"] = settings.groq_api_key
    llm = ChatOpenAI(**kwargs)
    if json_mode:
        return llm.bind(response_format={"type": "json_object"})
    return llm


@retry_with_backoff(
    max_retries=settings.llm_max_retries,
    initial_delay=settings.llm_initial_delay,
    max_delay=settings.llm_max_delay,
)
async def ainvoke_with_retry(llm, messages: list) -> Any:
    """Invoke LLM with retry logic for rate limits; returns the message content."""
    response = await llm.ainvoke(messages)
    return response.content
