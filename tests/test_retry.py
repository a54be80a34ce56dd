import asyncio

import httpx
import pytest
from openai import RateLimitError

from thriftcart.tools.openai_retry import retry_with_backoff


def rate_limited(message="Rate limit reached"):
    response = httpx.Response(429, request=httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions"))
    return RateLimitError(message, response=response, body=None)


def test_retries_rate_limits_then_succeeds():
    calls = []

    @retry_with_backoff(max_retries=2, initial_delay=0, max_delay=0)
    async def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise rate_limited()
        return "ok"

    assert asyncio.run(flaky()) == "ok"
    assert len(calls) == 3


def test_gives_up_after_max_retries():
    calls = []

    @retry_with_backoff(max_retries=1, initial_delay=0, max_delay=0)
    async def always_limited():
        calls.append(1)
        raise rate_limited("insufficient_quota")

    with pytest.raises(RateLimitError):
        asyncio.run(always_limited())
    assert len(calls) == 2


def test_other_errors_are_not_retried():
    calls = []

    @retry_with_backoff(max_retries=3, initial_delay=0, max_delay=0)
    async def broken():
        calls.append(1)
        raise ValueError("bad request")

    with pytest.raises(ValueError):
        asyncio.run(broken())
    assert len(calls) == 1
