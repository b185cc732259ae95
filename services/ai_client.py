"""
Chat-completion client with error classification and bounded retry
"""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import openai
from openai import AsyncOpenAI
from loguru import logger

from config.settings import Settings
from models.exceptions import (
    AIServiceError,
    AuthError,
    RateLimited,
    ServiceUnavailable,
    NetworkError,
    MalformedResponse,
    UnknownError,
)

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[None]]


def classify_error(error: BaseException) -> AIServiceError:
    """Map SDK/transport exceptions onto the AI error taxonomy"""
    if isinstance(error, AIServiceError):
        return error

    if isinstance(error, (openai.APIConnectionError, asyncio.TimeoutError)):
        return NetworkError(str(error) or "Request timed out")

    if isinstance(error, openai.APIStatusError):
        status = error.status_code
        if status in (401, 403):
            return AuthError(f"HTTP {status}: {error.message}")
        if status == 429:
            return RateLimited(f"HTTP {status}: {error.message}")
        if status >= 500:
            return ServiceUnavailable(f"HTTP {status}: {error.message}")
        return UnknownError(f"HTTP {status}: {error.message}")

    return UnknownError(str(error) or error.__class__.__name__)


def backoff_delay(attempt: int, base: float = 1.0) -> float:
    """Delay before the retry that follows `attempt` (0-based): base * 2^attempt"""
    return base * (2 ** attempt)


async def with_retry(
    request_fn: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    backoff_base: float = 1.0,
    sleep: SleepFn = asyncio.sleep,
) -> T:
    """Run `request_fn` up to `max_attempts` times, sleeping between transient failures.

    Non-retriable errors are raised immediately. The last error is raised,
    already classified, once attempts are exhausted.
    """
    for attempt in range(max_attempts):
        try:
            return await request_fn()
        except Exception as e:
            error = classify_error(e)
            logger.warning(f"Attempt {attempt + 1}/{max_attempts} failed: {error.__class__.__name__}: {error}")

            if not error.retriable or attempt == max_attempts - 1:
                if error is e:
                    raise
                raise error from e

            await sleep(backoff_delay(attempt, backoff_base))

    raise UnknownError("No attempts made")


class AIClient:
    """Chat-completion client built once from settings and passed to the services that need it"""

    def __init__(self, settings: Settings, sleep: SleepFn = asyncio.sleep, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self.model = settings.ai_model
        self.timeout = settings.ai_timeout_seconds
        self.max_retries = settings.ai_max_retries
        self.backoff_base = settings.ai_backoff_base
        self.sleep = sleep
        self.client = client

        if self.client is None and settings.ai_configured:
            self.client = AsyncOpenAI(
                api_key=settings.ai_api_key,
                base_url=settings.ai_base_url,
                max_retries=0,
                timeout=settings.ai_timeout_seconds,
                default_headers={
                    "HTTP-Referer": settings.app_url,
                    "X-Title": settings.app_name,
                },
            )

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def complete(
        self,
        system: str,
        prompt: str,
        temperature: float = 0.6,
        max_tokens: int = 800,
        retry: bool = True,
    ) -> str:
        """Send one chat completion and return the reply text.

        Raises:
            AIServiceError: classified failure after retries (if enabled)
        """
        if not self.is_configured:
            raise AuthError("AI API key not configured")

        async def attempt() -> str:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": system},
                        {"role": "user", "content": prompt},
                    ],
                    temperature=temperature,
                    max_tokens=max_tokens,
                ),
                timeout=self.timeout,
            )
            content = response.choices[0].message.content if response.choices else None
            if not content or not content.strip():
                raise MalformedResponse("No response from AI")
            return content.strip()

        return await with_retry(
            attempt,
            max_attempts=self.max_retries if retry else 1,
            backoff_base=self.backoff_base,
            sleep=self.sleep,
        )
