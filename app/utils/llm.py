"""Utility functions for LLM-related operations using LiteLLM."""

import asyncio
from typing import Any, Generic, TypeVar

import litellm
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from app.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

# Configure LiteLLM
litellm.telemetry = False
litellm.drop_params = True


class LLMOutputValidationError(Exception):
    """The model responded but its output does not conform to the response type."""

    def __init__(self, model: str, errors: list[dict[str, Any]], raw_content: str):
        self.model = model
        self.errors = errors
        self.raw_content = raw_content
        super().__init__(
            f"{model} returned output that failed schema validation "
            f"({len(errors)} errors)"
        )


class LLMMessage(BaseModel):
    """A single message in a chat conversation."""

    role: str  # "user", "assistant", or "system"
    content: str


class LLMResponse(BaseModel, Generic[T]):
    """
    Unified response format with support for structured output.
    """

    content: T | str
    usage: dict[str, Any] = Field(default_factory=dict)
    raw_response: Any = Field(None, exclude=True)

    model_config = ConfigDict(arbitrary_types_allowed=True)


def _parse_content(model: str, raw_content: str | None, response_type: type[T]) -> T:
    try:
        return response_type.model_validate_json(raw_content or "")
    except PydanticValidationError as e:
        raise LLMOutputValidationError(
            model=model,
            errors=e.errors(include_url=False),
            raw_content=raw_content or "",
        ) from e


async def get_completion(
    model: str,
    messages: list[LLMMessage],
    response_type: type[T] | None = None,
    system_prompt: str | None = None,
    temperature: float = 0.5,
    max_tokens: int = 4096,
    timeout: float | None = None,
    max_attempts: int = 3,
) -> LLMResponse[T]:
    """
    Get a completion from an LLM with optional structured output.

    Args:
        model: LiteLLM model name with provider prefix, e.g. ``openai/gpt-4o``.
        messages: The conversation messages.
        response_type: Pydantic model for structured output, or None for text.
        system_prompt: Optional system prompt.
        temperature: Model temperature (0.0 to 1.0).
        max_tokens: Maximum tokens to generate.
        timeout: Wall-clock limit in seconds for each attempt.
        max_attempts: Number of attempts before giving up. Schema validation
            failures are never retried.

    Returns:
        LLMResponse with content and usage data.

    Raises:
        LLMOutputValidationError: If structured output fails validation.
        asyncio.TimeoutError: If an attempt exceeds ``timeout``.
        Exception: Provider errors raised by LiteLLM on the last attempt.
    """
    api_messages = [msg.model_dump() for msg in messages]
    if system_prompt:
        api_messages.insert(0, {"role": "system", "content": system_prompt})

    params: dict[str, Any] = {
        "model": model,
        "messages": api_messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    if timeout is not None:
        params["timeout"] = timeout
    if response_type:
        params["response_format"] = response_type

    for attempt in range(max_attempts):
        try:
            logger.info(
                "LLM request",
                model=model,
                messages=len(api_messages),
                attempt=attempt + 1,
            )

            response = await asyncio.wait_for(
                litellm.acompletion(**params), timeout=timeout
            )
            message = response.choices[0].message

            if response_type:
                content = _parse_content(model, message.content, response_type)
            else:
                content = message.content or ""

            usage = {
                "prompt_tokens": getattr(response.usage, "prompt_tokens", 0),
                "completion_tokens": getattr(response.usage, "completion_tokens", 0),
                "total_tokens": getattr(response.usage, "total_tokens", 0),
            }

            return LLMResponse(content=content, usage=usage, raw_response=response)

        except LLMOutputValidationError:
            raise
        except Exception as e:
            if attempt == max_attempts - 1:
                logger.error(
                    "LLM call failed",
                    model=model,
                    attempts=max_attempts,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            # Exponential backoff
            backoff = 2**attempt
            logger.warning("LLM error, retrying", backoff_seconds=backoff, error=str(e))
            await asyncio.sleep(backoff)

    raise RuntimeError("LLM call made no attempts")
