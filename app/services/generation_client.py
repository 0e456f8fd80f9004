"""
Клиент генерации текста с перебором моделей-кандидатов.

Бэкенд: любой OpenAI-совместимый chat completions API (по умолчанию Gemini).
Каждый кандидат вызывается ровно один раз, первый непустой ответ возвращается сразу.
"""
import logging
from enum import Enum
from typing import Optional

import openai
from openai import AsyncOpenAI

from app.core.config import GenerationConfig


logger = logging.getLogger(__name__)


class GenerationErrorKind(str, Enum):
    """Классы ошибок бэкенда генерации"""
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    EMPTY_RESPONSE = "empty_response"
    BACKEND_ERROR = "backend_error"
    CONNECTION = "connection"


class GenerationError(RuntimeError):
    """Ошибка генерации; после перебора всех кандидатов несет последнюю наблюдавшуюся ошибку"""

    def __init__(self, message: str, kind: GenerationErrorKind = GenerationErrorKind.BACKEND_ERROR, model: str = None, last_error: "GenerationError" = None):
        super().__init__(message)
        self.kind = kind
        self.model = model
        self.last_error = last_error


def classify_error(error: Exception, model: str) -> GenerationError:
    """Приводит исключение SDK к единой таксономии GenerationError"""
    if isinstance(error, GenerationError):
        return error
    if isinstance(error, openai.NotFoundError):
        return GenerationError(f"Model {model} is not available: {error}", GenerationErrorKind.NOT_FOUND, model)
    if isinstance(error, openai.RateLimitError):
        return GenerationError(f"Rate limit exceeded for model {model}: {error}", GenerationErrorKind.RATE_LIMITED, model)
    if isinstance(error, openai.APIStatusError):
        return GenerationError(f"Backend error {error.status_code} for model {model}: {error}", GenerationErrorKind.BACKEND_ERROR, model)
    if isinstance(error, openai.APIConnectionError):
        return GenerationError(f"Backend unreachable for model {model}: {error}", GenerationErrorKind.CONNECTION, model)
    return GenerationError(f"Backend error for model {model}: {error}", GenerationErrorKind.BACKEND_ERROR, model)


class GenerationClient:
    def __init__(self, config: GenerationConfig, client: AsyncOpenAI = None):
        self.config = config
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """SDK-клиент создается при первом обращении"""
        if self._client is None:
            if not self.config.api_key:
                raise ValueError("GENERATION_API_KEY is required for AI services")

            client_kwargs = {"api_key": self.config.api_key, "max_retries": 0}
            if self.config.base_url:
                client_kwargs["base_url"] = self.config.base_url
            self._client = AsyncOpenAI(**client_kwargs)
        return self._client

    async def _complete(self, client: AsyncOpenAI, model: str, prompt: str, temperature: float, max_tokens: int) -> str:
        response = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        if not response.choices:
            raise GenerationError(f"Model {model} returned no candidates", GenerationErrorKind.EMPTY_RESPONSE, model)

        text = (response.choices[0].message.content or "").strip()
        if not text:
            raise GenerationError(f"Model {model} returned empty text", GenerationErrorKind.EMPTY_RESPONSE, model)
        return text

    async def generate(self, prompt: str, *, temperature: Optional[float] = None, max_tokens: Optional[int] = None) -> str:
        """
        Генерирует ответ, перебирая модели-кандидаты в порядке приоритета.

        Args:
            prompt: текст промпта (непустой)
            temperature: переопределение температуры из конфигурации
            max_tokens: переопределение лимита выходных токенов

        Returns:
            Сгенерированный текст первого успешного кандидата

        Raises:
            ValueError: пустой промпт или не задан API-ключ
            GenerationError: все кандидаты завершились ошибкой
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt must not be empty")

        temperature = self.config.temperature if temperature is None else temperature
        max_tokens = self.config.max_output_tokens if max_tokens is None else max_tokens
        # Отсутствие ключа - ошибка конфигурации, а не сбой кандидата
        client = self.client

        last_error: Optional[GenerationError] = None
        for model in self.config.models:
            try:
                text = await self._complete(client, model, prompt, temperature, max_tokens)
            except Exception as e:
                last_error = classify_error(e, model)
                logger.warning(f"Generation: модель {model} не ответила ({last_error.kind.value}): {last_error}")
                continue

            logger.info(f"Generation: ответ получен от модели {model}, {len(text)} символов")
            return text

        if last_error is None:
            raise GenerationError("No candidate models configured")
        raise GenerationError(
            f"All candidate models failed, last error: {last_error}",
            last_error.kind,
            last_error.model,
            last_error,
        )
