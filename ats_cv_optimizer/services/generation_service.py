"""Generation service: submit prompt parts (text and images), optionally under a JSON schema, get text back."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, Field

from ats_cv_optimizer.config import MODEL_NAME, OPENAI_API_KEY
from ats_cv_optimizer.utils.helpers import is_credential_failure
from ats_cv_optimizer.utils.logger import get_logger

logger = get_logger(__name__)


class TextPart(BaseModel):
    text: str = Field(..., description="Instruction or content text")


class ImagePart(BaseModel):
    data: str = Field(..., description="Base64 image payload without a data-URL prefix")
    mime_type: str = Field(default="image/jpeg")

    def as_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


PromptPart = Union[TextPart, ImagePart]


class GenerationServiceError(Exception):
    """The generation request failed (transport, quota, or provider error)."""


class GenerationCredentialError(GenerationServiceError):
    """The API key is missing or was rejected."""


class GenerationService(ABC):
    """Abstract text / structured-output generation provider."""

    @abstractmethod
    async def generate(
        self,
        parts: Sequence[PromptPart],
        output_schema: Optional[dict] = None,
        *,
        schema_name: str = "structured_output",
        temperature: Optional[float] = None,
    ) -> str:
        """
        Send one request made of the given parts, in order. When output_schema is given the
        provider is asked to answer with JSON conforming to it; callers still validate.
        Returns the raw response text.
        """
        ...


def _to_content_block(part: PromptPart) -> dict:
    if isinstance(part, ImagePart):
        return {"type": "image_url", "image_url": {"url": part.as_data_url()}}
    return {"type": "text", "text": part.text}


class OpenAIGenerationService(GenerationService):
    """OpenAI chat completions (vision-capable model for image parts)."""

    def __init__(
        self,
        api_key: str = OPENAI_API_KEY,
        model: str = MODEL_NAME,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._client = client

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self._api_key:
                raise GenerationCredentialError("OPENAI_API_KEY is not set")
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def generate(
        self,
        parts: Sequence[PromptPart],
        output_schema: Optional[dict] = None,
        *,
        schema_name: str = "structured_output",
        temperature: Optional[float] = None,
    ) -> str:
        client = self._get_client()
        content: List[dict] = [_to_content_block(p) for p in parts]
        kwargs: dict = {
            "model": self._model,
            "messages": [{"role": "user", "content": content}],
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        if output_schema is not None:
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": output_schema},
            }

        try:
            response = await client.chat.completions.create(**kwargs)
        except openai.AuthenticationError as e:
            raise GenerationCredentialError(str(e)) from e
        except openai.OpenAIError as e:
            if is_credential_failure(e):
                raise GenerationCredentialError(str(e)) from e
            raise GenerationServiceError(str(e)) from e

        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message:
            raise GenerationServiceError("Model returned no choices")
        logger.debug(
            "Generation finished: model=%s parts=%s finish_reason=%s",
            self._model, len(content), choice.finish_reason,
        )
        return choice.message.content or ""


def get_generation_service(model: Optional[str] = None) -> GenerationService:
    """Return the configured generation service (dependency injection)."""
    return OpenAIGenerationService(model=model or MODEL_NAME)
