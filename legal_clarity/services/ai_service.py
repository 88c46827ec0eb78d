"""
AI/LLM Integration Service

Thin clients for the hosted model: structured (JSON) chat completions through
OpenRouter's OpenAI-compatible API, OCR through a vision model, and speech
synthesis through an OpenAI-compatible /audio/speech endpoint. No retries and
no model fallback: a failed call raises ModelError with the upstream message.
"""
import re
import json
import logging
from typing import Optional, Dict, Any, Type, TypeVar, get_origin

import requests
from pydantic import BaseModel, ValidationError

from ..config import (
    OPENROUTER_API_KEY, OPENAI_API_BASE, AI_MODEL, AI_VISION_MODEL, AI_REQUEST_TIMEOUT,
    APP_REFERER, APP_TITLE, TTS_API_KEY, TTS_API_BASE, TTS_MODEL, TTS_VOICE
)
from ..core.exceptions import ModelError
from ..models import OcrResult, PromptName
from .prompts import PROMPTS, render_prompt

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def parse_json_content(content: str) -> Any:
    """Parse a model reply as JSON, tolerating a surrounding markdown code fence."""
    text = content.strip()
    match = _CODE_FENCE.match(text)
    if match:
        text = match.group(1)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ModelError(f"Model returned invalid JSON: {e}") from e


class OpenRouterService:
    """
    A service for making structured API calls to OpenRouter.
    """

    def __init__(
        self,
        api_key: str = None,
        api_base: str = None,
        model: str = None,
        vision_model: str = None,
        referer: str = None,
        title: str = None,
        timeout: Optional[float] = AI_REQUEST_TIMEOUT
    ):
        self.api_key = api_key or OPENROUTER_API_KEY
        self.api_base = (api_base or OPENAI_API_BASE).rstrip("/")
        self.model = model or AI_MODEL
        self.vision_model = vision_model or AI_VISION_MODEL
        self.timeout = timeout

        if not self.api_key:
            logger.warning("API key is not configured. Please set OPENROUTER_API_KEY.")

        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": referer or APP_REFERER,
            "X-Title": title or APP_TITLE
        }

        self._session = requests.Session()
        self._session.headers.update(self.headers)

    def _create_payload(self, system_prompt: str, user_content: Any, model: str) -> Dict[str, Any]:
        """Creates the JSON payload for a chat completion that must answer in JSON."""
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content}
            ],
            "response_format": {"type": "json_object"},
            "temperature": 0.3
        }

    def _post_chat(self, payload: Dict[str, Any]) -> str:
        """Send one chat completion request and return the reply text."""
        if not self.api_key:
            raise ModelError("API key not configured. Please set OPENROUTER_API_KEY environment variable.")

        model = payload["model"]
        try:
            response = self._session.post(
                f"{self.api_base}/chat/completions",
                json=payload,
                timeout=self.timeout
            )
            response.raise_for_status()
            result = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Network or HTTP error with model {model}: {e}")
            raise ModelError(f"Model request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Non-JSON response from model {model}: {e}")
            raise ModelError(f"Model returned a malformed response: {e}") from e

        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Malformed response from model {model}: {e}")
            raise ModelError("Model returned no choices.") from e

        if not content or not content.strip():
            raise ModelError("Model returned an empty response.")
        return content

    def _validate(self, data: Any, output_model: Type[ModelT], prompt_name: str) -> ModelT:
        # a bare JSON array is accepted for single-list outputs such as {"risks": [...]}
        if isinstance(data, list):
            list_fields = [name for name, field in output_model.model_fields.items()
                           if get_origin(field.annotation) is list]
            if len(list_fields) == 1:
                data = {list_fields[0]: data}
        try:
            return output_model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Output of '{prompt_name}' did not match {output_model.__name__}: {e}")
            raise ModelError(f"Model output did not match the expected schema: {e}") from e

    def generate_json(self, prompt_name: PromptName, output_model: Type[ModelT], **inputs) -> ModelT:
        """
        Render a named prompt, ask the model for JSON matching ``output_model``
        and return the validated result.

        Raises:
            ModelError: on transport errors, empty replies, invalid JSON or a schema mismatch.
        """
        prompt_name = PromptName(prompt_name)
        rendered = render_prompt(prompt_name, **inputs)
        schema = json.dumps(output_model.model_json_schema(by_alias=True))
        user_prompt = f"{rendered.template}\n\nRespond with JSON matching this schema:\n{schema}"

        logger.info(f"Calling model {self.model} with prompt '{prompt_name.value}'")
        content = self._post_chat(self._create_payload(rendered.system, user_prompt, self.model))
        return self._validate(parse_json_content(content), output_model, prompt_name.value)

    def perform_ocr(self, image_data_uri: str) -> str:
        """Extract text from one image given as a base64 data URI."""
        prompt = PROMPTS[PromptName.OCR]
        schema = json.dumps(OcrResult.model_json_schema(by_alias=True))
        user_content = [
            {"type": "text", "text": f"{prompt.template}\n\nRespond with JSON matching this schema:\n{schema}"},
            {"type": "image_url", "image_url": {"url": image_data_uri}}
        ]
        logger.info(f"Calling vision model {self.vision_model} for OCR")
        content = self._post_chat(self._create_payload(prompt.system, user_content, self.vision_model))
        return self._validate(parse_json_content(content), OcrResult, PromptName.OCR.value).text


class SpeechService:
    """Text-to-speech through an OpenAI-compatible /audio/speech endpoint returning raw PCM."""

    def __init__(
        self,
        api_key: str = None,
        api_base: str = None,
        model: str = None,
        voice: str = None,
        timeout: Optional[float] = AI_REQUEST_TIMEOUT
    ):
        self.api_key = api_key or TTS_API_KEY
        self.api_base = (api_base or TTS_API_BASE).rstrip("/")
        self.model = model or TTS_MODEL
        self.voice = voice or TTS_VOICE
        self.timeout = timeout

        self._session = requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        })

    def synthesize(self, text: str) -> bytes:
        """Return 24kHz mono 16-bit little-endian PCM for ``text``."""
        if not self.api_key:
            raise ModelError("Speech API key not configured. Please set TTS_API_KEY environment variable.")

        payload = {
            "model": self.model,
            "voice": self.voice,
            "input": text,
            "response_format": "pcm"
        }
        try:
            response = self._session.post(f"{self.api_base}/audio/speech", json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Speech synthesis request failed: {e}")
            raise ModelError(f"Speech request failed: {e}") from e

        if not response.content:
            raise ModelError("No audio media was returned from the model.")
        return response.content
