from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from DayLog.config import Settings
from DayLog.formatters.base import SummaryFormatter
from DayLog.formatters.errors import (
    AuthenticationError,
    ContentError,
    RemoteServerError,
    TransientError,
)
from DayLog.prompts import DAILY_TABLE_PROMPT

log = logging.getLogger(__name__)

# Server busy / rate limited: worth another attempt.
TRANSIENT_STATUS_CODES = (429, 503)

HARM_CATEGORIES = [
    genai_types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    genai_types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    genai_types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    genai_types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
]


def build_prompt(log_text: str) -> str:
    return DAILY_TABLE_PROMPT.format(log_text=log_text).strip()


class GeminiFormatter(SummaryFormatter):
    """
    Formats a day log by asking Gemini for the table.

    Each call is one retryable unit of work: HTTP 429/503 responses are
    retried with exponential backoff (0.5s, 1s, ...) up to
    `settings.llm_retries` attempts, everything else fails immediately.
    """

    name = "remote"

    def __init__(
        self,
        settings: Settings,
        client: Optional[genai.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.api_key = (settings.api_key or "").strip()
        self._client = client
        self._sleep = sleep

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(
                api_key=self.api_key,
                # HttpOptions.timeout is in milliseconds
                http_options=genai_types.HttpOptions(timeout=self.settings.llm_timeout_s * 1000),
            )
        return self._client

    def _generation_config(self) -> genai_types.GenerateContentConfig:
        return genai_types.GenerateContentConfig(
            temperature=self.settings.llm_temperature,
            top_p=self.settings.llm_top_p,
            top_k=self.settings.llm_top_k,
            max_output_tokens=self.settings.llm_max_output_tokens,
            safety_settings=[
                genai_types.SafetySetting(
                    category=category,
                    threshold=genai_types.HarmBlockThreshold.BLOCK_NONE,
                )
                for category in HARM_CATEGORIES
            ],
        )

    def format(self, log_text: str) -> str:
        if not self.api_key:
            raise AuthenticationError(
                "Missing Gemini API key. Set DAYLOG_API_KEY (or GEMINI_API_KEY)."
            )

        prompt = build_prompt(log_text)
        retries = max(self.settings.llm_retries, 1)
        for attempt in range(retries):
            try:
                log.debug(f"Attempt {attempt+1}/{retries} to call Gemini ({self.settings.model_name}).")
                return self._query(prompt)
            except TransientError as e:
                if attempt + 1 == retries:
                    log.error(f"Max retries reached for Gemini API call (last status {e.status}).")
                    raise
                delay = (2 ** attempt) * self.settings.llm_retry_delay_base_s
                log.warning(f"Gemini busy (HTTP {e.status}) on attempt {attempt+1}/{retries}, retrying in {delay}s.")
                self._sleep(delay)

    def _query(self, prompt: str) -> str:
        try:
            response = self.client.models.generate_content(
                model=self.settings.model_name,
                contents=prompt,
                config=self._generation_config(),
            )
        except genai_errors.APIError as e:
            body = e.message or str(e)
            if e.code in TRANSIENT_STATUS_CODES:
                raise TransientError(e.code, body) from e
            log.error(f"Gemini API error: HTTP {e.code} - {body}")
            raise RemoteServerError(e.code, body) from e
        except httpx.TimeoutException as e:
            log.error(f"Gemini request timed out after {self.settings.llm_timeout_s}s.")
            raise RemoteServerError(None, f"timed out after {self.settings.llm_timeout_s}s") from e
        except httpx.HTTPError as e:
            log.error(f"Gemini request failed: {type(e).__name__} - {e}")
            raise RemoteServerError(None, str(e) or type(e).__name__) from e

        return extract_text(response)


def extract_text(response: genai_types.GenerateContentResponse) -> str:
    """Join the text parts of the first candidate, rejecting blocked or empty replies."""
    feedback = response.prompt_feedback
    if feedback and feedback.block_reason:
        reason = getattr(feedback.block_reason, "value", feedback.block_reason)
        log.error(f"Prompt was blocked by Gemini. Reason: {reason}")
        raise ContentError(f"Blocked: {reason}")

    candidates = response.candidates or []
    content = candidates[0].content if candidates else None
    parts = content.parts if content else None
    if not parts:
        raise ContentError("No content returned")

    text = "".join(part.text or "" for part in parts).strip()
    if not text:
        raise ContentError("Empty text result")
    return text
