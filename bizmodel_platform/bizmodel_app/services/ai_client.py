"""Minimal client for OpenAI-compatible chat completion APIs."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass

import requests
from flask import current_app

from ..errors import AIContentError


@dataclass
class AIClient:
    api_key: str
    api_base: str
    default_model: str

    def chat(self, messages, model: str | None = None, temperature: float = 0.7):
        if not self.api_key:
            raise AIContentError("ai_not_configured", "OPENAI_API_KEY is not configured")

        payload = {
            "model": model or self.default_model,
            "messages": messages,
            "temperature": temperature,
            "response_format": {"type": "json_object"},
        }
        app = current_app
        connect_timeout = app.config.get("AI_CONNECT_TIMEOUT_SEC", 15)
        read_timeout = app.config.get("AI_READ_TIMEOUT_SEC", 60)
        max_retries = max(1, int(app.config.get("AI_API_MAX_RETRIES", 3)))
        backoff = float(app.config.get("AI_API_RETRY_BACKOFF", 2.0))

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        attempt = 0
        while True:
            attempt += 1
            try:
                response = requests.post(
                    f"{self.api_base.rstrip('/')}/chat/completions",
                    headers=headers,
                    data=json.dumps(payload),
                    timeout=(connect_timeout, read_timeout),
                )
                response.raise_for_status()
                return response.json()
            except requests.RequestException as exc:
                if attempt >= max_retries:
                    raise AIContentError("ai_request_failed", str(exc)) from exc
                delay = backoff * attempt
                app.logger.warning(
                    "AI request failed (attempt %s/%s): %s. Retrying in %.1fs",
                    attempt,
                    max_retries,
                    exc,
                    delay,
                )
                time.sleep(delay)


def extract_message_text(response: dict) -> str:
    try:
        return response["choices"][0]["message"]["content"] or ""
    except (KeyError, IndexError, TypeError) as exc:
        raise AIContentError("ai_bad_response", "AI response had no message content") from exc


def get_ai_client() -> AIClient:
    app = current_app
    client = app.extensions.get("ai_client")
    if client is None:
        client = AIClient(
            api_key=app.config.get("OPENAI_API_KEY", ""),
            api_base=app.config.get("AI_API_BASE", "https://api.openai.com/v1"),
            default_model=app.config.get("AI_CONTENT_MODEL", "gpt-4o-mini"),
        )
        app.extensions["ai_client"] = client
    return client
