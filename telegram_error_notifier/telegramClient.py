"""
Minimal Telegram Bot API client used to deliver error notifications.

Only the two calls the notifier needs: sendMessage (JSON body) and
sendDocument (multipart upload). No retries; callers decide what a failed
delivery means.
"""

from __future__ import annotations

import pathlib
import typing as t

import requests
from loguru import logger

from telegram_error_notifier.notifierConfig import TelegramConfig

MAX_TEXT_LENGTH = 4096
MAX_CAPTION_LENGTH = 1024


class TelegramAPIError(Exception):
    """Generic Telegram API error."""


class TelegramClient:
    """
    Telegram Bot API client bound to a single chat.

    - send_text() posts JSON to sendMessage.
    - send_document() uploads a local file to sendDocument.
    - Raises TelegramAPIError when Telegram does not answer ok.
    """

    def __init__(self, config: TelegramConfig, session: requests.Session | None = None) -> None:
        self._cfg = config
        self._session = session or requests.Session()

    def send_text(
        self,
        text: str,
        *,
        parse_mode: t.Literal["Markdown", "MarkdownV2", "HTML"] | None = None,
    ) -> dict[str, t.Any]:
        """
        Send a text message to the configured chat.

        Raises:
            TelegramAPIError: On API errors
            requests.RequestException: On transport errors
        """
        if len(text) > MAX_TEXT_LENGTH:
            logger.warning(f"Message length {len(text)} exceeds Telegram limit of {MAX_TEXT_LENGTH} characters")
            text = text[:MAX_TEXT_LENGTH - 3] + "..."

        payload: dict[str, t.Any] = {"chat_id": self._cfg.chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode

        logger.debug("Making request to sendMessage")
        resp = self._session.post(
            self._endpoint("sendMessage"),
            json=payload,
            timeout=self._cfg.timeout_seconds,
        )
        return self._handle_response(resp)

    def send_document(self, path: str | pathlib.Path, *, caption: str | None = None) -> dict[str, t.Any]:
        """
        Upload a local file as a document.

        Raises:
            FileNotFoundError: If the file doesn't exist
            TelegramAPIError: On API errors
            requests.RequestException: On transport errors
        """
        path = pathlib.Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Document file not found: {path}")

        if caption and len(caption) > MAX_CAPTION_LENGTH:
            logger.warning(f"Caption length {len(caption)} exceeds Telegram limit of {MAX_CAPTION_LENGTH} characters")
            caption = caption[:MAX_CAPTION_LENGTH - 3] + "..."

        data: dict[str, t.Any] = {"chat_id": self._cfg.chat_id}
        if caption:
            data["caption"] = caption

        with path.open("rb") as f:
            logger.debug("Making multipart request to sendDocument")
            resp = self._session.post(
                self._endpoint("sendDocument"),
                data=data,
                files={"document": (path.name, f)},
                timeout=self._cfg.timeout_seconds,
            )
        return self._handle_response(resp)

    def close(self) -> None:
        self._session.close()

    def _endpoint(self, method: str) -> str:
        return f"{self._cfg.base_url}/bot{self._cfg.token}/{method}"

    def _handle_response(self, resp: requests.Response) -> dict[str, t.Any]:
        try:
            data = resp.json()
        except ValueError as e:
            raise TelegramAPIError(f"Non-JSON response: {resp.status_code} {resp.text[:200]}") from e

        if not isinstance(data, dict):
            raise TelegramAPIError(f"Unexpected response: {resp.status_code} {str(data)[:200]}")

        if resp.ok and data.get("ok", False):
            logger.debug(f"Request successful: {data.get('result', {}).get('message_id', 'N/A')}")
            return data

        error_code = data.get("error_code", resp.status_code)
        description = data.get("description", "Unknown error")
        raise TelegramAPIError(f"Telegram API error ({error_code}): {description}")
