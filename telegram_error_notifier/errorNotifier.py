"""
errorNotifier.py

Sends a Telegram notification for every failed request made through a
shared requests session, and appends the failure to a local log file.

Environment variables (for ErrorNotifier.from_env):
  TELEGRAM_BOT_TOKEN  -> your BotFather token (e.g., 123456:ABC-DEF...)
  TELEGRAM_CHAT_ID    -> destination chat id (user or group)

Basic usage:
  from telegram_error_notifier import ErrorNotifier
  notifier = ErrorNotifier(bot_token="123456:ABC", chat_id="-100123")
  session = notifier.get_session()
  session.get("https://api.example.com/items")   # failures are reported

Send the failure as a JSON document instead of an inline message:
  notifier = ErrorNotifier(bot_token, chat_id, send_as_file=True)

The original exception always reaches the caller. Notification and log
failures are logged and swallowed.
"""

from __future__ import annotations

import json
import os
import pathlib
import tempfile
import typing as t
from datetime import datetime, timezone

import requests
from loguru import logger

from telegram_error_notifier.errorRecord import ErrorRecord
from telegram_error_notifier.monitoredSession import MonitoredSession
from telegram_error_notifier.notifierConfig import NotifierConfig, TelegramConfig
from telegram_error_notifier.telegramClient import MAX_TEXT_LENGTH, TelegramAPIError, TelegramClient

MESSAGE_TITLE = "*Error while requesting the API*"
DOCUMENT_CAPTION = "An error occurred while requesting the API"
CLIP_MARKER = "\n..."


class ErrorNotifier:
    """
    Reports failed requests of a MonitoredSession to a Telegram chat.

    - Inline mode (default): one Markdown message per failure.
    - File mode (send_as_file=True): one JSON document per failure.
    - Either way, one block is appended to log_file_path.
    """

    def __init__(
        self,
        bot_token: str | None,
        chat_id: str | int | None,
        *,
        send_as_file: bool = False,
        log_file_path: str | os.PathLike[str] = "./error.log",
        temp_dir: str | os.PathLike[str] | None = None,
        session: MonitoredSession | None = None,
        telegram_session: requests.Session | None = None,
    ) -> None:
        # Convert string chat_id to int if it's numeric
        if isinstance(chat_id, str) and chat_id.lstrip('-').isdigit():
            chat_id = int(chat_id)

        self._cfg = NotifierConfig(
            bot_token=bot_token or "",
            chat_id=chat_id,  # type: ignore[arg-type]
            send_as_file=send_as_file,
            log_file_path=pathlib.Path(log_file_path),
            temp_dir=pathlib.Path(temp_dir) if temp_dir is not None else None,
        )
        self._telegram = TelegramClient(
            TelegramConfig(token=self._cfg.bot_token, chat_id=self._cfg.chat_id),
            session=telegram_session,
        )
        self._session = session or MonitoredSession()
        self._session.add_failure_hook(self.handle_error)

    @classmethod
    def from_env(cls, **kwargs: t.Any) -> "ErrorNotifier":
        """Build a notifier from TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID."""
        return cls(
            kwargs.pop("bot_token", None) or os.getenv("TELEGRAM_BOT_TOKEN"),
            kwargs.pop("chat_id", None) or os.getenv("TELEGRAM_CHAT_ID"),
            **kwargs,
        )

    @property
    def config(self) -> NotifierConfig:
        return self._cfg

    @property
    def session(self) -> MonitoredSession:
        return self._session

    def get_session(self) -> MonitoredSession:
        """Session to issue requests through; its failures are reported."""
        return self._session

    # ----------------------------- Failure hook ---------------------------

    def handle_error(self, exc: requests.RequestException, **request_context: t.Any) -> ErrorRecord:
        """
        Build the record for a failed request, deliver it, log it.

        Registered as the session's failure hook; the session re-raises
        `exc` afterwards.
        """
        record = ErrorRecord.from_exception(exc, **request_context)

        try:
            if self._cfg.send_as_file:
                self.send_error_as_file(record)
            else:
                self.send_error_message(record)
        finally:
            self.log_error(record)
        return record

    # ----------------------------- Delivery -------------------------------

    def send_error_message(self, record: ErrorRecord) -> None:
        try:
            self._telegram.send_text(format_error_message(record), parse_mode="Markdown")
        except (requests.RequestException, TelegramAPIError) as e:
            logger.error(f"Error while sending message to Telegram: {e}")
        except Exception:
            logger.exception("Unexpected error while sending message to Telegram")

    def send_error_as_file(self, record: ErrorRecord) -> None:
        """Upload the record as a JSON document; the temp file is always removed."""
        tmp_path: pathlib.Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                prefix="error-",
                suffix=".json",
                dir=self._cfg.temp_dir,
                delete=False,
            ) as f:
                tmp_path = pathlib.Path(f.name)
                f.write(_dumps(record.as_document(), indent=2))

            self._telegram.send_document(tmp_path, caption=DOCUMENT_CAPTION)
        except (requests.RequestException, TelegramAPIError, OSError) as e:
            logger.error(f"Error while sending file to Telegram: {e}")
        except Exception:
            logger.exception("Unexpected error while sending file to Telegram")
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

    # ----------------------------- Local log ------------------------------

    def log_error(self, record: ErrorRecord) -> None:
        path = self._cfg.log_file_path
        entry = format_log_entry(record)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as f:
                f.write(entry)
        except OSError as e:
            logger.error(f"Error writing to the log file {path}: {e}")

    # ----------------------------- Lifecycle ------------------------------

    def close(self) -> None:
        self._session.remove_failure_hook(self.handle_error)
        self._session.close()
        self._telegram.close()

    def __enter__(self) -> "ErrorNotifier":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


# ------------------------------ Formatting -------------------------------

def format_error_message(record: ErrorRecord, max_length: int = MAX_TEXT_LENGTH) -> str:
    """
    Markdown message for one failure, at most `max_length` characters.

    Oversized JSON blocks are clipped (response first, then request) so
    both code fences stay closed.
    """
    request_json = _dumps(record.request_summary(), indent=2)
    response_json = _dumps(record.response_data, indent=2)

    overflow = len(_render_message(record, request_json, response_json)) - max_length
    if overflow > 0:
        response_json = _clip(response_json, len(response_json) - overflow)
        overflow = len(_render_message(record, request_json, response_json)) - max_length
    if overflow > 0:
        request_json = _clip(request_json, len(request_json) - overflow)

    return _render_message(record, request_json, response_json)


def _render_message(record: ErrorRecord, request_json: str, response_json: str) -> str:
    return (
        f"{MESSAGE_TITLE}\n\n"
        f"*URL:* {record.url}\n"
        f"*Method:* {record.method}\n"
        f"*Status:* {record.status} {record.status_text}\n\n"
        f"*Request:* ```json\n{request_json}\n```\n\n"
        f"*Response:* ```json\n{response_json}\n```"
    )


def _clip(text: str, size: int) -> str:
    size = max(size, 0)
    if len(text) <= size:
        return text
    if size < len(CLIP_MARKER):
        return CLIP_MARKER[:size]
    return text[:size - len(CLIP_MARKER)] + CLIP_MARKER


def format_log_entry(record: ErrorRecord, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    timestamp = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return (
        f"[{timestamp}] {record.method.upper()} {record.url} - Status: {record.status}\n"
        f"Request Data: {_dumps(record.data)}\n"
        f"Response Data: {_dumps(record.response_data)}\n\n"
    )


def _dumps(value: t.Any, indent: int | None = None) -> str:
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    try:
        return json.dumps(value, indent=indent, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        # non-str keys or circular references
        return json.dumps(str(value), ensure_ascii=False)
