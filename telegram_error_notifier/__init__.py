"""
Telegram Error Notifier - failed-request alerts for Python services.

Wraps a requests session so that every failed call:
- Sends a Markdown message (or a JSON document) to a Telegram chat
- Appends a block to a local error log
- Still raises the original exception to the caller

Basic usage:
    from telegram_error_notifier import ErrorNotifier

    notifier = ErrorNotifier(bot_token="123456:ABC", chat_id="-100123")
    session = notifier.get_session()
    session.get("https://api.example.com/items")
"""

__version__ = "0.1.0"

from .errorNotifier import ErrorNotifier, format_error_message, format_log_entry
from .errorRecord import NO_RESPONSE, ErrorRecord
from .monitoredSession import MonitoredSession
from .notifierConfig import NotifierConfig, NotifierConfigError, TelegramConfig
from .telegramClient import TelegramAPIError, TelegramClient

__all__ = [
    "ErrorNotifier",
    "ErrorRecord",
    "MonitoredSession",
    "NO_RESPONSE",
    "NotifierConfig",
    "NotifierConfigError",
    "TelegramAPIError",
    "TelegramClient",
    "TelegramConfig",
    "format_error_message",
    "format_log_entry",
    "__version__",
]
