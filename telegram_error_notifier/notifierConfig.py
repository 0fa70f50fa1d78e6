from __future__ import annotations

import pathlib
from dataclasses import dataclass


class NotifierConfigError(ValueError):
    """Raised when the notifier is built without its required credentials."""


@dataclass(frozen=True)
class TelegramConfig:
    token: str
    chat_id: str | int
    base_url: str = "https://api.telegram.org"
    timeout_seconds: float = 10.0           # per-request timeout


@dataclass(frozen=True)
class NotifierConfig:
    bot_token: str
    chat_id: str | int
    send_as_file: bool = False
    log_file_path: pathlib.Path = pathlib.Path("./error.log")
    temp_dir: pathlib.Path | None = None    # None -> system temp dir

    def __post_init__(self) -> None:
        if not self.bot_token:
            raise NotifierConfigError("bot_token is required.")
        if self.chat_id is None or self.chat_id == "":
            raise NotifierConfigError("chat_id is required.")
