import pytest

from telegram_error_notifier.notifierConfig import TelegramConfig
from telegram_error_notifier.telegramClient import TelegramAPIError, TelegramClient
from tests.conftest import telegram_reply

CONFIG = TelegramConfig(token="123:ABC", chat_id=-100500)


def test_send_text_posts_json_to_send_message(telegram_session):
    client = TelegramClient(CONFIG, session=telegram_session)

    result = client.send_text("*hi*", parse_mode="Markdown")

    assert result["result"]["message_id"] == 42
    args, kwargs = telegram_session.post.call_args
    assert args[0] == "https://api.telegram.org/bot123:ABC/sendMessage"
    assert kwargs["json"] == {"chat_id": -100500, "text": "*hi*", "parse_mode": "Markdown"}


def test_long_text_is_truncated(telegram_session):
    client = TelegramClient(CONFIG, session=telegram_session)

    client.send_text("x" * 5000)

    sent = telegram_session.post.call_args.kwargs["json"]["text"]
    assert len(sent) == 4096
    assert sent.endswith("...")


def test_send_document_uploads_multipart(telegram_session, tmp_path):
    doc = tmp_path / "report.json"
    doc.write_text("{}")
    client = TelegramClient(CONFIG, session=telegram_session)

    client.send_document(doc, caption="caption here")

    args, kwargs = telegram_session.post.call_args
    assert args[0].endswith("/sendDocument")
    assert kwargs["data"] == {"chat_id": -100500, "caption": "caption here"}
    assert kwargs["files"]["document"][0] == "report.json"


def test_send_document_missing_file(telegram_session, tmp_path):
    client = TelegramClient(CONFIG, session=telegram_session)

    with pytest.raises(FileNotFoundError):
        client.send_document(tmp_path / "nope.json")
    telegram_session.post.assert_not_called()


def test_api_error_is_raised(telegram_session):
    telegram_session.post.return_value = telegram_reply(ok=False, status=400, description="chat not found")
    client = TelegramClient(CONFIG, session=telegram_session)

    with pytest.raises(TelegramAPIError, match="chat not found"):
        client.send_text("hello")


def test_non_json_reply_is_an_api_error(telegram_session):
    reply = telegram_reply()
    reply.json.side_effect = ValueError("not json")
    reply.status_code = 502
    telegram_session.post.return_value = reply
    client = TelegramClient(CONFIG, session=telegram_session)

    with pytest.raises(TelegramAPIError, match="Non-JSON"):
        client.send_text("hello")


def test_non_object_json_reply_is_an_api_error(telegram_session):
    reply = telegram_reply()
    reply.json.return_value = ["not", "an", "object"]
    telegram_session.post.return_value = reply
    client = TelegramClient(CONFIG, session=telegram_session)

    with pytest.raises(TelegramAPIError, match="Unexpected response"):
        client.send_text("hello")
