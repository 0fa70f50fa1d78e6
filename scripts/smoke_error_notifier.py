#!/usr/bin/env python3
"""
Manual smoke test for telegram_error_notifier against a real bot.

Before running:
1. Set environment variables:
   export TELEGRAM_BOT_TOKEN="your_bot_token_here"
   export TELEGRAM_CHAT_ID="your_chat_id_here"

2. Or pass them directly to the script:
   python smoke_error_notifier.py --token YOUR_TOKEN --chat-id YOUR_CHAT_ID --as-file
"""

import argparse
import sys
import traceback

import requests
from loguru import logger

from telegram_error_notifier import ErrorNotifier


def main():
    parser = argparse.ArgumentParser(description='Smoke test ErrorNotifier')
    parser.add_argument('--token', help='Bot token (or set TELEGRAM_BOT_TOKEN env var)')
    parser.add_argument('--chat-id', help='Chat ID (or set TELEGRAM_CHAT_ID env var)')
    parser.add_argument('--as-file', action='store_true', help='Send failures as JSON documents')
    parser.add_argument('--log-file', default='./error.log', help='Local error log path')
    parser.add_argument(
        '--url',
        default='https://httpbin.org/status/404',
        help='URL expected to fail',
    )
    args = parser.parse_args()

    try:
        logger.info("🤖 Creating error notifier...")
        notifier = ErrorNotifier.from_env(
            bot_token=args.token,
            chat_id=args.chat_id,
            send_as_file=args.as_file,
            log_file_path=args.log_file,
        )
    except ValueError as e:
        logger.error(f"❌ Configuration error: {e}")
        logger.info("Set TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID or pass --token and --chat-id")
        sys.exit(1)

    with notifier:
        session = notifier.get_session()

        logger.info(f"📤 Requesting {args.url} (expected to fail)...")
        try:
            session.get(args.url, params={"source": "smoke"}, timeout=10)
            logger.warning("⚠️  Request succeeded, nothing was reported")
        except requests.HTTPError as e:
            logger.info(f"✅ Caller still got the error: {e}")
        except requests.RequestException as e:
            logger.info(f"✅ Caller still got the network error: {e}")
        except Exception as e:
            logger.error(f"❌ Unexpected error occurred: {e}")
            logger.debug(traceback.format_exc())
            sys.exit(1)

        logger.info("📤 Requesting an unreachable host...")
        try:
            session.get("http://127.0.0.1:9/unreachable", timeout=2)
        except requests.RequestException as e:
            logger.info(f"✅ Caller still got the network error: {type(e).__name__}")

    logger.info(f"🎉 Done. Check the chat and {args.log_file}")


if __name__ == "__main__":
    main()
