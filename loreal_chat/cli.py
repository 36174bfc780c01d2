"""Terminal front end: renders the conversation and handles commands."""

import asyncio
from datetime import datetime
from typing import Optional

import httpx

from .config import get_settings, resolve_endpoint, save_endpoint_override
from .logging_config import configure_logging, get_logger
from .models.chat import ChatMessage
from .relay_client import MODE_DIRECT, RelayClient
from .services.chat_session import ChatSession
from .services.conversation import ConversationStore
from .services.theme import THEMES, ContrastCorrector, ThemeManager
from .storage import KeyValueStorage, get_storage

logger = get_logger(__name__)

HELP_TEXT = """Commands:
  /clear          clear conversation history
  /theme <name>   switch theme ({themes})
  /audit          show the contrast audit
  /worker <url>   save the relay worker URL
  /help           show this help
  /quit           exit"""


def format_time(ts: Optional[int]) -> str:
    if not ts:
        return ""
    try:
        return datetime.fromtimestamp(ts / 1000).strftime("%b %d, %I:%M %p")
    except (OverflowError, OSError, ValueError):
        return ""


def render_message(message: ChatMessage) -> None:
    stamp = format_time(message.timestamp)
    suffix = f"  [{stamp}]" if stamp else ""
    if message.role == "user":
        print(f"🧑 You: {message.content}{suffix}")
    else:
        print(f"💄 Assistant: {message.content}{suffix}")


def render_latest_question(text: Optional[str]) -> None:
    if text:
        print(f"   Latest question: {text}")


def render_audit(manager: ThemeManager) -> None:
    print(f"🎨 Theme: {manager.style.theme}")
    for result in manager.last_audit:
        print(f"   {result.pair}: {result.fg} on {result.bg} -> {result.contrast:.2f}")


def build_session(
    storage: KeyValueStorage,
    endpoint_override: Optional[str] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ChatSession:
    settings = get_settings()
    endpoint = resolve_endpoint(settings, storage, override=endpoint_override)
    client = RelayClient.from_settings(settings, endpoint, http_client=http_client)
    return ChatSession(ConversationStore(storage), client)


async def run(
    storage: Optional[KeyValueStorage] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> None:
    """Interactive chat loop."""
    if storage is None:
        storage = get_storage()
    settings = get_settings()

    manager = ThemeManager(storage, ContrastCorrector(storage, target=settings.contrast_target))
    manager.startup()

    session = build_session(storage, http_client=http_client)

    print("💄 L'Oréal Beauty Assistant")
    print("=" * 40)

    if session.client.mode is None:
        print("⚠️  Worker URL not configured. Use /worker <url> to set it.")
    elif session.client.mode == MODE_DIRECT:
        print("⚠️  No worker URL: calling the completion API directly (development only).")
    else:
        print("✅ Worker URL configured.")

    state = session.start()
    for message in state.messages:
        render_message(message)
    render_latest_question(state.latest_question)
    if state.greeting:
        print(f"💄 Assistant: {state.greeting}")

    while True:
        try:
            line = await asyncio.to_thread(input, "\n> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        text = line.strip()
        if not text:
            continue

        if text.startswith("/"):
            command, _, arg = text.partition(" ")
            arg = arg.strip()

            if command in ("/quit", "/exit"):
                break
            elif command == "/help":
                print(HELP_TEXT.format(themes=", ".join(THEMES)))
            elif command == "/clear":
                answer = await asyncio.to_thread(
                    input,
                    "Clear conversation history? This will remove saved messages. [y/N] ",
                )
                if answer.strip().lower() in ("y", "yes"):
                    print(f"💄 Assistant: {session.clear()}")
            elif command == "/theme":
                manager.change_theme(arg)
                render_audit(manager)
            elif command == "/audit":
                render_audit(manager)
            elif command == "/worker":
                url = save_endpoint_override(storage, arg)
                if url:
                    session.client.endpoint = url
                    print("✅ Worker URL configured.")
                else:
                    print("⚠️  Please enter a worker URL.")
            else:
                print(f"Unknown command {command}. Type /help for commands.")
            continue

        print("💄 Assistant: Thinking...")
        result = await session.submit(text)
        if result is None:
            continue

        render_latest_question(result.user_message.content)
        if result.reply is not None:
            render_message(result.reply)
        else:
            print(f"💄 Assistant: {result.error}")


def main() -> None:
    configure_logging()
    asyncio.run(run())


if __name__ == "__main__":
    main()
