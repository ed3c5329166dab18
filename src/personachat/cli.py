import argparse
import asyncio
import sys
from typing import Optional

from rich import print as rprint
from rich.console import Console
from rich.table import Table

from .config import Settings, get_settings
from .facade import DataService
from .mode import ModeFlag
from .schemas import DataMode
from .stores.seed import DEMO_USER_ID
from .utils.log_config import configure_logging

console = Console()


def _service(settings: Settings, args: argparse.Namespace) -> DataService:
    """Façade for the mode named on the command line, else the persisted flag."""
    mode = DataMode(args.mode) if args.mode else ModeFlag(settings.MODE_FLAG_PATH).read()
    return DataService.from_settings(settings, mode, access_token=args.token)


async def show_characters(service: DataService) -> int:
    async with service:
        characters = await service.list_characters()

    table = Table(title=f"Characters ({service.mode.value})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    for character in characters:
        table.add_row(character.id, character.name, character.description)
    console.print(table)
    return 0


async def show_sessions(service: DataService, user_id: str) -> int:
    async with service:
        sessions = await service.list_sessions(user_id)

    table = Table(title=f"Sessions for {user_id}")
    table.add_column("ID", style="dim")
    table.add_column("Character")
    table.add_column("Title", style="bold")
    table.add_column("Updated")
    for session in sessions:
        updated = session.updated_at or session.created_at
        table.add_row(session.id, session.character_id, session.title, updated.isoformat(timespec="seconds"))
    console.print(table)
    return 0


async def show_history(service: DataService, user_id: str, character_id: str) -> int:
    async with service:
        character = await service.get_character(character_id)
        if character is None:
            rprint(f"[bold red]Unknown character {character_id}")
            return 1
        messages = await service.list_messages(user_id, character_id)

    if not messages:
        rprint(f"[dim]No conversation with {character.name} yet.")
    for message in messages:
        who = "[bold cyan]You" if message.sender == "user" else f"[bold magenta]{character.name}"
        rprint(f"{who}[/]: {message.message}")
    return 0


async def send(service: DataService, user_id: str, character_id: str, text: str) -> int:
    async with service:
        result = await service.send_message(user_id, character_id, text)

    if result is None:
        rprint("[bold red]Message not sent.")
        return 1
    rprint(f"[bold cyan]You[/]: {result.user_message.message}")
    rprint(f"[bold magenta]Reply[/]: {result.ai_message.message}")
    return 0


async def seed(settings: Settings) -> int:
    from .server.database import create_engine, create_session_maker, init_db
    from .server.seed import seed_catalog

    engine = create_engine(settings.DATABASE_URL)
    try:
        await init_db(engine)
        added = await seed_catalog(create_session_maker(engine))
    finally:
        await engine.dispose()
    rprint(f"[bold green]Seeded {added} characters into {settings.DATABASE_URL}")
    return 0


def set_mode(settings: Settings, value: Optional[str]) -> int:
    flag = ModeFlag(settings.MODE_FLAG_PATH)
    if value:
        flag.write(DataMode(value))
    rprint(f"Data mode: [bold]{flag.read().value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Persona Chat")
    parser.add_argument("--mode", choices=[m.value for m in DataMode], help="Override the persisted data mode")
    parser.add_argument("--token", help="Access token for live mode (defaults to the anon key)")
    parser.add_argument("--user", default=DEMO_USER_ID, help="User ID to act as")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("serve", help="Run the chat server")
    subparsers.add_parser("seed", help="Load the character catalog into the server database")

    mode_parser = subparsers.add_parser("mode", help="Show or set the persisted data mode")
    mode_parser.add_argument("value", nargs="?", choices=[m.value for m in DataMode])

    subparsers.add_parser("characters", help="List characters")
    subparsers.add_parser("sessions", help="List your chat sessions")

    history_parser = subparsers.add_parser("history", help="Show the conversation with a character")
    history_parser.add_argument("character_id")

    send_parser = subparsers.add_parser("send", help="Send a message to a character")
    send_parser.add_argument("character_id")
    send_parser.add_argument("text")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    if args.command == "serve":
        from .server.main import run

        run(settings)
        return 0
    if args.command == "seed":
        return asyncio.run(seed(settings))
    if args.command == "mode":
        return set_mode(settings, args.value)

    service = _service(settings, args)
    if args.command == "characters":
        return asyncio.run(show_characters(service))
    if args.command == "sessions":
        return asyncio.run(show_sessions(service, args.user))
    if args.command == "history":
        return asyncio.run(show_history(service, args.user, args.character_id))
    if args.command == "send":
        return asyncio.run(send(service, args.user, args.character_id, args.text))
    return 1


if __name__ == "__main__":
    sys.exit(main())
