"""
Command-line interface for Campaign Dealer.

Provides CLI commands for running and exercising the service:
- run: Start the API server
- generate: Run the whole pipeline once and print the result as JSON
- config: Print the effective configuration

Usage:
    campaign-dealer run [--host HOST] [--port PORT]
    campaign-dealer generate [--players N] [--setting TAG ...] [--language en|it]
    campaign-dealer config

``generate`` calls the configured AI provider for real; it is the quickest
way to check a provider, key and model end to end.

Environment Variables:
    CAMPAIGN_HOST: Host to bind the API server (default: 0.0.0.0)
    CAMPAIGN_PORT: Port for the API server (default: 8000)
    CAMPAIGN_AI_PROVIDER, CAMPAIGN_AI_API_KEY, CAMPAIGN_AI_MODEL,
    CAMPAIGN_AI_OLLAMA_HOST: AI provider settings (see config.py)
"""

import argparse
import asyncio
import json
import sys

from campaign_dealer import __version__
from campaign_dealer.errors import AppError
from campaign_dealer.game.models import MAX_PLAYERS, Genre, Locale


def cmd_run(args: argparse.Namespace) -> int:
    """
    Run the API server in the foreground.

    Returns:
        0 on clean shutdown (Ctrl+C), 1 on startup error
    """
    from campaign_dealer.api.server import start_server

    try:
        start_server(host=args.host, port=args.port)
        return 0
    except KeyboardInterrupt:
        print("\nServer stopped.")
        return 0
    except OSError as e:
        print(f"Error starting server: {e}", file=sys.stderr)
        return 1


async def _generate_campaign(players: int, setting: list[Genre], language: Locale) -> dict:
    from campaign_dealer.ai.registry import build_default_registry
    from campaign_dealer.services.campaign import CampaignService

    service = CampaignService(build_default_registry())
    characters = await service.generate_characters(
        player_count=players, setting=setting, language=language
    )
    script = await service.generate_script(characters=characters, setting=setting, language=language)
    return {
        "characters": [c.model_dump(mode="json", by_alias=True, exclude_none=True) for c in characters],
        "script": script.model_dump(mode="json", by_alias=True),
    }


def cmd_generate(args: argparse.Namespace) -> int:
    """
    Generate a party and a script with the configured provider.

    Prints ``{"characters": [...], "script": {...}}`` to stdout.

    Returns:
        0 on success, 1 if any generation step failed
    """
    setting = [Genre(tag) for tag in args.setting]
    language = Locale(args.language)

    try:
        result = asyncio.run(_generate_campaign(args.players, setting, language))
    except AppError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Print the configuration summary."""
    from campaign_dealer.config import print_config_summary

    print_config_summary()
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="campaign-dealer",
        description="Campaign Dealer - AI campaign generator for The House Doesn't Always Win",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run the API server",
        description="Start the FastAPI server with uvicorn.",
    )
    run_parser.add_argument(
        "--port",
        "-p",
        type=int,
        help="API server port (default: 8000, or CAMPAIGN_PORT env var)",
    )
    run_parser.add_argument(
        "--host",
        type=str,
        help="Host to bind the server to (default: 0.0.0.0, or CAMPAIGN_HOST env var)",
    )
    run_parser.set_defaults(func=cmd_run)

    # generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a party and a script once",
        description=(
            "Run the full pipeline against the configured AI provider "
            "and print the characters and the script as JSON."
        ),
    )
    generate_parser.add_argument(
        "--players",
        "-n",
        type=int,
        default=3,
        choices=range(1, MAX_PLAYERS + 1),
        metavar=f"1-{MAX_PLAYERS}",
        help="Number of player characters (default: 3)",
    )
    generate_parser.add_argument(
        "--setting",
        "-s",
        nargs="+",
        default=[Genre.CYBERPUNK.value],
        choices=[genre.value for genre in Genre],
        metavar="TAG",
        help="One or more setting tags (default: cyberpunk)",
    )
    generate_parser.add_argument(
        "--language",
        "-l",
        default=Locale.EN.value,
        choices=[locale.value for locale in Locale],
        help="Language for generated text (default: en)",
    )
    generate_parser.set_defaults(func=cmd_generate)

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Show the effective configuration",
        description="Print where configuration was loaded from and the resolved values.",
    )
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
