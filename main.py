"""CLI entrypoint: GitHub trending repositories and URL metadata analysis."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from rich.markup import escape

from aggregator import create_trend_service
from config import APP_NAME, APP_VERSION, ConfigManager, Settings, mask_secret
from intelligence import create_enricher
from models import ExtractionDepth, OutputFormat
from render import format_metadata, format_repositories
from storage import save_to_file
from utils import (
    GhExplorerError,
    console,
    setup_logger,
    validate_depth,
    validate_limit,
    validate_output_format,
    validate_period,
    validate_summary_length,
    validate_url,
)


COMMANDS = {"trending", "t", "url", "config"}

CONFIG_HELP = """[bold]Configuration Help & Examples:[/bold]

[blue]Set OpenAI API Key:[/blue]
  gh-explorer config set ai.api_key YOUR_API_KEY

[blue]Set custom OpenAI-compatible API URL (optional):[/blue]
  gh-explorer config set ai.base_url https://your-api-url

[blue]Use Anthropic instead of OpenAI:[/blue]
  gh-explorer config set ai.provider anthropic

[blue]Enable AI features:[/blue]
  gh-explorer config set ai.enabled true

[blue]View current configuration:[/blue]
  gh-explorer config get

[yellow]Note: AI features are disabled by default. You need to enable them after setting an API key.[/yellow]"""


def _with_default_command(argv: List[str]) -> List[str]:
    """无子命令或只带选项时默认执行 trending"""
    if not argv:
        return ["trending"]
    first = argv[0]
    if first in ("-h", "--help", "-V", "--version") or first in COMMANDS:
        return argv
    if first.startswith("-"):
        return ["trending"] + argv
    return argv


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", dest="config_path", default=None, help="Config file path")
    common.add_argument("-v", "--verbose", action="store_true", help="Show debug logs")

    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="CLI tool for analyzing GitHub trending repositories and URLs",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {APP_VERSION}")
    sub = parser.add_subparsers(dest="command", required=True)

    trending = sub.add_parser(
        "trending", aliases=["t"], parents=[common], help="Get GitHub trending repositories"
    )
    trending.add_argument("-l", "--language", default=None, help="Filter by programming language")
    trending.add_argument("-s", "--since", default=None, help="Time period (daily, weekly, monthly)")
    trending.add_argument("-n", "--limit", default=None, help="Limit the number of results (1-100)")
    trending.add_argument("-t", "--topics", default=None, help="Filter by topics (comma-separated)")
    trending.add_argument("-f", "--format", default=None, help="Output format (json, table, markdown)")
    trending.add_argument("-o", "--output", default=None, help="Output to file")
    trending.add_argument("--ai", action=argparse.BooleanOptionalAction, default=None, help="AI analysis")
    trending.add_argument("--summary-length", default=None, help="AI summary length (short, medium, long)")
    trending.add_argument("--no-cache", action="store_true", help="Bypass the in-memory cache")

    url = sub.add_parser("url", parents=[common], help="Analyze URL metadata")
    url.add_argument("url", help="Page URL (http/https)")
    url.add_argument("-f", "--format", default=None, help="Output format (json, table, markdown)")
    url.add_argument("-o", "--output", default=None, help="Output to file")
    url.add_argument("-d", "--depth", default="normal", help="Analysis depth (basic, normal, deep)")
    url.add_argument("--ai", action=argparse.BooleanOptionalAction, default=None, help="AI analysis")
    url.add_argument("--summary-length", default=None, help="AI summary length (short, medium, long)")

    config = sub.add_parser("config", parents=[common], help="Manage configuration")
    config_sub = config.add_subparsers(dest="config_command", required=True)
    config_set = config_sub.add_parser("set", help="Set a config value, e.g. ai.api_key YOUR_API_KEY")
    config_set.add_argument("key")
    config_set.add_argument("value")
    config_get = config_sub.add_parser("get", help="Get a config value, or all config if no key specified")
    config_get.add_argument("key", nargs="?", default=None)
    config_sub.add_parser("help", help="Show configuration help and examples")

    return parser


def _ai_settings(settings: Settings, flag: Optional[bool]) -> Optional[Settings]:
    """根据 --ai/--no-ai 与配置决定是否启用 AI，返回用于创建增强器的配置"""
    enabled = settings.ai.enabled if flag is None else flag
    if not enabled:
        return None
    if settings.ai.enabled:
        return settings
    return settings.model_copy(update={"ai": settings.ai.model_copy(update={"enabled": True})})


def _emit(content: str, output: Optional[str], fmt: OutputFormat) -> None:
    if output:
        path = save_to_file(content, output, fmt)
        console.print(f"[green]Results saved to: {path}[/green]")
    else:
        print(content)


async def run_trending(args: argparse.Namespace, settings: Settings) -> int:
    period = validate_period(args.since or settings.github.default_period)
    limit = validate_limit(args.limit if args.limit is not None else settings.github.default_limit)
    fmt = validate_output_format(args.format or settings.output.default_format)
    language = args.language or settings.github.default_language
    summary_length = validate_summary_length(args.summary_length or settings.ai.summary_length)

    ai_settings = _ai_settings(settings, args.ai)
    enricher = create_enricher(ai_settings, summary_length) if ai_settings else None

    service = create_trend_service(settings, use_cache=not args.no_cache)
    try:
        with console.status("Getting GitHub trending repositories..."):
            repositories = await service.get_trending(
                language=language,
                period=period,
                limit=limit,
                topics=args.topics,
                match=settings.github.topic_match,
            )
        console.print(f"[green]Successfully got {len(repositories)} trending repositories[/green]")

        if enricher is not None and repositories:
            with console.status("Performing AI analysis..."):
                repositories = await enricher.enrich_repositories(repositories)
    finally:
        await service.close()
        if enricher is not None:
            await enricher.aclose()

    content = format_repositories(
        repositories,
        fmt,
        color_enabled=settings.output.color_enabled and not args.output,
        period=period,
        language=language,
    )
    _emit(content, args.output, fmt)
    return 0


async def run_url(args: argparse.Namespace, settings: Settings) -> int:
    url = validate_url(args.url)
    depth = validate_depth(args.depth)
    fmt = validate_output_format(args.format or settings.output.default_format)
    summary_length = validate_summary_length(args.summary_length or settings.ai.summary_length)

    ai_settings = _ai_settings(settings, args.ai)
    enricher = create_enricher(ai_settings, summary_length) if ai_settings else None

    service = create_trend_service(settings)
    try:
        with console.status("Retrieving and analyzing content..."):
            metadata = await service.fetch_metadata(
                url,
                depth=depth,
                include_images=depth != ExtractionDepth.BASIC,
                timeout_ms=settings.general.request_timeout_ms,
            )

        if enricher is not None:
            with console.status("Performing AI analysis..."):
                metadata = await enricher.enrich_metadata(metadata)
        console.print("[green]Analysis completed![/green]")
    finally:
        await service.close()
        if enricher is not None:
            await enricher.aclose()

    content = format_metadata(metadata, fmt, color_enabled=settings.output.color_enabled and not args.output)
    _emit(content, args.output, fmt)
    return 0


def run_config(args: argparse.Namespace, manager: ConfigManager) -> int:
    if args.config_command == "help":
        console.print(CONFIG_HELP)
        return 0

    if args.config_command == "set":
        manager.set_value(args.key, args.value)
        console.print(f"[green]Successfully set {args.key}[/green]")
        if args.key in ("ai.api_key", "ai.apiKey") and args.value:
            console.print("[blue]Tip: You need to enable AI: `gh-explorer config set ai.enabled true`[/blue]")
        return 0

    settings = manager.load()
    if not args.key:
        print(json.dumps(manager.masked(settings), indent=2, ensure_ascii=False))
        return 0

    value = manager.get_value(args.key, settings)
    if value is None:
        console.print(f"[yellow]Config key not found or unset: {args.key}[/yellow]")
        return 0
    if args.key in ("ai.api_key", "ai.apiKey"):
        value = mask_secret(value)
    print(f"{args.key}: {json.dumps(value, ensure_ascii=False)}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(_with_default_command(list(sys.argv[1:] if argv is None else argv)))

    manager = ConfigManager(args.config_path)
    try:
        if args.command == "config":
            setup_logger(level="DEBUG" if args.verbose else "WARNING")
            return run_config(args, manager)

        settings = manager.load()
        setup_logger(level="DEBUG" if args.verbose else settings.general.log_level)

        if args.command in ("trending", "t"):
            return asyncio.run(run_trending(args, settings))
        return asyncio.run(run_url(args, settings))
    except GhExplorerError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
