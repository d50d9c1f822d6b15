"""shellbridge CLI - portable commands on any host shell.

Usage:
    shellbridge                       # Start interactive shell
    shellbridge run <command> [args]  # Run one command and exit
    shellbridge config [options]      # Write the configuration file
"""

from __future__ import annotations

import argparse
from typing import List, Optional, Sequence

from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .classifier import LineCategory
from .commands import HINTS, CommandKind
from .config import LOG_LEVELS, PLATFORM_CHOICES, Settings, config_path
from .engine import Reply, ShellEngine
from .host import Platform, os_name
from .logging_utils import configure_logging
from .terminal import TerminalInput

console = Console()

STYLES = {
    LineCategory.COMMAND: "bold blue",
    LineCategory.OUTPUT: "",
    LineCategory.ERROR: "bold red",
    LineCategory.DIRECTORY: "green",
}


def render_reply(reply: Reply, out: Optional[Console] = None) -> None:
    """Print the echoed command line followed by its classified lines."""
    out = out or console
    out.print(Text(reply.command_line, style=STYLES[LineCategory.COMMAND]))
    for line in reply.lines:
        out.print(Text(line.text, style=STYLES[line.category]))


def prompt_string(platform: Platform, cwd: str) -> str:
    if platform is Platform.WINDOWS:
        return f"{cwd}> "
    return f"{cwd}$ "


def _join_arguments(arguments: Sequence[str]) -> str:
    """Rebuild raw argument text, quoting words the shell split for us."""
    parts = []
    for arg in arguments:
        if not arg or any(ch.isspace() for ch in arg):
            parts.append(f'"{arg}"')
        else:
            parts.append(arg)
    return " ".join(parts)


def _help_panel() -> Panel:
    rows = ["[bold]Commands[/bold]\n"]
    for kind in CommandKind:
        hint = HINTS[kind].splitlines()[0]
        rows.append(f"  [cyan]{kind.value:<13}[/cyan] {hint}")
    rows.append(
        "\n[bold]Shell[/bold]\n"
        "  /exit, /quit    Exit shellbridge\n"
        "  /help           Show this help\n"
        "  /clear          Clear the screen\n\n"
        "[bold]Tips[/bold]\n"
        "  Up/Down arrows  Navigate input history\n"
        "  Tab             Auto-complete commands/paths\n"
        "  Ctrl+R          Search history\n"
        "  Ctrl+D          Exit"
    )
    return Panel("\n".join(rows), title="/help", border_style="cyan")


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    if getattr(args, "platform", None):
        settings.platform = args.platform
    if getattr(args, "timeout", None) is not None:
        settings.timeout_s = args.timeout if args.timeout > 0 else None
    if getattr(args, "log_level", None):
        settings.log_level = args.log_level
    return settings


def run_config(args: argparse.Namespace) -> int:
    settings = _apply_overrides(Settings.load(), args)
    path = settings.save()
    timeout = "none" if settings.timeout_s is None else f"{settings.timeout_s:g}s"
    console.print(f"[green]Saved[/green] {path}")
    console.print(
        f"platform={settings.platform}  timeout={timeout}  log_level={settings.log_level}",
        markup=False,
    )
    return 0


def run_once(engine: ShellEngine, command: str, arguments: Sequence[str]) -> int:
    reply = engine.submit(command, _join_arguments(arguments))
    render_reply(reply)
    return 0 if reply.ok else 1


def run_repl(engine: ShellEngine, settings: Settings) -> None:
    platform = engine.session.platform
    console.print(
        Panel.fit(
            f"[bold cyan]shellbridge[/bold cyan]\n"
            f"OS: {os_name()}  |  Commands: {platform.value}\n\n"
            "Type [bold]/help[/bold] for the command list, [bold]/exit[/bold] to quit.",
            title="shellbridge",
        )
    )

    terminal = TerminalInput(
        cwd_getter=engine.current_working_directory,
        history_enabled=settings.input_history,
    )

    while True:
        user_input = terminal.prompt(prompt_string(platform, engine.current_working_directory()))
        if user_input is None:
            console.print("\n[cyan]Bye.[/cyan]")
            return
        user_input = user_input.strip()
        if not user_input:
            continue

        lowered = user_input.lower()
        if lowered in ("/exit", "/quit"):
            console.print("[cyan]Bye.[/cyan]")
            return
        if lowered == "/help":
            console.print(_help_panel())
            continue
        if lowered == "/clear":
            console.clear()
            continue

        reply = engine.submit_line(user_input)
        if reply.clear_screen:
            console.clear()
            continue
        render_reply(reply)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shellbridge",
        description="shellbridge: one command vocabulary for POSIX and Windows hosts",
    )
    parser.add_argument(
        "--platform",
        choices=PLATFORM_CHOICES,
        help="Command set to translate for (default: auto-detect)",
    )
    parser.add_argument("--timeout", type=float, help="Seconds before a child process is killed (0 = never)")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Diagnostic log level")

    sub = parser.add_subparsers(dest="subcmd")

    p_run = sub.add_parser("run", help="Run a single command and exit")
    p_run.add_argument("command", help="Command name (e.g. ls, wc, chmod)")
    p_run.add_argument("arguments", nargs=argparse.REMAINDER, help="Command arguments")

    p_config = sub.add_parser("config", help="Write the configuration file")
    p_config.add_argument("--platform", choices=PLATFORM_CHOICES, default=argparse.SUPPRESS)
    p_config.add_argument("--timeout", type=float, default=argparse.SUPPRESS)
    p_config.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=argparse.SUPPRESS)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    if args.subcmd == "config":
        raise SystemExit(run_config(args))

    settings = _apply_overrides(Settings.load(), args)
    configure_logging(settings.log_level)
    logger.debug("settings.loaded path={} platform={}", config_path(), settings.platform)

    engine = ShellEngine.from_settings(settings)

    if args.subcmd == "run":
        raise SystemExit(run_once(engine, args.command, args.arguments))

    run_repl(engine, settings)


if __name__ == "__main__":
    main()
