"""Interactive prompt loop and terminal rendering."""

from __future__ import annotations

import logging
import os
import platform
import subprocess
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from drivesh.errors import DriveShError, NoValidDriveError, is_retryable
from drivesh.models import Clip, FileEntry, PasteResult
from drivesh.session import Session
from drivesh.util.paths import ROOT

from .dispatcher import CommandDispatcher, CommandResult

logger = logging.getLogger(__name__)

BANNER = "drivesh - one prompt for all your drives. Type help to see all commands."


class ShellApp:
    """Read commands, run them through the dispatcher, print the results."""

    def __init__(self, session: Session, *, console: Optional[Console] = None) -> None:
        self._session = session
        self._console = console or Console()

        history = InMemoryHistory()
        for line in session.history:
            history.append_string(line)
        self._prompt = PromptSession(history=history)
        self._answers: PromptSession = PromptSession()

        self._dispatcher = CommandDispatcher(session, self.ask)

    async def ask(self, message: str) -> str:
        """Prompt for a setup answer (not recorded in command history)."""
        return await self._answers.prompt_async(message)

    async def run(self) -> None:
        self._console.print(BANNER, style="bold")
        try:
            if self._session.needs_setup:
                await self._setup()

            while True:
                line = await self._prompt.prompt_async(self._prompt_text())
                try:
                    result = await self._dispatcher.execute(line)
                except NoValidDriveError as exc:
                    self.print_error(exc)
                    self._console.print("Starting over with a fresh setup.")
                    await self._session.reset()
                    await self._setup()
                    continue
                except DriveShError as exc:
                    self.print_error(exc)
                    continue

                self.render(result)
                if result.exit:
                    break
        except (KeyboardInterrupt, EOFError):
            self._console.print()

    async def _setup(self) -> None:
        """Create drives until one exists (first run or after a reset)."""
        self._console.print("Let's set up your first drive.")
        while True:
            try:
                result = await self._dispatcher.create_drive()
            except DriveShError as exc:
                self.print_error(exc)
                continue
            self._session.flush()
            self.render(result)
            return

    def _prompt_text(self) -> str:
        registry = self._session.registry
        name = registry.active_name or ""
        path = registry.get(name).current_path if name in registry else ""
        return f"{name}:{path or ROOT}$ "

    # ----------------------------
    # Rendering
    # ----------------------------
    def render(self, result: CommandResult) -> None:
        if result.clear:
            self._console.clear()

        for line in result.lines:
            self._console.print(escape(line))

        if result.files is not None:
            self._print_files(result.files)
        if result.clips is not None:
            self._print_clips(result.clips)
        if result.paste is not None:
            self._print_paste(result.paste)
        for path in result.local_paths:
            self._console.print(f"Downloaded to {escape(path)}")
            open_local_file(path)

    def print_error(self, exc: DriveShError) -> None:
        message = f"[red]Error:[/red] {escape(str(exc))}"
        if is_retryable(exc):
            message += " [dim](temporary, try again)[/dim]"
        self._console.print(message)
        logger.debug("Command failed", exc_info=exc)

    def _print_files(self, files: list[FileEntry]) -> None:
        if not files:
            self._console.print("No files found")
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Name")
        table.add_column("Size", justify="right")
        table.add_column("Last modified")
        table.add_column("Path", style="dim")
        for entry in files:
            name = f"[blue]{escape(entry.name)}/[/blue]" if entry.is_folder else escape(entry.name)
            table.add_row(
                name,
                "" if entry.size is None else human_size(entry.size),
                entry.last_modified.strftime("%Y-%m-%d %H:%M") if entry.last_modified else "",
                escape(entry.path),
            )
        self._console.print(table)

    def _print_clips(self, clips: list[Clip]) -> None:
        if not clips:
            self._console.print("No clips saved")
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Clip")
        table.add_column("From")
        table.add_column("Items", justify="right")
        for clip in clips:
            table.add_row(
                escape(clip.name),
                escape(f"{clip.origin_drive}:{clip.origin_path or ROOT}"),
                str(len(clip.files)),
            )
        self._console.print(table)

    def _print_paste(self, result: PasteResult) -> None:
        summary = result.summary
        self._console.print(
            f"Pasted clip {escape(result.clip_name)} into {escape(result.destination_drive)}: "
            f"{summary['success']} copied, {summary['skipped']} skipped, {summary['failed']} failed"
        )
        for failed in result.errors:
            self._console.print(
                f"  [red]{escape(failed.source)}[/red]: {escape(failed.error_message or '')}"
            )
            for leftover in failed.leftover_paths:
                self._console.print(f"    downloaded copy kept at {escape(leftover)}")


def human_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if value < 1024 or unit == "TB":
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


def open_local_file(path: str) -> None:
    """Open a downloaded file with the platform's default application."""
    system = platform.system()
    try:
        if system == "Windows":
            os.startfile(path)  # type: ignore[attr-defined]
        elif system == "Darwin":
            subprocess.Popen(["open", path])
        else:
            subprocess.Popen(
                ["xdg-open", path],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
    except OSError as exc:
        logger.warning("Could not open %s: %s", path, exc)
