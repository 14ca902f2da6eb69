"""Parse one input line and run it against the session."""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from drivesh.errors import (
    InvalidArgumentError,
    UnknownCommandError,
)
from drivesh.models import Clip, Drive, FileEntry, PasteResult
from drivesh.providers import PROVIDERS, AskFn, ProviderAdapter, provider_ids
from drivesh.session import Session
from drivesh.transfer import copy_file, paste
from drivesh.traversal import search, traverse
from drivesh.util.paths import (
    ROOT,
    is_drive_switch,
    join_path,
    resolve,
    split_drive_prefix,
    split_file_path,
    strip_trailing,
)

logger = logging.getLogger(__name__)

PIPE_COMMANDS = frozenset({"ls", "l", "ll", "la", "lf", "tree", "search"})

HELP_TEXT = """\
Commands:
  ::                      create a new drive
  <drive>:                switch to a drive
  pwd                     print the current drive and path
  cd [path]               change the current path (default /)
  ls [path]               list a folder (aliases: l, ll, la, lf)
  tree [path]             list a folder recursively
  search <keyword>...     find files under the current path by name
  cat <file>              download a file and open it
  cp <src> <dest>         copy a file; paths may start with <drive>:
  cp -l                   list saved clips
  rm <path>               delete a file (or a folder, with a trailing /)
  pst [clip]              paste a clip into the current path
  clear                   clear the screen
  q, quit, exit           leave the shell

Append "| cp [clip]" to ls, tree or search to save the result as a clip."""


@dataclass
class CommandResult:
    """What a command produced; the shell decides how to show it."""

    lines: list[str] = field(default_factory=list)
    files: Optional[list[FileEntry]] = None
    clip: Optional[Clip] = None
    clips: Optional[list[Clip]] = None
    paste: Optional[PasteResult] = None
    local_paths: list[str] = field(default_factory=list)
    # drive and folder a listing ran against (origin of a captured clip)
    drive: Optional[str] = None
    folder: Optional[str] = None
    clear: bool = False
    exit: bool = False


Handler = Callable[[list[str]], Awaitable[CommandResult]]


class CommandDispatcher:
    """
    Run shell commands, one at a time.

    Handlers never retry. Any drivesh error fails the current command only and
    leaves the registry and clips as they were before it; the session is
    flushed to disk after every command.
    """

    def __init__(self, session: Session, ask: AskFn) -> None:
        self._session = session
        self._ask = ask
        self._commands: dict[str, Handler] = {
            "pwd": self._pwd,
            "cd": self._cd,
            "ls": self._ls,
            "l": self._ls,
            "ll": self._ls,
            "la": self._ls,
            "lf": self._ls,
            "tree": self._tree,
            "search": self._search,
            "cat": self._cat,
            "cp": self._cp,
            "rm": self._rm,
            "pst": self._pst,
            "help": self._help,
            "clear": self._clear,
            "q": self._exit,
            "quit": self._exit,
            "exit": self._exit,
        }

    async def execute(self, line: str) -> CommandResult:
        text = line.strip()
        if not text:
            return CommandResult()

        self._session.record_history(text)
        try:
            return await self._dispatch(text)
        finally:
            self._session.flush()

    async def create_drive(self) -> CommandResult:
        """Interactive drive creation ('::')."""
        registry = self._session.registry
        providers = provider_ids()

        provider_id = (
            (await self._ask(f"Choose a provider - {', '.join(providers)} > "))
            .strip()
            .replace(" ", "_")
            .lower()
        )
        if provider_id not in PROVIDERS:
            raise InvalidArgumentError(
                f"Invalid provider - choose one of these - {', '.join(providers)}",
                details={"provider": provider_id},
            )

        name = "_".join((await self._ask("Enter a name for your drive > ")).split())
        registry.ensure_available(name)

        adapter = self._session.new_adapter(name, provider_id)
        try:
            auth_state = await adapter.initialize(name, self._ask)
        except BaseException:
            await adapter.aclose()
            raise

        registry.create(name, provider_id, auth_state)
        self._session.attach_adapter(name, adapter)
        self._session.mark_setup_done()
        return CommandResult(lines=[f"Created drive {name} ({PROVIDERS[provider_id].description})"])

    # ----------------------------
    # Parsing
    # ----------------------------
    async def _dispatch(self, text: str) -> CommandResult:
        tokens, clip_name, piped = _tokenize(text)
        verb = tokens[0]

        if verb == "::":
            return await self.create_drive()

        lowered = verb.lower()
        if lowered in ("q", "quit", "exit"):
            return await self._exit(tokens[1:])
        if lowered in ("help", "clear"):
            return await self._commands[lowered](tokens[1:])

        notices = self._repair_notice()

        if is_drive_switch(verb):
            if len(tokens) > 1:
                raise InvalidArgumentError("Switching drives takes no arguments")
            drive = self._session.registry.switch(verb[:-1])
            return CommandResult(lines=notices + [f"Switched to drive {drive.name}"])

        handler = self._commands.get(lowered)
        if handler is None:
            raise UnknownCommandError(
                f"Unrecognised command {verb!r}. Type help to see all commands.",
                details={"command": verb},
            )
        if piped and lowered not in PIPE_COMMANDS:
            raise InvalidArgumentError(f"{verb} output cannot be piped into cp")

        result = await handler(tokens[1:])
        result.lines[:0] = notices

        if piped and result.files is not None:
            result.clip = self._session.clips.capture(
                clip_name,
                result.drive or self._session.registry.active_name or "",
                result.folder or ROOT,
                result.files,
            )
            result.lines.append(f"Saved {len(result.files)} item(s) to clip {result.clip.name}")
        return result

    def _repair_notice(self) -> list[str]:
        registry = self._session.registry
        if not registry.needs_repair():
            return []
        previous = registry.active_name
        drive = registry.repair()
        if previous is None:
            return [f"Using drive {drive.name}"]
        return [f"Drive {previous} is not usable; switched to {drive.name}"]

    def _target(self, arg: Optional[str]) -> tuple[Drive, ProviderAdapter, str]:
        """Resolve an optionally drive-prefixed argument to (drive, adapter, rest)."""
        registry = self._session.registry
        drive_name, rest = split_drive_prefix(arg or "")
        drive = registry.get(drive_name) if drive_name else registry.active()
        return drive, self._session.adapter_for(drive.name), rest

    # ----------------------------
    # Commands
    # ----------------------------
    async def _pwd(self, args: list[str]) -> CommandResult:
        drive = self._session.registry.active()
        return CommandResult(lines=[f"{drive.name}:{drive.current_path or ROOT}"])

    async def _cd(self, args: list[str]) -> CommandResult:
        drive_name, rest = split_drive_prefix(args[0] if args else ROOT)
        registry = self._session.registry
        drive = registry.get(drive_name) if drive_name else registry.active()
        path = strip_trailing(resolve(drive.current_path, rest))
        registry.set_path(drive.name, path)
        return CommandResult()

    async def _ls(self, args: list[str]) -> CommandResult:
        drive, adapter, rest = self._target(args[0] if args else None)
        folder = strip_trailing(resolve(drive.current_path, rest))
        files = await adapter.list(folder)
        return CommandResult(files=files, drive=drive.name, folder=folder)

    async def _tree(self, args: list[str]) -> CommandResult:
        drive, adapter, rest = self._target(args[0] if args else None)
        folder = strip_trailing(resolve(drive.current_path, rest))
        files = await traverse(folder, adapter)
        return CommandResult(files=files, drive=drive.name, folder=folder)

    async def _search(self, args: list[str]) -> CommandResult:
        drive, adapter, _ = self._target(None)
        folder = strip_trailing(resolve(drive.current_path, "."))
        files = await search(folder, adapter, args)
        return CommandResult(files=files, drive=drive.name, folder=folder)

    async def _cat(self, args: list[str]) -> CommandResult:
        if not args:
            raise InvalidArgumentError("Usage: cat <file>")
        drive, adapter, rest = self._target(args[0])
        folder, name = split_file_path(drive.current_path, rest)
        if name is None:
            raise InvalidArgumentError("cat needs a file, not a folder", details={"path": args[0]})
        local_paths = await adapter.fetch(folder, name)
        return CommandResult(local_paths=local_paths)

    async def _cp(self, args: list[str]) -> CommandResult:
        if args and args[0] in ("-l", "--list"):
            return CommandResult(clips=self._session.clips.list_clips())
        if len(args) != 2:
            raise InvalidArgumentError("Usage: cp <source file> <destination>")

        src_drive, src_adapter, src_rest = self._target(args[0])
        src_folder, src_name = split_file_path(src_drive.current_path, src_rest)
        if src_name is None:
            raise InvalidArgumentError("cp copies files, not folders", details={"path": args[0]})

        dest_drive, dest_adapter, dest_rest = self._target(args[1])
        dest_folder, dest_name = split_file_path(dest_drive.current_path, dest_rest)

        stored = await copy_file(
            src_adapter,
            src_folder,
            src_name,
            dest_adapter,
            dest_folder,
            dest_name or src_name,
        )
        source = f"{src_drive.name}:{join_path(src_folder, src_name)}"
        return CommandResult(lines=[f"Copied {source} to {dest_drive.name}:{p}" for p in stored])

    async def _rm(self, args: list[str]) -> CommandResult:
        if not args:
            raise InvalidArgumentError("Usage: rm <path>")
        drive, adapter, rest = self._target(args[0])
        folder, name = split_file_path(drive.current_path, rest)
        if name is None and folder == ROOT:
            raise InvalidArgumentError("Refusing to delete the drive root")
        await adapter.delete(folder, name)
        return CommandResult(lines=[f"Deleted {args[0]}"])

    async def _pst(self, args: list[str]) -> CommandResult:
        clip = self._session.clips.get(args[0] if args else None)
        origin = self._session.adapter_for(clip.origin_drive)
        dest_drive = self._session.registry.active()
        dest = self._session.adapter_for(dest_drive.name)

        result = await paste(clip, origin, dest, dest_drive.name, dest_drive.current_path)
        return CommandResult(paste=result)

    async def _help(self, args: list[str]) -> CommandResult:
        return CommandResult(lines=HELP_TEXT.splitlines())

    async def _clear(self, args: list[str]) -> CommandResult:
        return CommandResult(clear=True)

    async def _exit(self, args: list[str]) -> CommandResult:
        return CommandResult(exit=True)


def _tokenize(text: str) -> tuple[list[str], Optional[str], bool]:
    """
    Split a line into command tokens and an optional '| cp [name]' suffix.

    Returns (tokens, clip_name, piped).
    """
    lexer = shlex.shlex(text, posix=True, punctuation_chars="|")
    lexer.whitespace_split = True
    try:
        tokens = list(lexer)
    except ValueError as exc:
        raise InvalidArgumentError(f"Could not parse command: {exc}", cause=exc) from exc

    if "|" not in tokens:
        if not tokens:
            raise InvalidArgumentError("Empty command")
        return tokens, None, False

    idx = tokens.index("|")
    command, pipe = tokens[:idx], tokens[idx + 1:]
    if not command or not pipe or pipe[0] != "cp" or len(pipe) > 2 or "|" in pipe:
        raise InvalidArgumentError("Only '| cp [clip]' may follow a command")
    return command, (pipe[1] if len(pipe) == 2 else None), True
