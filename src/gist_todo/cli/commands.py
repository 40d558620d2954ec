# src/gist_todo/cli/commands.py

from __future__ import annotations

import asyncio
import getpass
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..auth.auth_models import TokenErrorKind
from ..core.state import AppState
from ..errors import ErrorKind, TodoError, describe_error_kind
from ..sync.sync_models import SyncOutcome
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    ok: bool
    text: str

    @classmethod
    def success(cls, text: str) -> CommandResult:
        return cls(ok=True, text=text)

    @classmethod
    def error(cls, text: str) -> CommandResult:
        return cls(ok=False, text=text)


CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], CommandResult]


class CommandRegistry:
    """Simple command registry used by the CLI entrypoint and the console shell."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        argv: list[str],
        emit: CommandEmitter | None = None,
    ) -> CommandResult:
        """
        Run `argv` ("add", "Buy", "milk" ...). An empty argv shows help.

        Domain errors (TodoError) become an error result with their message;
        anything else is logged and reported as an internal error.
        """
        if not argv:
            return CommandResult.success(self.build_help())

        name = argv[0].lower()
        args = argv[1:]

        handler = self._handlers.get(name)
        if not handler:
            return CommandResult.error(
                f"Unknown command: {name}. Use 'gist-todo help' to see available commands."
            )

        try:
            return handler(state, args, emit)
        except TodoError as e:
            logger.debug("Command %s failed kind=%s: %s", name, e.kind, e)
            return CommandResult.error(f"Error: {e}")
        except Exception:
            logger.exception("Command handler crashed: %s", name)
            return CommandResult.error("Internal error while handling the command.")

    def build_help(self) -> str:
        lines = ["gist-todo - tasks synced with a private GitHub Gist", "", "Commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name:<22} {help_text}")
        # `shell` is handled by cli.main, not by the registry.
        lines.append(f"  {'shell':<22} Interactive shell (one command per line).")
        lines += [
            "",
            "Examples:",
            '  gist-todo add "Buy groceries"',
            "  gist-todo done abc1",
            "  gist-todo list",
        ]
        return "\n".join(lines)


registry = CommandRegistry()


def _render_task(task: Task) -> str:
    mark = "[X]" if task.is_completed else "[ ]"
    return f"{task.short_id} {mark} {task.description}"


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> CommandResult:
    return CommandResult.success(registry.build_help())


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> CommandResult:
    description = " ".join(args).strip()
    if not description:
        return CommandResult.error('Usage: gist-todo add "task description"')
    task = state.task_store.add_task(description)
    return CommandResult.success(f"Task added successfully: [{task.short_id}] {task.description}")


def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> CommandResult:
    tasks = state.task_store.list_tasks()
    if not tasks:
        return CommandResult.success(
            "No tasks found. Use 'gist-todo add \"task\"' to create your first task."
        )
    lines = [f"You have {len(tasks)} task(s):", ""]
    lines += [_render_task(t) for t in sorted(tasks, key=lambda t: t.created_at)]
    return CommandResult.success("\n".join(lines))


def cmd_done(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> CommandResult:
    if not args:
        return CommandResult.error("Usage: gist-todo done <id-prefix>")
    task = state.task_store.complete_task(args[0])
    return CommandResult.success(f"Task completed successfully: [{task.short_id}] {task.description}")


def cmd_done_all(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> CommandResult:
    n = state.task_store.complete_all()
    if n == 0:
        return CommandResult.success("No pending tasks to complete.")
    return CommandResult.success(f"Completed {n} task(s).")


def cmd_rm(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> CommandResult:
    """
    rm <prefix>  -> remove one task
    rm all       -> remove every task
    """
    if not args:
        return CommandResult.error("Usage: gist-todo rm <id-prefix> | gist-todo rm all")

    if args[0].lower() == "all":
        n = state.task_store.remove_all()
        if n == 0:
            return CommandResult.success("No tasks to remove.")
        return CommandResult.success(f"Removed {n} task(s).")

    task = state.task_store.remove_task(args[0])
    return CommandResult.success(f"Task removed successfully: [{task.short_id}] {task.description}")


def _validation_error_kind(kind: TokenErrorKind | None) -> ErrorKind:
    match kind:
        case TokenErrorKind.NETWORK_ERROR:
            return ErrorKind.NETWORK_ERROR
        case TokenErrorKind.SERVER_ERROR | TokenErrorKind.RATE_LIMITED:
            return ErrorKind.SERVER_ERROR
        case TokenErrorKind.INVALID_TOKEN | TokenErrorKind.INSUFFICIENT_PERMISSIONS | None:
            return ErrorKind.AUTH_REQUIRED


async def _sync_once(state: AppState) -> SyncOutcome:
    validation = await state.auth.ensure_authenticated()
    if not validation.is_valid:
        kind = _validation_error_kind(validation.error_kind)
        if kind == ErrorKind.AUTH_REQUIRED:
            return SyncOutcome.failed(kind, describe_error_kind(kind))
        detail = validation.message or "no details"
        return SyncOutcome.failed(kind, f"Could not validate the GitHub token: {detail}")
    return await state.sync.sync(credential=state.auth.stored_token())


def cmd_sync(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> CommandResult:
    if emit:
        emit("Synchronizing with GitHub Gist...")

    outcome = asyncio.run(_sync_once(state))

    if not outcome.success:
        hint = describe_error_kind(outcome.error_kind) if outcome.error_kind else ""
        text = f"Synchronization failed: {outcome.message}"
        if hint and hint not in outcome.message:
            text += f"\n{hint}"
        return CommandResult.error(text)

    lines = [f"{outcome.message} {outcome.tasks_synced} tasks synced."]
    if outcome.conflicts_resolved > 0:
        lines.append(f"Resolved {outcome.conflicts_resolved} conflict(s).")
    return CommandResult.success("\n".join(lines))


def cmd_auth(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> CommandResult:
    """
    auth setup [token] -> validate and store a GitHub token (prompts if omitted)
    auth status        -> show whether a validated token is available
    auth logout        -> forget the stored token
    """
    sub = args[0].lower() if args else ""

    if sub == "setup":
        token = args[1] if len(args) > 1 else getpass.getpass("Enter your GitHub personal access token: ")
        if not token.strip():
            return CommandResult.error("Error: Token cannot be empty")
        result = asyncio.run(state.auth.authenticate(token))
        if not result.success:
            return CommandResult.error(f"Authentication failed: {result.message}")
        return CommandResult.success(
            "Authentication successful! You're now ready to sync tasks with GitHub Gist."
        )

    if sub == "status":
        if state.auth.is_authenticated():
            return CommandResult.success("Authenticated (token validated recently).")
        if state.auth.has_token():
            return CommandResult.success("Token stored; it will be re-validated on next sync.")
        return CommandResult.success("Not authenticated. Run 'gist-todo auth setup'.")

    if sub == "logout":
        state.auth.clear_authentication()
        return CommandResult.success("Logged out. Stored token removed.")

    return CommandResult.error("Usage: gist-todo auth setup | auth status | auth logout")


registry.register("help", cmd_help, help_text="Show this help message.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a new task: add \"description\".")
registry.register("list", cmd_list, help_text="List all tasks.", aliases=["ls"])
registry.register("done", cmd_done, help_text="Mark a task as completed: done <id-prefix>.")
registry.register("done-all", cmd_done_all, help_text="Mark all pending tasks as completed.")
registry.register("rm", cmd_rm, help_text="Remove a task: rm <id-prefix> | rm all.")
registry.register("sync", cmd_sync, help_text="Sync tasks with GitHub Gist.")
registry.register("auth", cmd_auth, help_text="GitHub token: auth setup | status | logout.")
