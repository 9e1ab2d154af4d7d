# src/taskflow/cli/commands.py

from __future__ import annotations

import asyncio
import inspect
import logging
import shlex
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any, cast

from ..core.state import AppState
from ..tasks.export import export_tasks
from ..tasks.task_api import ApiResponse
from ..tasks.task_models import FilterSpec, SortKey, TaskPriority, TaskStatus
from ..tasks.view_projector import summarize
from .render import render_filters, render_stats, render_task, render_view

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

# Short names accepted in key=value arguments.
FIELD_ALIASES: dict[str, str] = {
    "desc": "description",
    "description": "description",
    "due": "dueDate",
    "duedate": "dueDate",
    "due_date": "dueDate",
    "title": "title",
    "status": "status",
    "priority": "priority",
    "prio": "priority",
}

CLEAR_VALUES = {"", "any", "all", "none", "-"}


class CommandError(ValueError):
    """Bad command arguments; the message is shown to the user as-is."""


class CommandRegistry:
    """Slash-command registry used by connectors (/help, /add, ...)."""

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
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like '/command args'.
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except CommandError as e:
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _split_args(args: list[str]) -> tuple[list[str], dict[str, str]]:
    """Separate bare words from key=value pairs (keys normalized via FIELD_ALIASES)."""
    words: list[str] = []
    pairs: dict[str, str] = {}
    for arg in args:
        if "=" not in arg:
            words.append(arg)
            continue
        key, value = arg.split("=", 1)
        field_name = FIELD_ALIASES.get(key.strip().lower())
        if field_name is None:
            raise CommandError(f"Unknown field: {key}. Use title, desc, status, priority, due.")
        pairs[field_name] = value
    return words, pairs


def _run(coro: Coroutine[Any, Any, ApiResponse]) -> ApiResponse:
    return asyncio.run(coro)


def _after_mutation(state: AppState, resp: ApiResponse) -> str:
    """Report the API outcome and re-render the current view."""
    if not resp.ok:
        return f"Error ({resp.status}): {resp.error}"
    lines = [resp.message or "OK"]
    if resp.data is not None:
        lines.append(render_task(resp.data))
    lines.append("")
    lines.append(render_view(state.view(), show_description=False))
    return "\n".join(lines)


def _need_id(args: list[str], usage: str) -> str:
    if not args:
        raise CommandError(f"Usage: {usage}")
    return args[0]


# ---- handlers ----


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    app_name = getattr(state.settings, "app_name", "taskflow")
    export_dir = getattr(state.settings, "export_dir", "-")
    return (
        "Status:\n"
        f"  App: {app_name}\n"
        f"  Tasks in store: {len(state.task_store)}\n"
        f"  {render_filters(state.filters)}\n"
        f"  Export dir: {export_dir}"
    )


def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /list       -> tasks matching the current filters
    /list all   -> every task, in the current sort order
    """
    spec = state.filters
    if args and args[0].lower() == "all":
        tasks = state.task_store.project(FilterSpec(sort_key=spec.sort_key))
        return render_view(tasks)
    return f"{render_filters(spec)}\n{render_view(state.view())}"


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add "Title words" priority=high due=2025-01-01 [status=pending] [desc="..."]

    Status defaults to pending, as in the add-task form.
    """
    words, fields = _split_args(args)
    if words and "title" not in fields:
        fields["title"] = " ".join(words)
    fields.setdefault("status", TaskStatus.PENDING.value)
    return _after_mutation(state, _run(state.api.create_task(fields)))


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/edit <id> key=value ...  (unspecified fields keep their current values)"""
    task_id = _need_id(args, "/edit <id> title=... desc=... status=... priority=... due=...")
    words, changes = _split_args(args[1:])
    if words:
        raise CommandError(f"Expected key=value pairs, got: {' '.join(words)}")
    if not changes:
        raise CommandError("Nothing to change. Pass at least one key=value pair.")

    resp = _run(state.api.get_tasks())
    current = next((t for t in (resp.data or []) if t.id == task_id), None)
    if current is None:
        return "Error (404): Task not found"

    fields = current.to_dict()
    fields.update(changes)
    return _after_mutation(state, _run(state.api.update_task(task_id, fields)))


def cmd_toggle(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task_id = _need_id(args, "/toggle <id>")
    return _after_mutation(state, _run(state.api.toggle_task_status(task_id)))


def cmd_rm(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task_id = _need_id(args, "/rm <id>")
    return _after_mutation(state, _run(state.api.delete_task(task_id)))


def cmd_search(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/search <text>  (no text clears the search)"""
    spec = state.set_filters(search=" ".join(args).strip())
    return f"{render_filters(spec)}\n{render_view(state.view())}"


def cmd_filter(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/filter status=<pending|in-progress|completed|any> priority=<low|medium|high|any>"""
    words, pairs = _split_args(args)
    if words or not pairs or set(pairs) - {"status", "priority"}:
        raise CommandError("Usage: /filter status=<status|any> priority=<priority|any>")

    changes: dict[str, Any] = {}
    if "status" in pairs:
        raw = pairs["status"].strip().lower()
        status = None if raw in CLEAR_VALUES else TaskStatus.parse(raw)
        if raw not in CLEAR_VALUES and status is None:
            raise CommandError(f"Unknown status: {pairs['status']}")
        changes["status"] = status or ""
    if "priority" in pairs:
        raw = pairs["priority"].strip().lower()
        priority = None if raw in CLEAR_VALUES else TaskPriority.parse(raw)
        if raw not in CLEAR_VALUES and priority is None:
            raise CommandError(f"Unknown priority: {pairs['priority']}")
        changes["priority"] = priority or ""

    spec = state.set_filters(**changes)
    return f"{render_filters(spec)}\n{render_view(state.view())}"


def cmd_sort(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    keys = ", ".join(k.value for k in SortKey)
    if not args:
        return f"Sorted by {state.filters.sort_key}. Available: {keys}."
    wanted = args[0].strip().replace("_", "").lower()
    if wanted not in {k.value.lower() for k in SortKey}:
        raise CommandError(f"Unknown sort key: {args[0]}. Available: {keys}.")
    spec = state.set_filters(sort_key=SortKey.parse(args[0]))
    return f"{render_filters(spec)}\n{render_view(state.view())}"


def cmd_reset(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    default_sort = SortKey.parse(getattr(state.settings, "default_sort", None))
    spec = state.set_filters(search="", status="", priority="", sort_key=default_sort)
    return f"{render_filters(spec)}\n{render_view(state.view())}"


def cmd_stats(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return render_stats(summarize(state.task_store.list()))


def cmd_export(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/export [directory]  (defaults to settings.export_dir)"""
    directory = Path(args[0]) if args else Path(getattr(state.settings, "export_dir", "."))
    try:
        path = export_tasks(state.task_store.list(), directory)
    except OSError as e:
        logger.warning("Export to %s failed: %s", directory, e)
        return f"Failed to export tasks: {e}"
    return f"Tasks exported successfully: {path}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show session settings and current filters.")
registry.register("list", cmd_list, help_text="Show tasks: /list | /list all.", aliases=["ls"])
registry.register(
    "add",
    cmd_add,
    help_text='Create a task: /add "Title" priority=high due=2025-01-01 [status=...] [desc=...].',
)
registry.register("edit", cmd_edit, help_text="Update a task: /edit <id> key=value ...")
registry.register("toggle", cmd_toggle, help_text="Flip a task between completed and pending.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["delete"])
registry.register("search", cmd_search, help_text="Search title/description: /search <text>.")
registry.register(
    "filter", cmd_filter, help_text="Filter: /filter status=<...|any> priority=<...|any>."
)
registry.register("sort", cmd_sort, help_text="Sort: /sort createdAt|priority|dueDate|title.")
registry.register("reset", cmd_reset, help_text="Clear search and filters.")
registry.register("stats", cmd_stats, help_text="Show task counts per status.")
registry.register("export", cmd_export, help_text="Export all tasks to JSON: /export [dir].")
