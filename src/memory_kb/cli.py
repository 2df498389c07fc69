#!/usr/bin/env python3
"""
mem: CLI for a personal knowledge base

Usage:
    mem list --type=notes --starts-with=Apple   # Filter entries
    mem get note "Apple Pie"                    # Show an entry
    mem add note "Apple Pie" --tags=food        # Create an entry
    mem edit note "Apple Pie"                   # Edit in $EDITOR
    mem rename note "Apple Pie" "Apple Tart"    # Rename, links follow
"""

from __future__ import annotations

import difflib
import json
import sys
from collections.abc import Sequence
from typing import Any, NoReturn

import click
from click.exceptions import ClickException, UsageError

from . import __version__ as MEMORY_VERSION
from .config import DEFAULT_LIST_LIMIT, TRUNCATE_AT, ConfigurationError
from .core import KnowledgeBase
from .errors import (
    EditorError,
    ErrorCode,
    FormatError,
    KBError,
    StorageIOError,
    ValidationError,
    format_error_json,
)
from .models import Entry, EntryType, QuerySpec, SortOrder, new_entry, parse_types
from .query import describe_types

ENTRY_TYPE_CHOICES = [t.value.lower() for t in EntryType] + [t.plural.lower() for t in EntryType]


def format_table(rows: list[dict], columns: list[str], max_widths: dict | None = None) -> str:
    """Format rows as a simple table."""
    if not rows:
        return ""

    max_widths = max_widths or {}
    widths = {col: len(col) for col in columns}

    def cell(row: dict, col: str) -> str:
        val = str(row.get(col, ""))
        limit = max_widths.get(col, 50)
        if len(val) > limit:
            val = val[: limit - 3] + "..."
        return val

    for row in rows:
        for col in columns:
            widths[col] = max(widths[col], len(cell(row, col)))

    header = "  ".join(col.upper().ljust(widths[col]) for col in columns)
    separator = "  ".join("-" * widths[col] for col in columns)

    lines = [header, separator]
    for row in rows:
        lines.append("  ".join(cell(row, col).ljust(widths[col]) for col in columns).rstrip())

    return "\n".join(lines)


def output(data, as_json: bool = False):
    """Output data as JSON or formatted text."""
    if as_json:
        click.echo(json.dumps(data, indent=2, default=str))
    else:
        click.echo(data)


def truncate(value: str, limit: int = TRUNCATE_AT) -> str:
    if len(value) <= limit:
        return value
    return value[: limit - 3] + "..."


def _entry_dict(entry: Entry) -> dict[str, Any]:
    data = entry.model_dump(mode="json")
    data["type"] = entry.type.value
    data["slug"] = entry.slug
    return data


def _handle_error(
    ctx: click.Context,
    error: Exception,
    fallback_message: str | None = None,
    exit_code: int = 1,
) -> NoReturn:
    """Handle an error with optional JSON output.

    If --json-errors is enabled, outputs structured JSON error.
    Otherwise, outputs human-readable error message.
    """
    json_errors = ctx.obj.get("json_errors", False) if ctx.obj else False

    if isinstance(error, KBError):
        if json_errors:
            click.echo(error.to_json(), err=True)
        else:
            click.echo(f"Error: {error.message}", err=True)
    else:
        message = fallback_message or str(error)
        if json_errors:
            code = (
                ErrorCode.CONFIGURATION_ERROR
                if isinstance(error, ConfigurationError)
                else ErrorCode.VALIDATION_ERROR
            )
            click.echo(format_error_json(code.value, message), err=True)
        else:
            click.echo(f"Error: {message}", err=True)

    sys.exit(exit_code)


def get_error_code_for_exception(exc: Exception) -> str:
    """Map Click exceptions to error codes."""
    if isinstance(exc, click.BadParameter):
        return "INVALID_ARGUMENT"
    elif isinstance(exc, click.MissingParameter):
        return "MISSING_ARGUMENT"
    elif isinstance(exc, click.NoSuchOption):
        return "UNKNOWN_OPTION"
    elif isinstance(exc, UsageError):
        return "USAGE_ERROR"
    elif isinstance(exc, ClickException):
        return "CLI_ERROR"
    return "UNKNOWN_ERROR"


# ─────────────────────────────────────────────────────────────────────────────
# JSON Error Handling
# ─────────────────────────────────────────────────────────────────────────────


class JsonErrorGroup(click.Group):
    """Click group that formats errors as JSON when --json-errors is set.

    Also suggests the closest command on typos.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except UsageError as e:
            cmd_name = args[0] if args else ""
            if cmd_name and "No such command" in str(e):
                matches = difflib.get_close_matches(
                    cmd_name, self.list_commands(ctx), n=1, cutoff=0.6
                )
                if matches:
                    raise UsageError(f"No such command '{cmd_name}'. Did you mean '{matches[0]}'?")
            raise

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except ClickException as e:
            if ctx.params.get("json_errors"):
                code = get_error_code_for_exception(e)
                click.echo(format_json_error_for_click(code, e), err=True)
                raise SystemExit(1)
            raise

    def main(
        self,
        args: Sequence[str] | None = None,
        prog_name: str | None = None,
        complete_var: str | None = None,
        standalone_mode: bool = True,
        **extra: Any,
    ) -> Any:
        """Catch errors raised while parsing arguments, before invoke()."""
        argv = list(args) if args is not None else list(sys.argv[1:])

        if "--json-errors" not in argv:
            return super().main(args, prog_name, complete_var, standalone_mode, **extra)

        # Accept a misplaced --json-errors by moving it in front of the subcommand
        argv = ["--json-errors", *(a for a in argv if a != "--json-errors")]

        try:
            return super().main(argv, prog_name, complete_var, standalone_mode=False, **extra)
        except ClickException as e:
            code = get_error_code_for_exception(e)
            click.echo(format_json_error_for_click(code, e), err=True)
            raise SystemExit(1)
        except click.exceptions.Abort:
            click.echo(format_error_json("ABORTED", "Aborted"), err=True)
            raise SystemExit(1)


def format_json_error_for_click(code: str, exc: ClickException) -> str:
    return format_error_json(code, exc.format_message())


# ─────────────────────────────────────────────────────────────────────────────
# Main CLI Group
# ─────────────────────────────────────────────────────────────────────────────


def _open_kb(ctx: click.Context) -> KnowledgeBase:
    try:
        return KnowledgeBase.open(ctx.obj.get("home"))
    except (KBError, ConfigurationError) as e:
        _handle_error(ctx, e)


def _save(ctx: click.Context, kb: KnowledgeBase) -> None:
    try:
        kb.save()
    except KBError as e:
        _handle_error(ctx, e)


@click.group(cls=JsonErrorGroup, invoke_without_command=True)
@click.version_option(version=MEMORY_VERSION, prog_name="mem")
@click.option(
    "--json-errors",
    "json_errors",
    is_flag=True,
    help="Output errors as JSON (for programmatic use)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    envvar="MEMORY_QUIET",
    help="Suppress warnings, show only errors and essential output",
)
@click.option(
    "--home",
    type=click.Path(file_okay=False),
    help="Data directory (default: $MEMORY_HOME or ~/.memory)",
)
@click.pass_context
def cli(ctx: click.Context, json_errors: bool, quiet: bool, home: str | None):
    """mem: a personal knowledge base of linked notes, events, people, places and things.

    \b
    Browse:
      mem list                              # Most recently modified first
      mem list --type=people --tag=family   # Filter by type and tag
      mem get person "Ada Lovelace"         # Show one entry
      mem links person "Ada Lovelace"       # What links to and from it

    \b
    Change:
      mem add note "Apple Pie" --tags=food --link=Banana
      mem edit note "Apple Pie"             # Opens your editor
      mem rename note "Apple Pie" "Apple Tart"
      mem delete note "Apple Tart"

    \b
    Maintain:
      mem check                             # Audit link symmetry
      mem config --editor="code --wait"     # Choose the editor
    """
    from ._logging import configure_logging, set_quiet_mode

    configure_logging()

    ctx.ensure_object(dict)
    ctx.obj["json_errors"] = json_errors
    ctx.obj["quiet"] = quiet
    ctx.obj["home"] = home

    if quiet:
        set_quiet_mode(True)

    if ctx.invoked_subcommand is None:
        kb = _open_kb(ctx)
        click.echo(f"memory-kb {MEMORY_VERSION}")
        click.echo(f"Data: {kb.data_path}")
        click.echo(f"Entries: {kb.count()}")
        click.echo("\nRun 'mem --help' for commands.")


# ─────────────────────────────────────────────────────────────────────────────
# List Command
# ─────────────────────────────────────────────────────────────────────────────


@cli.command("list")
@click.option("--type", "-t", "types", multiple=True, help="Entry type(s), e.g. notes,people")
@click.option("--starts-with", "-s", default="", help="Name prefix (case-insensitive)")
@click.option("--contains", "-c", default="", help="Name substring (case-insensitive)")
@click.option("--search", default="", help="Free-text keywords")
@click.option("--tag", "--tags", "tags", multiple=True, help="Any of these tags (comma-separated)")
@click.option(
    "--sort",
    type=click.Choice([o.value for o in SortOrder]),
    default=SortOrder.RECENT.value,
    show_default=True,
    help="Sort order",
)
@click.option("--limit", "-n", default=DEFAULT_LIST_LIMIT, help="Max results (0 for all)")
@click.option("--all", "include_excluded", is_flag=True, help="Include excluded entries")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_entries(
    ctx: click.Context,
    types: tuple[str, ...],
    starts_with: str,
    contains: str,
    search: str,
    tags: tuple[str, ...],
    sort: str,
    limit: int,
    include_excluded: bool,
    as_json: bool,
):
    """List entries with filters.

    \b
    Examples:
      mem list
      mem list --type=notes --starts-with=Apple --sort=name
      mem list --tags=food,plant --limit=0
      mem list --all                        # Include excluded entries
    """
    kb = _open_kb(ctx)
    tag_list = [t.strip() for value in tags for t in value.split(",") if t.strip()]
    spec = QuerySpec(
        types=parse_types(types),
        starts_with=starts_with,
        contains=contains,
        search=search,
        tags=tag_list,
        sort=sort,
        limit=limit,
        include_excluded=include_excluded,
    )
    result = kb.query(spec)

    if as_json:
        payload = result.model_dump(mode="json", exclude={"entries"})
        payload["entries"] = [_entry_dict(e) for e in result.entries]
        output(payload, as_json=True)
        return

    summary = [describe_types(result.types)]
    if result.starts_with:
        summary.append(f"starting with '{result.starts_with}'")
    if result.contains:
        summary.append(f"containing '{result.contains}'")
    if result.tags:
        summary.append(f"tagged {', '.join(result.tags)}")
    if result.search:
        summary.append(f"matching '{result.search}'")
    summary.append(f"sorted by {result.sort.value}")
    click.echo(", ".join(summary))

    if not result.entries:
        click.echo("No entries found.")
        return

    rows = [
        {
            "#": i,
            "type": e.type.value,
            "name": e.name,
            "tags": e.tags_string(),
            "modified": e.modified.strftime("%Y-%m-%d %H:%M") if e.modified else "",
        }
        for i, e in enumerate(result.entries, start=1)
    ]
    click.echo(format_table(rows, ["#", "type", "name", "tags", "modified"], {"tags": 30}))


# ─────────────────────────────────────────────────────────────────────────────
# Get / Links Commands
# ─────────────────────────────────────────────────────────────────────────────


def _echo_entry(kb: KnowledgeBase, entry: Entry) -> None:
    click.echo(f"{entry.name} ({entry.type.value})")
    click.echo("=" * 40)
    for field, value in entry.details.model_dump(exclude={"kind"}).items():
        if value:
            click.echo(f"{field.capitalize()}: {value}")
    if entry.tags:
        click.echo(f"Tags: {', '.join(entry.tags)}")
    for key, value in entry.custom.items():
        click.echo(f"{key}: {value}")
    if entry.exclude:
        click.echo("Excluded: yes")
    if entry.description:
        click.echo(f"\n{truncate(entry.description)}\n")
    neighbors = kb.neighbors(entry.type, entry.name)
    if neighbors:
        click.echo("Links:")
        for i, neighbor in enumerate(neighbors, start=1):
            arrow = "->" if neighbor.direction == "to" else "<-"
            label = neighbor.entry.name if neighbor.entry else f"{neighbor.slug} (missing)"
            click.echo(f"  {i}. {arrow} {label}")
    if entry.created:
        click.echo(f"\nCreated: {entry.created.isoformat()}")
    if entry.modified:
        click.echo(f"Modified: {entry.modified.isoformat()}")


@cli.command()
@click.argument("entry_type", metavar="TYPE", type=click.Choice(ENTRY_TYPE_CHOICES, case_sensitive=False))
@click.argument("name")
@click.option("--all", "include_excluded", is_flag=True, help="Allow excluded entries")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def get(ctx: click.Context, entry_type: str, name: str, include_excluded: bool, as_json: bool):
    """Show an entry.

    \b
    Examples:
      mem get note "Apple Pie"
      mem get place Home --json
    """
    kb = _open_kb(ctx)
    try:
        entry = kb.get_entry(entry_type, name, include_excluded=include_excluded)
    except KBError as e:
        _handle_error(ctx, e)

    if as_json:
        output(_entry_dict(entry), as_json=True)
    else:
        _echo_entry(kb, entry)


@cli.command()
@click.argument("entry_type", metavar="TYPE", type=click.Choice(ENTRY_TYPE_CHOICES, case_sensitive=False))
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def links(ctx: click.Context, entry_type: str, name: str, as_json: bool):
    """Show links to and from an entry.

    Links whose target no longer exists are marked as missing.

    \b
    Examples:
      mem links note "Apple Pie"
    """
    kb = _open_kb(ctx)
    try:
        neighbors = kb.neighbors(entry_type, name)
    except KBError as e:
        _handle_error(ctx, e)

    rows = [
        {
            "#": i,
            "direction": n.direction,
            "slug": n.slug,
            "name": n.entry.name if n.entry else "",
            "type": n.entry.type.value if n.entry else "",
            "exists": n.entry is not None,
        }
        for i, n in enumerate(neighbors, start=1)
    ]

    if as_json:
        output(rows, as_json=True)
        return
    if not rows:
        click.echo("No links.")
        return
    for row in rows:
        row["name"] = row["name"] or "(missing)"
    click.echo(format_table(rows, ["#", "direction", "name", "type", "slug"]))


# ─────────────────────────────────────────────────────────────────────────────
# Add Command
# ─────────────────────────────────────────────────────────────────────────────


def _parse_custom(values: tuple[str, ...]) -> dict[str, str]:
    custom: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValidationError(f"Custom field must look like key=value: {item}")
        custom[key.strip()] = value.strip()
    return custom


@cli.command()
@click.argument("entry_type", metavar="TYPE", type=click.Choice(ENTRY_TYPE_CHOICES, case_sensitive=False))
@click.argument("name")
@click.option("--description", "-d", default="", help="Body text; [[Name]] creates a link")
@click.option("--tag", "--tags", "tags", default="", help="Tags (comma-separated)")
@click.option("--link", "links_to", multiple=True, help="Name of an entry to link to")
@click.option("--start", help="Event start")
@click.option("--end", help="Event end")
@click.option("--latitude", help="Place latitude")
@click.option("--longitude", help="Place longitude")
@click.option("--address", help="Place address")
@click.option("--custom", multiple=True, help="Custom field as key=value")
@click.option("--exclude", is_flag=True, help="Hide from default listings")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def add(
    ctx: click.Context,
    entry_type: str,
    name: str,
    description: str,
    tags: str,
    links_to: tuple[str, ...],
    start: str | None,
    end: str | None,
    latitude: str | None,
    longitude: str | None,
    address: str | None,
    custom: tuple[str, ...],
    exclude: bool,
    as_json: bool,
):
    """Create an entry.

    \b
    Examples:
      mem add note "Apple Pie" --tags=food,dessert --link=Banana
      mem add event "Launch" --start=2024-05-01 --end=2024-05-02
      mem add place Home --address="1 Main St" --custom=floor=2
    """
    details = {
        key: value
        for key, value in {
            "start": start,
            "end": end,
            "latitude": latitude,
            "longitude": longitude,
            "address": address,
        }.items()
        if value is not None
    }

    kb = _open_kb(ctx)
    try:
        entry = new_entry(
            entry_type,
            name,
            description,
            [t.strip() for t in tags.split(",") if t.strip()],
            links_to=list(links_to),
            custom=_parse_custom(custom),
            exclude=exclude,
            **details,
        )
        created = kb.create_entry(entry)
    except KBError as e:
        _handle_error(ctx, e)
    _save(ctx, kb)

    if as_json:
        output(_entry_dict(created), as_json=True)
    else:
        click.echo(f"Created {created.type.value.lower()}: {created.name}")
        missing = [s for s in created.links_to if kb.store.resolve(s) is None]
        if missing and not ctx.obj.get("quiet"):
            click.echo(f"Note: no entry yet for {', '.join(missing)}", err=True)


# ─────────────────────────────────────────────────────────────────────────────
# Edit Command
# ─────────────────────────────────────────────────────────────────────────────


@cli.command()
@click.argument("entry_type", metavar="TYPE", type=click.Choice(ENTRY_TYPE_CHOICES, case_sensitive=False))
@click.argument("name")
@click.option("--editor", help="Editor command (default: settings, $VISUAL, $EDITOR)")
@click.pass_context
def edit(ctx: click.Context, entry_type: str, name: str, editor: str | None):
    """Edit an entry in an external editor.

    If the edited text cannot be parsed it is saved under the recovery
    directory and you can re-open the editor on it.

    \b
    Examples:
      mem edit note "Apple Pie"
      mem edit person Ada --editor="code --wait"
    """
    kb = _open_kb(ctx)
    text: str | None = None
    while True:
        try:
            entry = kb.edit_entry(entry_type, name, editor=editor, text=text)
            break
        except FormatError as e:
            click.echo(f"Error: {e.message}", err=True)
            try:
                path = kb.save_recovery(name, e.text)
            except StorageIOError as save_error:
                click.echo(f"Error: {save_error.message}", err=True)
                click.echo(f"Your edits:\n{e.text}", err=True)
            else:
                click.echo(f"Your edits were saved to {path}", err=True)
            if not click.confirm("Re-open the editor?", default=True, err=True):
                sys.exit(1)
            text = e.text
        except EditorError as e:
            if e.content is not None:
                click.echo(f"Your edits remain in {e.path}", err=True)
            _handle_error(ctx, e)
        except (KBError, ConfigurationError) as e:
            _handle_error(ctx, e)

    _save(ctx, kb)
    click.echo(f"Saved {entry.type.value.lower()}: {entry.name}")


# ─────────────────────────────────────────────────────────────────────────────
# Rename / Delete Commands
# ─────────────────────────────────────────────────────────────────────────────


@cli.command()
@click.argument("entry_type", metavar="TYPE", type=click.Choice(ENTRY_TYPE_CHOICES, case_sensitive=False))
@click.argument("name")
@click.argument("new_name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def rename(ctx: click.Context, entry_type: str, name: str, new_name: str, as_json: bool):
    """Rename an entry; links to it are updated.

    \b
    Examples:
      mem rename note "Apple Pie" "Apple Tart"
    """
    kb = _open_kb(ctx)
    try:
        entry = kb.rename_entry(entry_type, name, new_name)
    except KBError as e:
        _handle_error(ctx, e)
    _save(ctx, kb)

    if as_json:
        output(_entry_dict(entry), as_json=True)
    else:
        click.echo(f"Renamed: {name} -> {entry.name}")


@cli.command()
@click.argument("entry_type", metavar="TYPE", type=click.Choice(ENTRY_TYPE_CHOICES, case_sensitive=False))
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def delete(ctx: click.Context, entry_type: str, name: str, yes: bool, as_json: bool):
    """Delete an entry and remove links to it.

    \b
    Examples:
      mem delete note "Apple Pie"
      mem delete note "Apple Pie" --yes
    """
    kb = _open_kb(ctx)
    try:
        entry = kb.get_entry(entry_type, name, include_excluded=True)
    except KBError as e:
        _handle_error(ctx, e)

    if not yes:
        click.confirm(f"Delete {entry.type.value.lower()} '{entry.name}'?", abort=True)

    removed = kb.delete_entry(entry_type, name)
    _save(ctx, kb)

    result = {
        "deleted": removed.name,
        "type": removed.type.value,
        "had_backlinks": removed.linked_from,
    }
    if as_json:
        output(result, as_json=True)
    else:
        if removed.linked_from and not ctx.obj.get("quiet"):
            click.echo(f"Warning: Entry had {len(removed.linked_from)} backlinks", err=True)
        click.echo(f"Deleted: {removed.name}")


# ─────────────────────────────────────────────────────────────────────────────
# Count / Tags / Check Commands
# ─────────────────────────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def count(ctx: click.Context):
    """Show the number of entries."""
    kb = _open_kb(ctx)
    click.echo(kb.count())


@cli.command()
@click.option("--min-count", default=1, help="Minimum usage count")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def tags(ctx: click.Context, min_count: int, as_json: bool):
    """List all tags with usage counts.

    \b
    Examples:
      mem tags
      mem tags --min-count=3
    """
    kb = _open_kb(ctx)
    counts = {tag: n for tag, n in kb.tag_counts().items() if n >= min_count}

    if as_json:
        output([{"tag": tag, "count": n} for tag, n in counts.items()], as_json=True)
    elif not counts:
        click.echo("No tags found.")
    else:
        rows = [{"tag": tag, "count": n} for tag, n in counts.items()]
        click.echo(format_table(rows, ["tag", "count"]))


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def check(ctx: click.Context, as_json: bool):
    """Audit the link graph.

    Reports edges recorded on only one side (an error) and links to
    entries that do not exist (allowed, listed for information).
    """
    kb = _open_kb(ctx)
    asymmetries = kb.check()
    dangling = kb.dangling_links()

    if as_json:
        output(
            {
                "total_entries": kb.count(),
                "asymmetric": [a._asdict() for a in asymmetries],
                "dangling": [{"source": s, "target": t} for s, t in dangling],
            },
            as_json=True,
        )
    else:
        click.echo(f"Total Entries: {kb.count()}")
        if asymmetries:
            click.echo(f"\n⚠ Asymmetric links ({len(asymmetries)}):")
            for a in asymmetries:
                click.echo(f"  - {a.source} -> {a.target} (missing {a.missing})")
        else:
            click.echo("\n✓ All links are symmetric")
        if dangling:
            click.echo(f"\nLinks to missing entries ({len(dangling)}):")
            for source, target in dangling:
                click.echo(f"  - {source} -> {target}")

    if asymmetries:
        sys.exit(1)


# ─────────────────────────────────────────────────────────────────────────────
# Config Command
# ─────────────────────────────────────────────────────────────────────────────


@cli.command("config")
@click.option("--editor", help="Set the editor command")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def config_cmd(ctx: click.Context, editor: str | None, as_json: bool):
    """Show or change settings.

    \b
    Examples:
      mem config
      mem config --editor="nano"
    """
    from . import config as _config

    home = _config.get_home(ctx.obj.get("home"))
    try:
        if editor is not None:
            settings = _config.load_settings(home)
            settings["editor"] = editor
            _config.save_settings(home, settings)
        info = {
            "home": str(home),
            "data_file": str(_config.data_path(home)),
            "settings_file": str(_config.settings_path(home)),
            "editor": _config.get_editor_command(home),
        }
    except ConfigurationError as e:
        _handle_error(ctx, e)

    if as_json:
        output(info, as_json=True)
    else:
        for key, value in info.items():
            click.echo(f"{key}: {value}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
