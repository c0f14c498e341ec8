"""Textual rendering of audit results.

One header per repository that needs attention, then one line per finding.
"""

from __future__ import annotations

from fleetcheck.audit.errors import AuditError
from fleetcheck.audit.fleet import FleetEntry, get_summary
from fleetcheck.audit.model import (
    Divergence,
    HookDiff,
    HookDiffKind,
    NoUpstream,
    RepoReport,
    SyncState,
)
from fleetcheck.core.config import HooksConfig
from fleetcheck.core.result import Err, Ok
from fleetcheck.output.console import ConsoleProtocol, Style

__all__ = [
    "describe_error",
    "describe_hook",
    "describe_sync",
    "report_lines",
    "print_entry",
    "print_scan",
    "print_summary",
]

_INDENT = "    "
_ACTIVE_HOOKS_LABEL = ".git/hooks"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def describe_sync(state: SyncState) -> list[str]:
    """Lines describing a branch's sync state; empty when in sync."""
    match state:
        case NoUpstream(branch=None):
            return ["HEAD is detached, no upstream to compare against"]
        case NoUpstream(branch=branch):
            return [f"Branch {branch} has no upstream"]
        case Divergence(branch=branch, upstream=upstream, ahead=ahead, behind=behind):
            lines: list[str] = []
            if ahead:
                lines.append(
                    f"Branch {branch} is ahead of {upstream} by {_plural(ahead, 'commit')}"
                )
            if behind:
                lines.append(
                    f"Branch {branch} is behind {upstream} by {_plural(behind, 'commit')}"
                )
            return lines
    return []


def describe_hook(diff: HookDiff, hooks: HooksConfig | None = None) -> str:
    tracked = (hooks or HooksConfig()).tracked_dir
    match diff.kind:
        case HookDiffKind.MISSING_IN_TARGET:
            return f"Hook {diff.name} only appears in {tracked}"
        case HookDiffKind.MISSING_IN_SOURCE:
            return f"Hook {diff.name} only appears in {_ACTIVE_HOOKS_LABEL}"
        case HookDiffKind.CONTENT_MISMATCH:
            return f"Hook {diff.name} is different in {_ACTIVE_HOOKS_LABEL} and {tracked}"


def describe_error(error: AuditError) -> str:
    return error.message


def report_lines(report: RepoReport, hooks: HooksConfig | None = None) -> list[tuple[str, Style]]:
    """Findings of one repository as (line, style) pairs, in display order."""
    lines: list[tuple[str, Style]] = []

    if report.dirty:
        lines.append(("Has uncommitted changes", Style.WARNING))
    if report.stash_count:
        lines.append((f"Has {_plural(report.stash_count, 'stashed change')}", Style.WARNING))

    if report.sync is not None:
        lines.extend((line, Style.WARNING) for line in describe_sync(report.sync))
    for other in report.diverging_branches:
        lines.extend((line, Style.WARNING) for line in describe_sync(other.state))

    lines.extend((describe_hook(d, hooks), Style.WARNING) for d in report.hook_mismatches)
    lines.extend((f"error: {describe_error(e)}", Style.ERROR) for e in report.errors)
    return lines


def print_entry(
    entry: FleetEntry,
    console: ConsoleProtocol,
    *,
    hooks: HooksConfig | None = None,
    show_clean: bool = False,
) -> None:
    """Print one repository: header plus findings, nothing if clean."""
    match entry.result:
        case Err(error):
            console.header(f"{entry.path}:")
            console.print(f"{_INDENT}error: {describe_error(error)}", Style.ERROR)
        case Ok(report):
            lines = report_lines(report, hooks)
            if not lines:
                if show_clean:
                    console.print(f"{entry.path}: ok", Style.DIM)
                return
            console.header(f"{entry.path}:")
            for line, style in lines:
                console.print(f"{_INDENT}{line}", style)


def print_summary(entries: list[FleetEntry], console: ConsoleProtocol) -> None:
    summary = get_summary(entries)
    if summary["total"] == 0:
        console.print("No repositories found", Style.DIM)
        return

    needs_attention = summary["total"] - summary["clean"]
    total = summary["total"]
    noun = "repository" if total == 1 else "repositories"
    text = f"{total} {noun} scanned, {needs_attention} need attention"
    if summary["errors"]:
        text += f", {summary['errors']} with errors"
    if needs_attention:
        console.warning(text)
    else:
        console.success(text)


def print_scan(
    entries: list[FleetEntry],
    console: ConsoleProtocol,
    *,
    hooks: HooksConfig | None = None,
    show_clean: bool = False,
) -> None:
    """Print every entry, then the summary line."""
    for entry in entries:
        print_entry(entry, console, hooks=hooks, show_clean=show_clean)
    console.newline()
    print_summary(entries, console)
