"""Fleet Scanner.

Audits every repository directly under a root directory. Each repository
is audited on its own: an error in one never stops or alters the audit of
the others.

Usage:
    from fleetcheck.audit.fleet import scan

    for entry in scan(Path("~/src").expanduser()):
        match entry.result:
            case Ok(report):
                print(entry.path.name, report.dirty)
            case Err(error):
                print(entry.path.name, error.message)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from fleetcheck.audit.auditor import audit_repo
from fleetcheck.audit.errors import OpenError
from fleetcheck.audit.model import NoUpstream, RepoReport
from fleetcheck.core.config import Config
from fleetcheck.core.result import Err, Ok, Result
from fleetcheck.git.multi import find_repos

__all__ = [
    "FleetEntry",
    "filter_findings",
    "get_summary",
    "scan",
]

AuditFn = Callable[[Path, Config], Result[RepoReport, OpenError]]


@dataclass(frozen=True, slots=True)
class FleetEntry:
    """Audit outcome of one repository in the fleet.

    Attributes:
        path: Repository path
        result: Ok(RepoReport), or Err if the repository could not be opened
    """

    path: Path
    result: Result[RepoReport, OpenError]

    @property
    def ok(self) -> bool:
        """True if the repository was opened and audited."""
        return isinstance(self.result, Ok)

    @property
    def report(self) -> RepoReport | None:
        if isinstance(self.result, Ok):
            return self.result.value
        return None

    @property
    def has_findings(self) -> bool:
        report = self.report
        return report is None or report.has_findings


def scan(
    root: Path,
    config: Config | None = None,
    *,
    on_repo: Callable[[Path], None] | None = None,
    audit_fn: AuditFn = audit_repo,
) -> list[FleetEntry]:
    """Audit every git repository directly under root.

    Args:
        root: Directory whose immediate children are scanned
        config: Audit configuration (remote name, hooks layout)
        on_repo: Called with each repository path before it is audited
        audit_fn: Audits one repository

    Returns:
        One FleetEntry per repository, in discovery order

    Raises:
        OSError: If root cannot be listed
    """
    config = config or Config()
    entries: list[FleetEntry] = []

    for path in find_repos(root):
        if on_repo is not None:
            on_repo(path)
        entries.append(FleetEntry(path=path, result=audit_fn(path, config)))

    return entries


def get_summary(entries: list[FleetEntry]) -> dict[str, int]:
    """Get summary counts from a scan.

    Returns:
        Dict with counts: total, clean, dirty, stashed, diverged,
        no_upstream, hooks, errors
    """
    reports = [e.report for e in entries if e.report is not None]
    return {
        "total": len(entries),
        "clean": sum(1 for r in reports if not r.has_findings),
        "dirty": sum(1 for r in reports if r.dirty),
        "stashed": sum(1 for r in reports if r.stashed),
        "diverged": sum(1 for r in reports if r.ahead or r.behind or r.diverging_branches),
        "no_upstream": sum(1 for r in reports if isinstance(r.sync, NoUpstream)),
        "hooks": sum(1 for r in reports if r.hook_mismatches),
        "errors": sum(1 for e in entries if isinstance(e.result, Err) or e.result.value.errors),
    }


def filter_findings(entries: list[FleetEntry]) -> list[FleetEntry]:
    """Keep only repositories that need attention (including failed ones)."""
    return [e for e in entries if e.has_findings]
