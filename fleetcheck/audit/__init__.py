"""Repository divergence audit.

- hashing: content digests
- hooks: tracked vs active hook comparison
- worktree: uncommitted changes and stash
- remote: ahead/behind against the remote-tracking branch
- auditor: one repository, all checks
- fleet: every repository under a root
"""

from fleetcheck.audit.auditor import audit, audit_repo, open_repo
from fleetcheck.audit.errors import (
    AuditError,
    FetchError,
    HookReadError,
    NotARepository,
    RemoteNotFoundError,
    RepositoryStateError,
)
from fleetcheck.audit.fleet import FleetEntry, filter_findings, get_summary, scan
from fleetcheck.audit.model import (
    BranchSync,
    Divergence,
    HookDiff,
    HookDiffKind,
    NoUpstream,
    RepoReport,
    SyncState,
)

__all__ = [
    # auditor
    "audit",
    "audit_repo",
    "open_repo",
    # errors
    "AuditError",
    "FetchError",
    "HookReadError",
    "NotARepository",
    "RemoteNotFoundError",
    "RepositoryStateError",
    # fleet
    "FleetEntry",
    "filter_findings",
    "get_summary",
    "scan",
    # model
    "BranchSync",
    "Divergence",
    "HookDiff",
    "HookDiffKind",
    "NoUpstream",
    "RepoReport",
    "SyncState",
]
