"""Exit codes for the fleetcheck CLI.

The scan itself never aborts on a per-repository failure; these codes only
summarise the outcome of a whole run for shell scripts and cron jobs.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are stable.

    - 0: Scan completed, nothing to report (or findings without --strict)
    - 1: User error (root is not a directory, invalid config file)
    - 2: At least one repository could not be audited completely
    - 3: Findings present and --strict was given
    """

    OK = 0
    USER_ERROR = 1
    REPO_ERROR = 2
    FINDINGS = 3

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
