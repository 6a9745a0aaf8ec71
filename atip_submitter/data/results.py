"""Per-item submission results and the batch result ledger"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

SUBMITTED = "SUBMITTED"
TEST_SUBMITTED = "TEST_SUBMITTED"
SKIPPED = "SKIPPED"
ERROR = "ERROR"

STATUS_ORDER = [SUBMITTED, TEST_SUBMITTED, SKIPPED, ERROR]


def error_status(detail):
    """Build an `ERROR:<detail>` status, keeping it on one line"""
    detail = " ".join(str(detail).split())
    return f"{ERROR}:{detail}" if detail else ERROR


def _now():
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SubmissionResult:
    url: str
    status: str
    timestamp: datetime = field(default_factory=_now)

    @property
    def base_status(self):
        """Status without the error detail (ERROR:... -> ERROR)"""
        return self.status.split(":", 1)[0]


@dataclass
class ResultLedger:
    results: List[SubmissionResult] = field(default_factory=list)

    def append(self, result):
        self.results.append(result)

    def counts(self):
        return Counter(result.base_status for result in self.results)

    def __len__(self):
        return len(self.results)

    def __iter__(self):
        return iter(self.results)

    def __bool__(self):
        return bool(self.results)
