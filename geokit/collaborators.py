"""Interfaces of the services a scan is handed to or gated by.

Persistence and quota policy live outside the core.  The in-memory
implementations here are the defaults wired into the HTTP app.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from threading import Lock
from typing import Optional, Protocol

from geokit.scanner.models import ScanResult


@dataclass(frozen=True)
class QuotaDecision:
    allowed: bool
    message: Optional[str] = None
    remaining: Optional[int] = None


class QuotaGate(Protocol):
    def check(self, user_id: str) -> QuotaDecision: ...


class ScanStore(Protocol):
    def save(
        self,
        result: ScanResult,
        user_id: Optional[str] = None,
        site_id: Optional[str] = None,
    ) -> str: ...

    def get(self, record_id: str) -> Optional[ScanResult]: ...


class UnlimitedQuota:
    """Lets every user scan."""

    def check(self, user_id: str) -> QuotaDecision:
        return QuotaDecision(allowed=True)


@dataclass(frozen=True)
class ScanRecord:
    id: str
    result: ScanResult
    user_id: Optional[str]
    site_id: Optional[str]


class InMemoryScanStore:
    """Process-local :class:`ScanStore`, mainly for development and tests."""

    def __init__(self) -> None:
        self._records: dict[str, ScanRecord] = {}
        self._lock = Lock()

    def save(
        self,
        result: ScanResult,
        user_id: Optional[str] = None,
        site_id: Optional[str] = None,
    ) -> str:
        record_id = uuid.uuid4().hex[:10]
        with self._lock:
            self._records[record_id] = ScanRecord(record_id, result, user_id, site_id)
        return record_id

    def get(self, record_id: str) -> Optional[ScanResult]:
        record = self._records.get(record_id)
        return record.result if record else None

    def __len__(self) -> int:
        return len(self._records)
