"""Hash-chained journal of reconstruction requests.

Each record stores the SHA-256 of its predecessor, so editing or dropping
a past record breaks ``verify_chain``.  Point sets are recorded by
fingerprint only; secrets are recorded as formatted results.
"""

from __future__ import annotations

import hashlib
import json
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List

from polyrecon.interp.points import Point

GENESIS = "0" * 64


@dataclass(frozen=True)
class AuditEntry:
    seq: int
    timestamp: float
    event: str
    data: Dict[str, Any]
    prev_hash: str
    entry_hash: str


def _digest(seq: int, timestamp: float, event: str, data: Dict[str, Any], prev_hash: str) -> str:
    payload = json.dumps(
        {"seq": seq, "timestamp": timestamp, "event": event, "data": data, "prev_hash": prev_hash},
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(payload.encode()).hexdigest()


def fingerprint(points: Iterable[Point]) -> str:
    """Order-independent SHA-256 of a point set."""
    canonical = ";".join(f"{p.x}:{p.y}" for p in sorted(points, key=lambda p: p.x))
    return hashlib.sha256(canonical.encode()).hexdigest()


class AuditLog:
    """Append-only journal."""

    def __init__(self) -> None:
        self._entries: List[AuditEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def head(self) -> str:
        return self._entries[-1].entry_hash if self._entries else GENESIS

    def append(self, event: str, data: Dict[str, Any]) -> AuditEntry:
        seq = len(self._entries)
        ts = time.time()
        prev = self.head
        entry = AuditEntry(
            seq=seq,
            timestamp=ts,
            event=event,
            data=data,
            prev_hash=prev,
            entry_hash=_digest(seq, ts, event, data, prev),
        )
        self._entries.append(entry)
        return entry

    def entries(self) -> List[Dict[str, Any]]:
        return [asdict(e) for e in self._entries]

    def verify_chain(self) -> bool:
        prev = GENESIS
        for seq, e in enumerate(self._entries):
            if e.seq != seq or e.prev_hash != prev:
                return False
            if e.entry_hash != _digest(e.seq, e.timestamp, e.event, e.data, e.prev_hash):
                return False
            prev = e.entry_hash
        return True
