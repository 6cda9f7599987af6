"""components.dev_log — Structured session event log.

A ring buffer owned by the ``GameSession`` that records every
committed transition: ticks, player actions, narrative lines, lock
changes and the end of the game.  The street scene shows the tail in
its debug overlay (TAB); the headless runner prints a summary.

Usage:
    log = session.log
    log.record(42, "action", "pitch → rejected", details={"stage": "seed"})

Each entry is a dict:
    {"tick": int, "cat": str, "msg": str, "details": dict | None}
"""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class DevLog:
    """Ring-buffer of session events for the debug overlay."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = 500

    def record(self, tick: int, cat: str, msg: str, *,
               details: dict | None = None) -> None:
        self.entries.append({
            "tick": tick,
            "cat": cat,
            "msg": msg,
            "details": details,
        })
        if len(self.entries) > self.max_entries:
            self.entries = self.entries[-self.max_entries:]

    def clear(self):
        self.entries.clear()

    def recent(self, n: int = 50) -> list[dict]:
        """Return the *n* most recent entries (newest last)."""
        return self.entries[-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        """Return last *n* entries in a category."""
        return [e for e in self.entries if e["cat"] == cat][-n:]

    def count(self, cat: str) -> int:
        return sum(1 for e in self.entries if e["cat"] == cat)

    def since(self, tick: int) -> list[dict]:
        """Entries recorded at or after *tick* (the last N seconds of play)."""
        return [e for e in self.entries if e["tick"] >= tick]

    def counts(self) -> dict[str, int]:
        """Entries per category, in first-seen order."""
        out: dict[str, int] = {}
        for e in self.entries:
            out[e["cat"]] = out.get(e["cat"], 0) + 1
        return out
