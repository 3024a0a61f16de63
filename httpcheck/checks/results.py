from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CheckSummary:
    attempted: int = 0
    passed: int = 0
    failed: int = 0

    def record(self, ok: bool) -> None:
        self.attempted += 1
        if ok:
            self.passed += 1
        else:
            self.failed += 1


@dataclass(frozen=True)
class Verdict:
    ok: bool
    detail: str = ""
