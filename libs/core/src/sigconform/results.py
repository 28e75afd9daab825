"""Result containers returned by the scenario runner and the driver.

`to_dict()` output is what the CLI writes with --export.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from .errors import FailureKind


@dataclass
class ScenarioResult:
    scenario: str
    iterations: int  # iterations requested
    completed: int  # iterations that passed
    failure: Optional[FailureKind] = None
    failed_iteration: Optional[int] = None
    detail: str = ""

    @property
    def passed(self) -> bool:
        return self.failure is None

    @property
    def code(self) -> int:
        return 0 if self.passed else 1

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["failure"] = self.failure.value if self.failure else None
        out["passed"] = self.passed
        return out

@dataclass
class SuiteReport:
    scheme: str
    algname: str
    variant: str  # 'self-contained' | 'scratch-buffer'
    results: List[ScenarioResult] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return sum(r.code for r in self.results)

    @property
    def passed(self) -> bool:
        return self.exit_code == 0

    def failures(self) -> List[ScenarioResult]:
        return [r for r in self.results if not r.passed]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme,
            "algname": self.algname,
            "variant": self.variant,
            "exit_code": self.exit_code,
            "scenarios": [r.to_dict() for r in self.results],
        }
