# component_mapper/modules/results.py
"""
Outcome records returned by the DependencyGraph operations.

The graph never prints anything itself: every operation hands back one of
these records and the caller (cli / report) decides how to show it.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


class Status(enum.Enum):
    DECLARED = "declared"
    INVALID = "invalid"
    ALREADY_DECLARED = "already_declared"
    CIRCULAR_DEPENDENCY = "circular_dependency"
    INSTALLED = "installed"
    ALREADY_INSTALLED = "already_installed"
    NOT_INSTALLED = "not_installed"
    STILL_NEEDED = "still_needed"
    REMOVED = "removed"

    @property
    def failed(self) -> bool:
        return self in FAILURES


FAILURES = frozenset({
    Status.INVALID,
    Status.ALREADY_DECLARED,
    Status.CIRCULAR_DEPENDENCY,
    Status.NOT_INSTALLED,
    Status.STILL_NEEDED,
})


@dataclass(frozen=True)
class DeclareResult:
    component: Optional[str]
    dependencies: Optional[Tuple[str, ...]]
    status: Status


@dataclass
class ResolveResult:
    component: str
    order: List[str] = field(default_factory=list)
    cycles: List[List[str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.cycles


@dataclass(frozen=True)
class InstallStep:
    component: str
    status: Status
    count: int


@dataclass
class InstallResult:
    component: Optional[str]
    status: Status
    steps: List[InstallStep] = field(default_factory=list)
    cycles: List[List[str]] = field(default_factory=list)

    @property
    def installed(self) -> List[str]:
        """Components newly added to the install table by this call."""
        return [s.component for s in self.steps if s.status is Status.INSTALLED]


@dataclass
class RemoveResult:
    component: Optional[str]
    status: Status
    # dependency -> count after it was released by this removal
    released: Dict[str, int] = field(default_factory=dict)
