from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Sequence, Tuple

class Match(str, Enum):
    ONE = "one"
    ALL = "all"

class Outcome(Enum):
    MATCHED = "matched"
    NOT_MATCHED = "not_matched"
    NOT_CONFIGURED = "not_configured"

@dataclass(frozen=True)
class SignalResult:
    outcome: Outcome
    reason: str = ""

    @property
    def matched(self) -> bool:
        return self.outcome is Outcome.MATCHED

@dataclass(frozen=True)
class MatchResult:
    matched: bool
    reason: str

@dataclass(frozen=True)
class SubSignal:
    match: Match = Match.ONE
    values: Tuple[str, ...] = ()

@dataclass(frozen=True)
class SignalSet:
    label: SubSignal = field(default_factory=SubSignal)
    comment_substrings: Tuple[str, ...] = ()
    comments: Tuple[str, ...] = ()
    pr_body_substrings: Tuple[str, ...] = ()
    branches: Tuple[str, ...] = ()
    branch_patterns: Tuple[str, ...] = ()
    creators: Tuple[str, ...] = ()
    match: Match = Match.ONE

    def enabled(self) -> bool:
        """True when at least one signal group carries a configured value."""
        groups = (
            self.label.values,
            self.comment_substrings,
            self.comments,
            self.pr_body_substrings,
            self.branches,
            self.branch_patterns,
            self.creators,
        )
        return any(len(g) > 0 for g in groups)

class PullContext(Protocol):
    """Read-only snapshot of a pull request.

    ``comments`` and ``labels`` may hit the network and are allowed to raise;
    the remaining accessors read data already held by the snapshot.
    """

    def body(self) -> str:
        ...

    async def comments(self) -> Sequence[str]:
        ...

    async def labels(self) -> Sequence[str]:
        ...

    def branches(self) -> Tuple[str, str]:
        """Return ``(base, head)``; the base is the merge target."""
        ...

    def creator(self) -> str:
        ...

class SignalPredicate(Protocol):
    name: str

    async def evaluate(self, pull: PullContext, tag: str) -> SignalResult:
        ...
