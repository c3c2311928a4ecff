import re
from typing import Optional, Pattern, Sequence

from ..config import debug
from ..types.signal import Outcome, PullContext, SignalResult

def compile_branch_pattern(pattern: str) -> Pattern[str]:
    # callers use fullmatch, which anchors the whole expression
    return re.compile(pattern)

def _try_compile(pattern: str) -> Optional[Pattern[str]]:
    try:
        return compile_branch_pattern(pattern)
    except re.error as e:
        debug(f"ignoring invalid branch pattern {pattern!r}: {e}")
        return None

class TargetBranchSignal:
    name = "target_branch"

    def __init__(self, branches: Sequence[str], patterns: Sequence[str]):
        self.branches = tuple(branches)
        self.patterns = tuple(patterns)

    async def evaluate(self, pull: PullContext, tag: str) -> SignalResult:
        if not self.branches and not self.patterns:
            debug("no branches or branch patterns configured to match against")
            return SignalResult(Outcome.NOT_CONFIGURED)

        target, _head = pull.branches()
        for branch in self.branches:
            if target == branch:
                return SignalResult(
                    Outcome.MATCHED,
                    f"pull request target is a {tag} branch: {branch!r}",
                )
        for pattern in self.patterns:
            compiled = _try_compile(pattern)
            if compiled is not None and compiled.fullmatch(target):
                return SignalResult(
                    Outcome.MATCHED,
                    f"pull request target branch ({target!r}) matches pattern: {pattern!r}",
                )
        return SignalResult(
            Outcome.NOT_MATCHED,
            f"pull request target branch ({target!r}) is not a {tag} branch",
        )
