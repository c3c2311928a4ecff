from typing import Sequence

from ..config import debug
from ..types.signal import Outcome, PullContext, SignalResult

class BodySubstringSignal:
    name = "pr_body_substring"

    def __init__(self, values: Sequence[str]):
        self.values = tuple(values)

    async def evaluate(self, pull: PullContext, tag: str) -> SignalResult:
        if not self.values:
            debug("no pr body substrings configured to match against")
            return SignalResult(Outcome.NOT_CONFIGURED)

        body = pull.body()
        for substring in self.values:
            if substring in body:
                return SignalResult(
                    Outcome.MATCHED,
                    f"pull request body matches a {tag} substring: {substring!r}",
                )
        return SignalResult(Outcome.NOT_MATCHED, f"pull request body contains no {tag} substring")
