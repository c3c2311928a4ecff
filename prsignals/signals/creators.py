from typing import Sequence

from ..config import debug
from ..types.signal import Outcome, PullContext, SignalResult

class CreatorSignal:
    name = "creator"

    def __init__(self, creators: Sequence[str]):
        self.creators = tuple(creators)

    async def evaluate(self, pull: PullContext, tag: str) -> SignalResult:
        if not self.creators:
            debug("no pr creators configured to match against")
            return SignalResult(Outcome.NOT_CONFIGURED)

        creator = pull.creator()
        if creator in self.creators:
            return SignalResult(Outcome.MATCHED, f"pull request matches a {tag} creator: {creator!r}")
        return SignalResult(
            Outcome.NOT_MATCHED,
            f"pull request creator {creator!r} is not a {tag} creator",
        )
