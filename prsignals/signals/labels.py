from typing import List, Sequence

from ..config import debug
from ..errors import PullContextError
from ..types.signal import Match, Outcome, PullContext, SignalResult

async def list_labels(pull: PullContext) -> List[str]:
    try:
        return list(await pull.labels())
    except Exception as e:
        raise PullContextError("unable to list pull request labels") from e

def _has_label(required: str, labels: Sequence[str]) -> bool:
    wanted = required.lower()
    return any(wanted == label.lower() for label in labels)

class LabelSignal:
    name = "label"

    def __init__(self, values: Sequence[str], match: Match = Match.ONE):
        self.values = tuple(values)
        self.match = match

    async def evaluate(self, pull: PullContext, tag: str) -> SignalResult:
        labels = await list_labels(pull)

        if not self.values:
            debug("no labels configured to match against")
            return SignalResult(Outcome.NOT_CONFIGURED)

        if self.match == Match.ALL:
            missing = [v for v in self.values if not _has_label(v, labels)]
            if missing:
                return SignalResult(
                    Outcome.NOT_MATCHED,
                    f"pull request is missing {tag} labels: {', '.join(repr(m) for m in missing)}",
                )
            return SignalResult(
                Outcome.MATCHED,
                f"pull request has all {tag} labels: {', '.join(repr(v) for v in self.values)}",
            )

        for value in self.values:
            if _has_label(value, labels):
                return SignalResult(Outcome.MATCHED, f"pull request has a {tag} label: {value!r}")
        return SignalResult(Outcome.NOT_MATCHED, f"pull request does not have a {tag} label")
