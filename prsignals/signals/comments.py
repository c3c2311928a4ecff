from typing import List, Sequence

from ..config import debug
from ..errors import PullContextError
from ..types.signal import Outcome, PullContext, SignalResult

async def list_comments(pull: PullContext) -> List[str]:
    try:
        return list(await pull.comments())
    except Exception as e:
        raise PullContextError("unable to list pull request comments") from e

class CommentSignal:
    """Matches when the body or a comment is exactly one of the configured strings."""

    name = "comment"

    def __init__(self, values: Sequence[str]):
        self.values = tuple(values)

    async def evaluate(self, pull: PullContext, tag: str) -> SignalResult:
        body = pull.body()
        comments = await list_comments(pull)

        if not self.values:
            debug("no comments configured to match against")
            return SignalResult(Outcome.NOT_CONFIGURED)

        for signal_comment in self.values:
            if body == signal_comment:
                return SignalResult(
                    Outcome.MATCHED,
                    f"pull request body is a {tag} comment: {signal_comment!r}",
                )
            for comment in comments:
                if comment == signal_comment:
                    return SignalResult(
                        Outcome.MATCHED,
                        f"pull request has a {tag} comment: {signal_comment!r}",
                    )
        return SignalResult(Outcome.NOT_MATCHED, f"pull request has no {tag} comment")

class CommentSubstringSignal:
    """Matches when the body or any comment contains a configured substring."""

    name = "comment_substring"

    def __init__(self, values: Sequence[str]):
        self.values = tuple(values)

    async def evaluate(self, pull: PullContext, tag: str) -> SignalResult:
        body = pull.body()
        comments = await list_comments(pull)

        if not self.values:
            debug("no comment substrings configured to match against")
            return SignalResult(Outcome.NOT_CONFIGURED)

        for substring in self.values:
            if substring in body:
                return SignalResult(
                    Outcome.MATCHED,
                    f"pull request body matches a {tag} substring: {substring!r}",
                )
            for comment in comments:
                if substring in comment:
                    return SignalResult(
                        Outcome.MATCHED,
                        f"pull request comment matches a {tag} substring: {substring!r}",
                    )
        return SignalResult(
            Outcome.NOT_MATCHED,
            f"pull request body and comments contain no {tag} substring",
        )
