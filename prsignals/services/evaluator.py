from typing import List, Optional

from ..signals.body import BodySubstringSignal
from ..signals.branches import TargetBranchSignal
from ..signals.comments import CommentSignal, CommentSubstringSignal
from ..signals.creators import CreatorSignal
from ..signals.labels import LabelSignal
from ..types.signal import Match, MatchResult, Outcome, PullContext, SignalPredicate, SignalSet

def build_predicates(signals: SignalSet) -> List[SignalPredicate]:
    """Return the predicates for ``signals`` in evaluation order.

    The order doubles as priority: under ``Match.ONE`` the first predicate
    that matches supplies the reason.
    """
    return [
        LabelSignal(signals.label.values, signals.label.match),
        CommentSignal(signals.comments),
        CommentSubstringSignal(signals.comment_substrings),
        BodySubstringSignal(signals.pr_body_substrings),
        TargetBranchSignal(signals.branches, signals.branch_patterns),
        CreatorSignal(signals.creators),
    ]

async def _matches_one(predicates: List[SignalPredicate], pull: PullContext, tag: str) -> MatchResult:
    for predicate in predicates:
        result = await predicate.evaluate(pull, tag)
        if result.outcome is Outcome.MATCHED:
            return MatchResult(True, result.reason)
    return MatchResult(False, f"pull request does not match the {tag}")

async def _matches_all(predicates: List[SignalPredicate], pull: PullContext, tag: str) -> MatchResult:
    for predicate in predicates:
        result = await predicate.evaluate(pull, tag)
        if result.outcome is Outcome.NOT_MATCHED:
            return MatchResult(False, result.reason)
    return MatchResult(True, f"pull request matches the {tag}")

async def matches(
    signals: SignalSet,
    pull: PullContext,
    tag: str,
    predicates: Optional[List[SignalPredicate]] = None,
) -> MatchResult:
    """Evaluate ``signals`` against ``pull``.

    ``tag`` names the behavior the signals drive (e.g. "trigger", "ignore")
    and appears in the returned reason. Retrieval failures raise
    ``PullContextError`` and are never reported as a non-match.

    Under ``Match.ALL`` a set with no configured signals matches vacuously;
    check ``signals.enabled()`` first or use ``matches_if_enabled``.
    """
    if predicates is None:
        predicates = build_predicates(signals)
    if signals.match == Match.ALL:
        return await _matches_all(predicates, pull, tag)
    return await _matches_one(predicates, pull, tag)

async def matches_if_enabled(signals: SignalSet, pull: PullContext, tag: str) -> Optional[MatchResult]:
    if not signals.enabled():
        return None
    return await matches(signals, pull, tag)
