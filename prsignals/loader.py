import re
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import SignalConfigError
from .signals.branches import compile_branch_pattern
from .types.signal import Match, SignalSet, SubSignal

LIST_KEYS = (
    "comment_substrings",
    "comments",
    "pr_body_substrings",
    "branches",
    "branch_patterns",
    "creators",
)
KNOWN_KEYS = set(LIST_KEYS) | {"label", "match"}
LABEL_KEYS = {"match", "values"}

def _parse_match(value: Any, where: str) -> Match:
    if value is None:
        return Match.ONE
    try:
        return Match(str(value).strip().lower())
    except ValueError:
        raise SignalConfigError(f"{where}: unknown match mode {value!r}, expected 'one' or 'all'") from None

def _parse_strings(value: Any, where: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise SignalConfigError(f"{where}: expected a list of strings, got {type(value).__name__}")
    out = []
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise SignalConfigError(f"{where}[{i}]: expected a string, got {type(item).__name__}")
        out.append(item)
    return tuple(out)

def _parse_label(value: Any) -> SubSignal:
    if value is None:
        return SubSignal()
    if not isinstance(value, Mapping):
        raise SignalConfigError(f"label: expected a mapping, got {type(value).__name__}")
    unknown = sorted(str(k) for k in set(value) - LABEL_KEYS)
    if unknown:
        raise SignalConfigError(f"label: unknown keys {', '.join(unknown)}")
    return SubSignal(
        match=_parse_match(value.get("match"), "label.match"),
        values=_parse_strings(value.get("values"), "label.values"),
    )

def signal_set_from_dict(data: Optional[Mapping[str, Any]]) -> SignalSet:
    """Build a SignalSet from a decoded configuration mapping.

    Keys mirror the configuration file: ``label`` (``match``/``values``),
    ``comment_substrings``, ``comments``, ``pr_body_substrings``,
    ``branches``, ``branch_patterns``, ``creators`` and ``match``.
    Branch patterns are compiled here so a bad expression is reported at
    load time rather than silently never matching.
    """
    if data is None:
        return SignalSet()
    if not isinstance(data, Mapping):
        raise SignalConfigError(f"signals: expected a mapping, got {type(data).__name__}")

    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        raise SignalConfigError(f"signals: unknown keys {', '.join(unknown)}")

    fields: Dict[str, Tuple[str, ...]] = {k: _parse_strings(data.get(k), k) for k in LIST_KEYS}

    for i, pattern in enumerate(fields["branch_patterns"]):
        try:
            compile_branch_pattern(pattern)
        except re.error as e:
            raise SignalConfigError(f"branch_patterns[{i}]: invalid pattern {pattern!r}: {e}") from e

    return SignalSet(
        label=_parse_label(data.get("label")),
        match=_parse_match(data.get("match"), "match"),
        **fields,
    )
