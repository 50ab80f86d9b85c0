"""
Fuzzy matching for search-while-selecting.

The scorer is pluggable: anything with the signature
``(query, text) -> float | None`` works. ``None`` (or a score <= 0)
means "no match". The default scorer is a case-insensitive subsequence
match that rewards contiguous runs and word starts and penalizes gaps,
so "an" ranks "answer" well above "a long name".
"""

from collections.abc import Sequence

from openskills.prompts.models import Choice, Item, Scorer, is_separator

WORD_BOUNDARIES = " -_/.:"

# Scoring weights
MATCH_SCORE = 1.0
CONTIGUOUS_BONUS = 2.0
WORD_START_BONUS = 1.5
PREFIX_BONUS = 2.0
GAP_PENALTY = 0.1
LEADING_PENALTY = 0.05
MAX_LEADING_PENALTY = 1.0


def _match_from(query: str, text: str, start: int) -> list[int] | None:
    """Greedily match query as a subsequence of text beginning at start."""
    positions = [start]
    cursor = start + 1
    for char in query[1:]:
        found = text.find(char, cursor)
        if found == -1:
            return None
        positions.append(found)
        cursor = found + 1
    return positions


def _score_positions(positions: list[int], text: str) -> float:
    score = 0.0
    previous: int | None = None

    for position in positions:
        score += MATCH_SCORE
        if position == 0 or text[position - 1] in WORD_BOUNDARIES:
            score += WORD_START_BONUS
        if previous is not None:
            if position == previous + 1:
                score += CONTIGUOUS_BONUS
            else:
                score -= GAP_PENALTY * (position - previous - 1)
        previous = position

    if positions[0] == 0:
        score += PREFIX_BONUS
    else:
        score -= min(LEADING_PENALTY * positions[0], MAX_LEADING_PENALTY)

    return score


def fuzzy_score(query: str, text: str) -> float | None:
    """Score how well ``query`` matches ``text``.

    Args:
        query: The search query typed by the user.
        text: Candidate text (choice name plus description).

    Returns:
        A positive score for a match (higher is better), or None when the
        query is not a subsequence of the text or the match is too sparse.
    """
    needle = query.lower()
    haystack = text.lower()

    if not needle or len(needle) > len(haystack):
        return None

    best: float | None = None
    start = haystack.find(needle[0])

    while start != -1:
        positions = _match_from(needle, haystack, start)
        if positions is None:
            # A later start can only see less of the text.
            break
        score = _score_positions(positions, haystack)
        if best is None or score > best:
            best = score
        start = haystack.find(needle[0], start + 1)

    if best is None or best <= 0:
        return None
    return best


def search_text(choice: Choice) -> str:
    """Text a choice is matched against: its name plus description."""
    return f"{choice.name or ''} {choice.description or ''}".strip()


def filter_indexes(
    items: Sequence[Item],
    query: str,
    scorer: Scorer | None = None,
) -> tuple[int, ...]:
    """Compute the filtered view for a query.

    An empty query keeps every item, separators included, in original
    order. Otherwise separators are dropped and matching choices are
    ordered best match first; ties keep their original order.

    Args:
        items: The full item list.
        query: Current search query.
        scorer: Scoring function, defaults to ``fuzzy_score``.

    Returns:
        Indexes into ``items`` forming the visible view.
    """
    if not query:
        return tuple(range(len(items)))

    score_fn = scorer or fuzzy_score
    scored: list[tuple[float, int]] = []

    for index, item in enumerate(items):
        if is_separator(item):
            continue
        score = score_fn(query, search_text(item))
        if score is not None and score > 0:
            scored.append((score, index))

    scored.sort(key=lambda pair: (-pair[0], pair[1]))
    return tuple(index for _, index in scored)
