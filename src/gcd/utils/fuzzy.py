"""Fuzzy subsequence matching.

Scores how well a short pattern matches a candidate name when the pattern's
characters appear in order, not necessarily adjacent. The best alignment is
found with a dynamic program over (pattern position, name position):

- every matched character is worth ``SCORE_MATCH``
- a gap between two matched characters costs ``SCORE_GAP_START`` plus
  ``SCORE_GAP_EXTENSION`` for each additional skipped character
- a character at a word boundary (start of the name, after a separator)
  earns ``BONUS_BOUNDARY``; camelCase humps and the first digit of a number
  earn ``BONUS_CAMEL123``
- a consecutive run keeps the bonus of the character that started it, and
  never earns less than ``BONUS_CONSECUTIVE``
- the bonus of the first pattern character is multiplied by
  ``BONUS_FIRST_CHAR_MULTIPLIER``
- a character whose case matches the pattern exactly earns ``BONUS_CASE_MATCH``

Any subsequence match scores at least ``MIN_MATCH_SCORE``.

Matching uses smart case: case-insensitive unless the pattern contains an
uppercase letter.
"""

from enum import Enum

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1

BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2
BONUS_CASE_MATCH = 1

# Floor for any subsequence match, however long its gaps
MIN_MATCH_SCORE = 1


class CharClass(int, Enum):
    """Character classes used to detect word boundaries."""

    NON_WORD = 0
    LOWER = 1
    UPPER = 2
    NUMBER = 3


def char_class(ch: str) -> CharClass:
    if ch.islower():
        return CharClass.LOWER
    if ch.isupper():
        return CharClass.UPPER
    if ch.isdigit():
        return CharClass.NUMBER
    if ch.isalpha():
        # Letters without case (CJK and friends) behave like lowercase
        return CharClass.LOWER
    return CharClass.NON_WORD


def position_bonus(prev: CharClass, cur: CharClass) -> int:
    """Bonus for a character of class ``cur`` following one of class ``prev``."""
    if prev == CharClass.NON_WORD and cur != CharClass.NON_WORD:
        return BONUS_BOUNDARY
    if (prev == CharClass.LOWER and cur == CharClass.UPPER) or (
        prev != CharClass.NUMBER and cur == CharClass.NUMBER
    ):
        return BONUS_CAMEL123
    if cur == CharClass.NON_WORD:
        return BONUS_NON_WORD
    return 0


class FuzzyMatcher:
    """Scores candidate names against a pattern."""

    def __init__(self, smart_case: bool = True) -> None:
        self._smart_case = smart_case

    def is_case_sensitive(self, pattern: str) -> bool:
        return self._smart_case and any(ch.isupper() for ch in pattern)

    def score(self, choice: str, pattern: str) -> int | None:
        """Return the best alignment score, or None if ``pattern`` is not a
        subsequence of ``choice``.

        An empty pattern matches everything with a score of 0.
        """
        if not pattern:
            return 0

        case_sensitive = self.is_case_sensitive(pattern)
        if case_sensitive:
            folded_choice, folded_pattern = choice, pattern
        else:
            folded_choice, folded_pattern = choice.lower(), pattern.lower()

        if len(folded_choice) != len(choice) or len(folded_pattern) != len(pattern):
            # Case folding changed the length; fall back to exact characters
            folded_choice, folded_pattern = choice, pattern

        if not _is_subsequence(folded_pattern, folded_choice):
            return None

        n = len(choice)
        m = len(pattern)

        bonuses = []
        prev = CharClass.NON_WORD
        for ch in choice:
            cur = char_class(ch)
            bonuses.append(position_bonus(prev, cur))
            prev = cur

        # scores[j]: best score with the current pattern char matched at j
        # chains[j]: bonus carried by the consecutive run ending at j
        scores: list[int | None] = [None] * n
        chains = [0] * n

        for j in range(n):
            if folded_choice[j] == folded_pattern[0]:
                case_bonus = BONUS_CASE_MATCH if choice[j] == pattern[0] else 0
                scores[j] = SCORE_MATCH + bonuses[j] * BONUS_FIRST_CHAR_MULTIPLIER + case_bonus
                chains[j] = bonuses[j]

        for i in range(1, m):
            row: list[int | None] = [None] * n
            row_chains = [0] * n
            # Best previous-row score usable after a gap, already charged
            # with the gap cost up to column j - 1
            best_gapped: int | None = None

            for j in range(i, n):
                if j >= 2 and scores[j - 2] is not None:
                    opened = scores[j - 2] + SCORE_GAP_START
                    if best_gapped is None or opened > best_gapped:
                        best_gapped = opened

                if folded_choice[j] == folded_pattern[i]:
                    case_bonus = BONUS_CASE_MATCH if choice[j] == pattern[i] else 0
                    best: int | None = None
                    chain = 0

                    if scores[j - 1] is not None:
                        bonus = max(chains[j - 1], bonuses[j], BONUS_CONSECUTIVE)
                        best = scores[j - 1] + SCORE_MATCH + bonus + case_bonus
                        chain = bonus

                    if best_gapped is not None:
                        gapped = best_gapped + SCORE_MATCH + bonuses[j] + case_bonus
                        if best is None or gapped > best:
                            best = gapped
                            chain = bonuses[j]

                    row[j] = best
                    row_chains[j] = chain

                if best_gapped is not None:
                    best_gapped += SCORE_GAP_EXTENSION

            scores, chains = row, row_chains

        best = max(s for s in scores if s is not None)
        return max(best, MIN_MATCH_SCORE)


def _is_subsequence(pattern: str, choice: str) -> bool:
    it = iter(choice)
    return all(ch in it for ch in pattern)
