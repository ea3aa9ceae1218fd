#!/usr/bin/env python3
"""
syllable.py - Structural model of one Vietnamese syllable
Mô hình cấu trúc của một âm tiết tiếng Việt

================================================================================
OVERVIEW / Tổng quan
================================================================================

A syllable is an immutable value built keystroke by keystroke:

Âm tiết là một giá trị bất biến, được dựng lần lượt theo từng phím:

    letters      (c)(h)(ư)(ơ)(n)(g)      base letter + optional diacritic
    tone         GRAVE                   one per syllable, placed at render
    raw          "chuwowngf"             every keystroke that built it
    last_action  APPLY_TONE(GRAVE)       decides whether a repeat toggles

Its structure is never stored. It is derived from the letters every time:

    ┌──────────┬───────────┬──────────┐
    │ initial  │  nucleus  │  final   │
    │  (âm     │  (vần     │  (âm     │
    │  đầu)    │  chính)   │  cuối)   │
    ├──────────┼───────────┼──────────┤
    │   ch     │    ươ     │   ng     │
    │   gi     │    a      │          │   "gia": gi is the initial
    │   g      │    i      │   n      │   "gin": a lone gi is g + i
    │   qu     │    y      │   nh     │
    └──────────┴───────────┴──────────┘

so a letter arriving later (a final consonant, a third vowel) moves the
boundaries without any bookkeeping.

================================================================================
VALIDATION / Kiểm tra chính tả
================================================================================

A syllable is considered Vietnamese when its initial, nucleus cluster and
final are all in the orthographic tables below (compared on base letters,
ignoring case and marks). A syllable with no nucleus yet is always accepted,
since it is still being typed.

================================================================================
"""

import collections
import dataclasses
import logging

from letters import Diacritic, Tone, admits, compose, is_vowel

logger = logging.getLogger(__name__)


INITIALS = frozenset([
    'b', 'c', 'd', 'g', 'h', 'k', 'l', 'm', 'n', 'p', 'q', 'r', 's', 't', 'v', 'x',
    'ch', 'gh', 'gi', 'kh', 'nh', 'ng', 'ph', 'th', 'tr', 'qu',
    'ngh',
])

FINALS = frozenset(['c', 'ch', 'm', 'n', 'nh', 'ng', 'p', 't'])

NUCLEI = frozenset([
    'a', 'e', 'i', 'o', 'u', 'y',
    'ai', 'ao', 'au', 'ay', 'eo', 'eu', 'ia', 'ie', 'io', 'iu',
    'oa', 'oe', 'oi', 'oo', 'ua', 'ue', 'ui', 'uo', 'uu', 'uy', 'ye',
    'ieu', 'oai', 'oao', 'oay', 'oeo', 'uay', 'uoi', 'uou', 'uya', 'uye', 'uyu', 'yeu',
])


# char keeps the case it was typed with; diacritic is a Diacritic or None.
Letter = collections.namedtuple('Letter', ['char', 'diacritic'], defaults=(None,))


def base_string(letters):
    return ''.join(letter.char.lower() for letter in letters)


def split(letters):
    """
    Split letters into (initial_len, nucleus_len, final_len).

    Rules:
    - "gi"/"qu" followed by a vowel is the initial; a bare "gi" is g + i
    - otherwise the initial is the leading run of non-vowels
    - the nucleus is the run of vowels after it, the rest is the final
    """
    text = base_string(letters)
    if text.startswith('gi'):
        initial = 2 if len(text) > 2 and is_vowel(text[2]) else 1
    elif text.startswith('qu'):
        initial = 2
    else:
        initial = 0
        while initial < len(text) and not is_vowel(text[initial]):
            initial += 1
    end = initial
    while end < len(text) and is_vowel(text[end]):
        end += 1
    return initial, end - initial, len(text) - end


@dataclasses.dataclass(frozen=True)
class Syllable:
    letters: tuple = ()
    tone: Tone = Tone.LEVEL
    raw: str = ''
    last_action: object = None

    # ─── Structure ────────────────────────────────────────────────────

    def _bounds(self):
        initial, nucleus, _ = split(self.letters)
        return initial, initial + nucleus

    @property
    def initial(self):
        start, _ = self._bounds()
        return self.letters[:start]

    @property
    def nucleus(self):
        start, end = self._bounds()
        return self.letters[start:end]

    @property
    def final(self):
        _, end = self._bounds()
        return self.letters[end:]

    def nucleus_range(self):
        """Return the range of letter indices that form the nucleus."""
        start, end = self._bounds()
        return range(start, end)

    def base_text(self):
        return base_string(self.letters)

    def nucleus_contains(self, vowel):
        return vowel.lower() in base_string(self.nucleus)

    def is_empty(self):
        return not self.letters

    def text(self):
        """Letters with their diacritics but without the tone."""
        return ''.join(compose(letter.char, letter.diacritic) for letter in self.letters)

    # ─── Modification targets ─────────────────────────────────────────

    def modification_targets(self, diacritic):
        """
        Return the letter indices that should receive the diacritic.

        Empty when the syllable has no eligible letter. The circumflex only
        targets the nucleus when it holds exactly one of a/e/o; the horn
        follows the ư/ơ pairing rules of Vietnamese spelling:

            oa            → none (breve instead: oă)
            uo, no final  → o when there is an initial (thuở), else both
            uo uoi uou    → both (ươ, ươi, ươu)
            otherwise     → first u, else first o
        """
        if diacritic is Diacritic.STROKE:
            if self.letters and self.letters[0].char.lower() == 'd':
                return [0]
            return []

        positions = self.nucleus_range()
        vowels = base_string(self.nucleus)

        if diacritic is Diacritic.BREVE:
            return [positions[i] for i, c in enumerate(vowels) if c == 'a'][:1]

        if diacritic is Diacritic.CIRCUMFLEX:
            found = [positions[i] for i, c in enumerate(vowels) if c in 'aeo']
            return found if len(found) == 1 else []

        if diacritic is Diacritic.HORN:
            if vowels == 'oa':
                return []
            if vowels == 'uo' and self.initial and not self.final:
                return [positions[1]]
            if vowels in ('uo', 'uoi', 'uou'):
                return [positions[0], positions[1]]
            for target in ('u', 'o'):
                if target in vowels:
                    return [positions[vowels.index(target)]]
            return []

        return []

    def has_diacritic(self, diacritic):
        return any(letter.diacritic is diacritic for letter in self.letters)

    # ─── Derived values ───────────────────────────────────────────────

    def with_letters(self, letters, **changes):
        return dataclasses.replace(self, letters=tuple(letters), **changes)

    def with_diacritic(self, positions, diacritic):
        """Return a copy whose letters at positions carry the diacritic."""
        letters = list(self.letters)
        for i in positions:
            if admits(letters[i].char, diacritic):
                letters[i] = letters[i]._replace(diacritic=diacritic)
        return self.with_letters(letters)

    def without_diacritic(self, diacritic):
        letters = [
            letter._replace(diacritic=None) if letter.diacritic is diacritic else letter
            for letter in self.letters
        ]
        return self.with_letters(letters)

    def diacritic_count(self):
        return sum(1 for letter in self.letters if letter.diacritic is not None)

    # ─── Validation ───────────────────────────────────────────────────

    def is_valid(self):
        """Return True if the syllable follows Vietnamese spelling.

        A syllable without a nucleus is still being typed and is accepted.
        """
        initial, nucleus, final = (base_string(part) for part in (self.initial, self.nucleus, self.final))
        if not nucleus:
            return True
        if initial and initial not in INITIALS:
            return False
        if final and final not in FINALS:
            return False
        return nucleus in NUCLEI


EMPTY = Syllable()
