#!/usr/bin/env python3
"""
placement.py - Tone mark placement and syllable rendering
Đặt dấu thanh và hiển thị âm tiết

================================================================================
OVERVIEW / Tổng quan
================================================================================

The tone belongs to the whole syllable but is written on one vowel of the
nucleus. Which vowel depends on the nucleus and on the accent style:

Dấu thanh thuộc về cả âm tiết nhưng được viết trên một nguyên âm:

    1. Only one vowel                   → that vowel        (má, tiếng→ê)
    2. A vowel with a diacritic         → by priority       ơ ê â ô ư ă
                                                            (người, tiến, cửa)
    3. Plain clusters, OLD style        → second vowel if three vowels or
                                          a final follows, else first
                                                            (hóa, thủy, hoàn)
    4. Plain clusters, NEW style        → second vowel for oa oe oo uy uo ie,
                                          first for other two-vowel nuclei
                                          without final, else second
                                                            (hoá, thuỷ, mùa)

The position is recomputed at every render, so a vowel or final arriving
after the tone key moves the mark to where it belongs:

    "hoas"  → hoá        "hoasn"  → hoán

================================================================================
"""

import enum
import logging

from letters import Diacritic, Tone, compose
from syllable import base_string

logger = logging.getLogger(__name__)


class AccentStyle(enum.Enum):
    OLD = 'old'
    NEW = 'new'


# Marked vowels win over plain ones, in this order.
MARKED_VOWEL_PRIORITY = (
    ('o', Diacritic.HORN),
    ('e', Diacritic.CIRCUMFLEX),
    ('a', Diacritic.CIRCUMFLEX),
    ('o', Diacritic.CIRCUMFLEX),
    ('u', Diacritic.HORN),
    ('a', Diacritic.BREVE),
)

# NEW style puts the mark on the second vowel of these pairs.
NEW_STYLE_SECOND_VOWEL_PAIRS = ('oa', 'oe', 'oo', 'uy', 'uo', 'ie')


def get_accent_style(style):
    if isinstance(style, AccentStyle):
        return style
    try:
        return AccentStyle(str(style).lower())
    except ValueError:
        raise ValueError(f'Unknown accent style: {style!r}') from None


def tone_position(syllable, style=AccentStyle.NEW):
    """
    Return the index into syllable.letters that carries the tone, or None
    when the syllable has no nucleus.
    """
    positions = syllable.nucleus_range()
    if not positions:
        return None
    if len(positions) == 1:
        return positions[0]

    nucleus = syllable.nucleus
    for base, diacritic in MARKED_VOWEL_PRIORITY:
        for i, letter in enumerate(nucleus):
            if letter.char.lower() == base and letter.diacritic is diacritic:
                return positions[i]

    vowels = base_string(nucleus)
    has_final = bool(syllable.final)
    if style is AccentStyle.OLD:
        if len(vowels) == 3 or (len(vowels) == 2 and has_final):
            return positions[1]
        return positions[0]

    for pair in NEW_STYLE_SECOND_VOWEL_PAIRS:
        index = vowels.find(pair)
        if index >= 0:
            return positions[index + 1]
    if len(vowels) == 2 and not has_final:
        return positions[0]
    return positions[1]


def render(syllable, style=AccentStyle.NEW):
    """
    Render a syllable as text.

    Letters keep their case and diacritics; the tone is composed onto the
    letter chosen by tone_position(). A syllable without nucleus renders its
    letters as they are.
    """
    target = None
    if syllable.tone is not Tone.LEVEL:
        target = tone_position(syllable, style)
    pieces = []
    for i, letter in enumerate(syllable.letters):
        tone = syllable.tone if i == target else Tone.LEVEL
        pieces.append(compose(letter.char, letter.diacritic, tone))
    return ''.join(pieces)
