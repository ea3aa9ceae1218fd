#!/usr/bin/env python3
"""
letters.py - Vietnamese letter tables: tones, diacritics and Unicode composition
Bảng chữ cái tiếng Việt: dấu thanh, dấu phụ và tổ hợp Unicode

================================================================================
OVERVIEW / Tổng quan
================================================================================

Every Vietnamese letter the engine produces is described by three parts:

Mỗi chữ cái tiếng Việt được mô tả bằng ba phần:

    base letter    'o'          (chữ gốc, case preserved)
    diacritic      HORN         (dấu phụ: ˘ ˆ ˒ or the đ stroke)
    tone           DOT          (dấu thanh: sắc huyền hỏi ngã nặng)

                   'o' + HORN + DOT  →  'ợ'

The diacritic belongs to the letter; the tone belongs to the syllable and is
attached to one nucleus letter only when the syllable is rendered (see
placement.py).

Composition goes through combining marks and NFC normalization, so the result
is the precomposed code point whenever Unicode has one:

    'e' + U+0302 (circumflex) + U+0323 (dot below)  →NFC→  'ệ'

The stroke is not a combining mark in Vietnamese orthography: đ/Đ are letters
of their own and are mapped directly.

================================================================================
"""

import enum
import logging
import unicodedata

logger = logging.getLogger(__name__)


VOWELS = frozenset('aeiouy')


class Tone(enum.Enum):
    """Syllable tone. LEVEL (thanh ngang) is the unmarked tone."""
    LEVEL = 'level'
    ACUTE = 'acute'     # sắc
    GRAVE = 'grave'     # huyền
    HOOK = 'hook'       # hỏi
    TILDE = 'tilde'     # ngã
    DOT = 'dot'         # nặng


class Diacritic(enum.Enum):
    """Letter modification. STROKE turns d into đ."""
    BREVE = 'breve'
    CIRCUMFLEX = 'circumflex'
    HORN = 'horn'
    STROKE = 'stroke'


TONE_MARKS = {
    Tone.ACUTE: '\u0301',
    Tone.GRAVE: '\u0300',
    Tone.HOOK: '\u0309',
    Tone.TILDE: '\u0303',
    Tone.DOT: '\u0323',
}

DIACRITIC_MARKS = {
    Diacritic.BREVE: '\u0306',
    Diacritic.CIRCUMFLEX: '\u0302',
    Diacritic.HORN: '\u031b',
}

_MARK_TO_TONE = {mark: tone for tone, mark in TONE_MARKS.items()}
_MARK_TO_DIACRITIC = {mark: diacritic for diacritic, mark in DIACRITIC_MARKS.items()}

# Which diacritics each base letter can carry.
# Chữ gốc nào nhận được dấu phụ nào.
ADMITTED_DIACRITICS = {
    'a': (Diacritic.BREVE, Diacritic.CIRCUMFLEX),
    'e': (Diacritic.CIRCUMFLEX,),
    'o': (Diacritic.CIRCUMFLEX, Diacritic.HORN),
    'u': (Diacritic.HORN,),
    'd': (Diacritic.STROKE,),
}


def is_vowel(char):
    return char.lower() in VOWELS


def admits(char, diacritic):
    """Return True if the base letter char can carry the diacritic."""
    return diacritic in ADMITTED_DIACRITICS.get(char.lower(), ())


def compose(char, diacritic=None, tone=Tone.LEVEL):
    """Build the text of one letter.

    Args:
        char: Base letter, upper or lower case
        diacritic: Diacritic or None
        tone: Tone; LEVEL adds nothing

    Returns:
        NFC string, e.g. compose('E', Diacritic.CIRCUMFLEX, Tone.DOT) -> 'Ệ'
    """
    if diacritic is Diacritic.STROKE:
        if char.lower() != 'd':
            return char
        return 'Đ' if char.isupper() else 'đ'
    text = char
    if diacritic is not None:
        text += DIACRITIC_MARKS[diacritic]
    if tone is not Tone.LEVEL:
        text += TONE_MARKS[tone]
    return unicodedata.normalize('NFC', text)


def decompose(char):
    """Split a (possibly precomposed) letter into (base, diacritic, tone).

    Characters that are not Latin letters with Vietnamese marks come back
    unchanged with no diacritic and LEVEL tone. Marks that Vietnamese does not
    use are dropped from consideration and the input character is
    returned as the base.
    """
    if char == 'đ':
        return 'd', Diacritic.STROKE, Tone.LEVEL
    if char == 'Đ':
        return 'D', Diacritic.STROKE, Tone.LEVEL
    decomposed = unicodedata.normalize('NFD', char)
    base, marks = decomposed[0], decomposed[1:]
    if not marks:
        return char, None, Tone.LEVEL
    diacritic = None
    tone = Tone.LEVEL
    for mark in marks:
        if mark in _MARK_TO_DIACRITIC and diacritic is None:
            diacritic = _MARK_TO_DIACRITIC[mark]
        elif mark in _MARK_TO_TONE and tone is Tone.LEVEL:
            tone = _MARK_TO_TONE[mark]
        else:
            return char, None, Tone.LEVEL
    if diacritic is not None and not admits(base, diacritic):
        return char, None, Tone.LEVEL
    return base, diacritic, tone
