#!/usr/bin/env python3
"""
keystrokes.py - Convert Vietnamese text back into the keys that type it
Chuyển văn bản tiếng Việt ngược lại thành chuỗi phím gõ

Each letter becomes its base letter, then the key for its diacritic, then the
key for its tone. Everything else is copied as is.

    to_keystrokes("người Việt", InputMethod.TELEX)  → "nguwowfi Vieejt"
    to_keystrokes("người Việt", InputMethod.VNI)    → "ngu7o72i Vie65t"

Feeding the result to transform() gives the text back for ordinary words.
Words that contain a literal key sequence of the method (TELEX "xoong") are
not escaped and come back modified.
"""

import logging

from input_method import InputMethod
from letters import Diacritic, Tone, decompose

logger = logging.getLogger(__name__)


TELEX_TONE_KEYS = {
    Tone.ACUTE: 's',
    Tone.GRAVE: 'f',
    Tone.HOOK: 'r',
    Tone.TILDE: 'x',
    Tone.DOT: 'j',
}

VNI_TONE_KEYS = {
    Tone.ACUTE: '1',
    Tone.GRAVE: '2',
    Tone.HOOK: '3',
    Tone.TILDE: '4',
    Tone.DOT: '5',
}

VNI_DIACRITIC_KEYS = {
    Diacritic.CIRCUMFLEX: '6',
    Diacritic.HORN: '7',
    Diacritic.BREVE: '8',
    Diacritic.STROKE: '9',
}


def _telex_diacritic_key(base, diacritic):
    if diacritic is Diacritic.CIRCUMFLEX:
        return base.lower()
    if diacritic is Diacritic.STROKE:
        return 'd'
    return 'w'


def letter_keystrokes(char, method=InputMethod.TELEX):
    """Return the keystrokes for a single character."""
    base, diacritic, tone = decompose(char)
    keys = base
    if method is InputMethod.TELEX:
        if diacritic is not None:
            keys += _telex_diacritic_key(base, diacritic)
        if tone is not Tone.LEVEL:
            keys += TELEX_TONE_KEYS[tone]
    else:
        if diacritic is not None:
            keys += VNI_DIACRITIC_KEYS[diacritic]
        if tone is not Tone.LEVEL:
            keys += VNI_TONE_KEYS[tone]
    return keys


def to_keystrokes(text, method=InputMethod.TELEX):
    """
    Convert Vietnamese text into keystrokes for TELEX or VNI.

    Args:
        text: Vietnamese text
        method: InputMethod.TELEX or InputMethod.VNI (or their names)

    Raises:
        ValueError: for an unknown method
    """
    if not isinstance(method, InputMethod):
        try:
            method = InputMethod(str(method).lower())
        except ValueError:
            raise ValueError(f'Reverse conversion only supports telex and vni, got {method!r}') from None
    return ''.join(letter_keystrokes(char, method) for char in text)
