#!/usr/bin/env python3
"""
syllable_parser.py - Keystroke transitions over the syllable model
Chuyển trạng thái âm tiết theo từng phím gõ

================================================================================
OVERVIEW / Tổng quan
================================================================================

The parser is a pure transition function:

    apply(syllable, key, action)  →  syllable'

    feed(table, syllable, key)    =  apply(syllable, key, table.resolve(syllable, key))

Folding feed over the keystrokes of one word gives the syllable for that
word (parse_word). Nothing else is remembered between keystrokes, so the
batch transformer and the incremental buffer agree by construction.

================================================================================
TRANSITIONS / Các bước chuyển
================================================================================

    INSERT_LETTER   append the letter, then re-target ư/ơ horns when the
                    nucleus or the final changed (chưo + n → chươn)
    MODIFY_LETTER   put the diacritic on the target letters
                      same key pressed twice in a row → remove it and
                      type the key literally        (aaa → aa, uww → uw)
                      targets already marked        → absorbed (a late w
                      keeps ươ as it is: chuwongw → chương)
    APPLY_TONE      set the tone
                      LEVEL                         → clear it
                      same tone as before           → clear it and type
                                                      the key literally
    INSERT_HORN_U   append ư                         (tw → tư)
    UNDO_HORN_U     turn the inserted ư back into the typed key (ww → w)
    PASSTHROUGH     append the key as a literal letter

Every modification or tone that leaves a syllable which is not Vietnamese
(see Syllable.is_valid) is rolled back and the key is typed literally
instead. Typing English therefore degrades to the keys themselves:

    "hellos"  → tone on 'e' gives an invalid final "llo"  → "hellos"

================================================================================
"""

import logging

from input_method import ActionKind, passthrough
from letters import Diacritic, Tone, decompose
from syllable import EMPTY, Letter, base_string

logger = logging.getLogger(__name__)


def _append(syllable, letter, key, action):
    return syllable.with_letters(
        syllable.letters + (letter,),
        raw=syllable.raw + key,
        last_action=action,
    )


def _literal(syllable, key):
    """Type key as a literal letter on top of syllable."""
    return _append(syllable, Letter(key), key, passthrough(key))


def _input_letter(char):
    base, diacritic, tone = decompose(char)
    if tone is not Tone.LEVEL:
        # Already toned text is kept verbatim
        return Letter(char)
    return Letter(base, diacritic)


def retarget_horns(syllable):
    """
    Spread a horn over both vowels of ươ once the spelling is settled.

    "uo" only becomes "ươ" as a pair when a final follows or the nucleus
    grows to uoi/uou; "thuơ" (thuở) keeps a single horn.
    """
    if not syllable.has_diacritic(Diacritic.HORN):
        return syllable
    vowels = base_string(syllable.nucleus)
    if vowels in ('uoi', 'uou') or (vowels == 'uo' and syllable.final):
        positions = syllable.modification_targets(Diacritic.HORN)
        retargeted = syllable.with_diacritic(positions, Diacritic.HORN)
        if retargeted.letters != syllable.letters:
            logger.debug(f'Re-targeted horn: {syllable.text()!r} -> {retargeted.text()!r}')
        return retargeted
    return syllable


def _apply_modification(syllable, key, action):
    diacritic = action.value
    last = syllable.last_action
    if last is not None and last.kind is ActionKind.MODIFY_LETTER and last.value is diacritic:
        logger.debug(f'Toggled off {diacritic.name} in {syllable.text()!r}')
        return _literal(syllable.without_diacritic(diacritic), key)

    targets = syllable.modification_targets(diacritic)
    modified = syllable.with_diacritic(targets, diacritic)
    modified = modified.with_letters(modified.letters, raw=syllable.raw + key, last_action=action)
    if not modified.is_valid():
        return _literal(syllable, key)
    return modified


def _apply_tone(syllable, key, action):
    tone = action.value
    if tone is Tone.LEVEL:
        return syllable.with_letters(syllable.letters, tone=Tone.LEVEL, raw=syllable.raw + key, last_action=action)
    if syllable.tone is tone:
        logger.debug(f'Toggled off {tone.name} in {syllable.text()!r}')
        return _literal(syllable.with_letters(syllable.letters, tone=Tone.LEVEL), key)
    toned = syllable.with_letters(syllable.letters, tone=tone, raw=syllable.raw + key, last_action=action)
    if not toned.is_valid():
        return _literal(syllable, key)
    return toned


def apply(syllable, key, action):
    """
    Apply one resolved keystroke.

    Args:
        syllable: Current Syllable
        key: The character that was typed
        action: The Action resolved for key

    Returns:
        New Syllable; the input is never modified
    """
    kind = action.kind

    if kind is ActionKind.INSERT_LETTER:
        return retarget_horns(_append(syllable, _input_letter(key), key, action))

    if kind is ActionKind.MODIFY_LETTER:
        return _apply_modification(syllable, key, action)

    if kind is ActionKind.APPLY_TONE:
        return _apply_tone(syllable, key, action)

    if kind is ActionKind.INSERT_HORN_U:
        inserted = _append(syllable, Letter(action.value, Diacritic.HORN), key, action)
        if not inserted.is_valid():
            return _literal(syllable, key)
        return inserted

    if kind is ActionKind.UNDO_HORN_U:
        letters = syllable.letters[:-1] + (Letter(key),)
        return syllable.with_letters(letters, raw=syllable.raw + key, last_action=action)

    return _literal(syllable, key)


def feed(table, syllable, key):
    """Resolve key against syllable with table and apply it."""
    return apply(syllable, key, table.resolve(syllable, key))


def parse_word(table, raw):
    """Re-derive the syllable of one word from its raw keystrokes."""
    syllable = EMPTY
    for key in raw:
        syllable = feed(table, syllable, key)
    return syllable
