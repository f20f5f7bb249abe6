"""
Jyutping to Cantonese Yale conversion.

Two output forms:
    numeric:    "keoi5" -> "keui5"
    diacritics: "keoi5" -> "kéuih"

Tones 1-3 are high register, tones 4-6 low register. In the diacritic form
low-register syllables get an "h" after the nucleus:
    1 macron  sī      4 grave + h  sìh
    2 acute   sí      5 acute + h  síh
    3 no mark si      6 no mark + h sih
"""

import unicodedata
from typing import List, Optional, Tuple

# Checked in order, longer initials first so "gw" is not read as "g" + "w..."
INITIALS: List[Tuple[str, str]] = [
    ("gw", "gw"), ("kw", "kw"), ("ng", "ng"),
    ("z", "j"), ("c", "ch"), ("j", "y"),
] + [(i, i) for i in ("b", "p", "m", "f", "d", "t", "n", "l", "g", "k", "h", "s", "w")]

# Applied in sequence; "oeng" and "oek" must go before "oe"
FINAL_REWRITES: List[Tuple[str, str]] = [
    ("eoi", "eui"),
    ("oeng", "eung"),
    ("oek", "euk"),
    ("oe", "eu"),
    ("eo", "eu"),
]

# "ng" first so it is not split as "g" with a leftover "n"
CODAS = ("ng", "p", "t", "k", "m", "n")

VOWELS = frozenset("aeiou")

TONE_MARKS = {
    1: "\u0304",  # macron
    2: "\u0301",  # acute
    3: "",
    4: "\u0300",  # grave
    5: "\u0301",  # acute
    6: "",
}

LOW_REGISTER = frozenset((4, 5, 6))


def split_tone(syllable: str) -> Optional[Tuple[str, int]]:
    """Return (body, tone) or None if the syllable has no trailing tone digit."""
    if not syllable or not ("0" <= syllable[-1] <= "9"):
        return None
    return syllable[:-1], int(syllable[-1])


def convert_initial(body: str) -> Tuple[str, str]:
    """Return (yale_initial, remaining_final); the initial is empty for vowel onsets."""
    for jyutping, yale in INITIALS:
        if body.startswith(jyutping):
            return yale, body[len(jyutping):]
    return "", body


def convert_final(final: str) -> str:
    for old, new in FINAL_REWRITES:
        final = final.replace(old, new)
    # Bare "aa" is written "a"; "aa" + coda finals stay as they are
    if final == "aa":
        final = "a"
    return final


def split_nucleus_coda(final: str) -> Tuple[str, str]:
    """Split a final into (nucleus, coda). Trailing glides i/u belong to the nucleus."""
    for coda in CODAS:
        if final.endswith(coda):
            return final[:-len(coda)], coda
    return final, ""


def apply_diacritic(initial: str, final: str, tone: int) -> str:
    """
    Build a Yale syllable with its tone mark.

    The mark goes on the first vowel of the nucleus, the low-register "h"
    after the whole nucleus and before the coda.

    Args:
        initial (str): Yale initial.
        final (str): Yale final.
        tone (int): Jyutping tone number.

    Returns:
        str: The syllable in NFC, e.g. "hàahm".
    """
    mark = TONE_MARKS.get(tone, "")
    nucleus, coda = split_nucleus_coda(final)

    parts = [initial]
    marked = False
    for ch in nucleus:
        parts.append(ch)
        if not marked and ch in VOWELS:
            parts.append(mark)
            marked = True

    if tone in LOW_REGISTER:
        parts.append("h")
    parts.append(coda)

    # Collapse base letter + combining mark into one code point
    return unicodedata.normalize("NFC", "".join(parts))


def convert_syllable(syllable: str, diacritics: bool) -> Optional[str]:
    """
    Convert a single Jyutping syllable to Yale.

    Args:
        syllable (str): e.g. "gwong2".
        diacritics (bool): Use tone marks instead of a trailing tone number.

    Returns:
        Optional[str]: The Yale syllable, or None if `syllable` has no tone digit.
    """
    split = split_tone(syllable)
    if split is None:
        return None
    body, tone = split

    initial, rest = convert_initial(body)
    final = convert_final(rest)

    if diacritics:
        return apply_diacritic(initial, final, tone)
    return f"{initial}{final}{tone}"


def jyutping_to_yale(jyutping: str, diacritics: bool) -> Optional[str]:
    """
    Convert a Jyutping phrase, syllables separated by whitespace.

    Invalid syllables are dropped. Returns None if nothing could be converted.
    """
    converted = [
        yale for yale in (convert_syllable(s, diacritics) for s in jyutping.split())
        if yale is not None
    ]
    if not converted:
        return None
    return unicodedata.normalize("NFC", " ".join(converted))


def jyutping_to_yale_list(jyutping: str) -> Optional[List[str]]:
    """
    Convert a Jyutping phrase to one diacritic Yale string per syllable.

    e.g. "nei5 hou2 aa3" -> ["néih", "hóu", "a"]
    """
    converted = [
        yale for yale in (convert_syllable(s, True) for s in jyutping.split())
        if yale is not None
    ]
    return converted or None
