"""
Loads the Cantonese dictionary files into a Trie.

The dictionary is split over four tab-separated files:
    chars.tsv     character, reading, optional weight ("5%")
    words.tsv     word, reading
    lettered.tsv  key of any script mix (abbreviations, symbols, loanwords), reading
    freq.txt      word, integer frequency

Malformed lines are skipped; loading never fails on bad data.
"""

import logging
import os
import threading
from typing import Iterable, Optional

from tqdm import tqdm

from canto_annotate.utils import Trie

logger = logging.getLogger(__name__)

DEFAULT_DICT_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "dictionary")

CHARS_FILE = "chars.tsv"
WORDS_FILE = "words.tsv"
LETTERED_FILE = "lettered.tsv"
FREQ_FILE = "freq.txt"

# Weight for readings listed without a percentage
DEFAULT_WEIGHT = 100

_default_trie: Optional[Trie] = None
_default_lock = threading.Lock()


def parse_weight(field: Optional[str]) -> int:
    """
    Parse a reading weight such as "5%".

    Args:
        field (Optional[str]): The weight column, None if the line has none.

    Returns:
        int: DEFAULT_WEIGHT when missing, 0 when unparseable.
    """
    if field is None:
        return DEFAULT_WEIGHT
    try:
        return int(field.strip().rstrip("%"))
    except ValueError:
        return 0


def _split(line: str):
    return line.rstrip("\r\n").split("\t")


def load_chars(trie: Trie, lines: Iterable[str]) -> int:
    """Insert single-character entries. Returns the number of accepted lines."""
    count = 0
    for line in lines:
        parts = _split(line)
        if len(parts) < 2 or not parts[0]:
            logger.debug("Skipping char line: %r", line)
            continue
        weight = parse_weight(parts[2] if len(parts) > 2 else None)
        trie.insert_char(parts[0][0], parts[1], weight)
        count += 1
    return count


def load_words(trie: Trie, lines: Iterable[str]) -> int:
    """Insert multi-character word entries. Returns the number of accepted lines."""
    count = 0
    for line in lines:
        parts = _split(line)
        if len(parts) < 2 or not parts[0]:
            logger.debug("Skipping word line: %r", line)
            continue
        trie.insert_word(parts[0], parts[1])
        count += 1
    return count


def load_lettered(trie: Trie, lines: Iterable[str]) -> int:
    """Insert lettered entries. Returns the number of accepted lines."""
    count = 0
    for line in lines:
        parts = _split(line)
        if len(parts) < 2 or not parts[0]:
            logger.debug("Skipping lettered line: %r", line)
            continue
        trie.insert_lettered(parts[0], parts[1])
        count += 1
    return count


def load_freqs(trie: Trie, lines: Iterable[str]) -> int:
    """Attach word frequencies. Words missing from the trie are ignored by the trie itself."""
    count = 0
    for line in lines:
        parts = _split(line)
        if len(parts) < 2:
            logger.debug("Skipping freq line: %r", line)
            continue
        try:
            freq = int(parts[1].strip())
        except ValueError:
            logger.debug("Skipping freq line with bad number: %r", line)
            continue
        trie.insert_freq(parts[0], freq)
        count += 1
    return count


def build_trie(dict_dir: Optional[str] = None, progress: bool = False) -> Trie:
    """
    Build a trie from the dictionary files in `dict_dir`.

    Frequencies are loaded last so they can attach to nodes created by all
    the other files. A missing file is skipped with a warning.

    Args:
        dict_dir (Optional[str]): Directory holding the dictionary files, the
            bundled dictionary if None.
        progress (bool): Show a progress bar per file.

    Returns:
        Trie: The assembled trie.
    """
    dict_dir = dict_dir or DEFAULT_DICT_DIR
    trie = Trie()

    # Order matters: frequencies need existing nodes
    steps = [
        (CHARS_FILE, load_chars),
        (WORDS_FILE, load_words),
        (LETTERED_FILE, load_lettered),
        (FREQ_FILE, load_freqs),
    ]
    for file_name, loader in steps:
        path = os.path.join(dict_dir, file_name)
        if not os.path.isfile(path):
            logger.warning("Dictionary file not found: %s", path)
            continue
        with open(path, "r", encoding="utf-8") as f:
            lines = tqdm(f, desc=f"Loading {file_name}", unit=" lines", disable=not progress)
            count = loader(trie, lines)
        logger.info("Loaded %d records from %s", count, path)

    return trie


def default_trie() -> Trie:
    """
    Return the shared trie over the bundled dictionary, building it on first use.

    Concurrent first callers still trigger exactly one build.
    """
    global _default_trie
    if _default_trie is None:
        with _default_lock:
            if _default_trie is None:
                _default_trie = build_trie()
    return _default_trie
