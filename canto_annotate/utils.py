from typing import Dict, List, Optional, Sequence

import regex as re


# CJK ideograph blocks, inclusive bounds
CJK_RANGES = (
    (0x4E00, 0x9FFF),    # CJK Unified Ideographs
    (0x3400, 0x4DBF),    # Extension A
    (0x20000, 0x2A6DF),  # Extension B
    (0x2A700, 0x2B73F),  # Extension C
    (0x2B740, 0x2B81F),  # Extension D
    (0x2B820, 0x2CEAF),  # Extension E
    (0xF900, 0xFAFF),    # CJK Compatibility Ideographs
)

CONNECTORS = frozenset("-_'")

# Unicode Alphabetic (letters plus vowel signs and other combining marks that spell words) or Numeric
ALPHANUMERIC = re.compile(r"[\p{Alphabetic}\p{N}]")


def is_cjk(ch: str) -> bool:
    """True for CJK ideographs, including the extension blocks that hold rare Cantonese characters."""
    cp = ord(ch)
    return any(lo <= cp <= hi for lo, hi in CJK_RANGES)


def is_alpha_char(ch: str) -> bool:
    """True if `ch` is a letter or digit (accented letters included) outside the CJK blocks."""
    return ALPHANUMERIC.match(ch) is not None and not is_cjk(ch)


def is_connector(ch: str) -> bool:
    """True for the intra-word connectors: hyphen, underscore and apostrophe."""
    return ch in CONNECTORS


def is_alpha_run(span: Sequence[str]) -> bool:
    """
    Check whether a span of characters can be merged into a single alphanumeric token.

    Every character must be a non-CJK alphanumeric or a connector, and the
    span must start and end with an alphanumeric ("part-time" yes, "-abc" no).

    Args:
        span (Sequence[str]): The characters of the span.

    Returns:
        bool: True if the span is an alpha run.
    """
    if not span:
        return False
    if not (is_alpha_char(span[0]) and is_alpha_char(span[-1])):
        return False
    return all(is_alpha_char(c) or is_connector(c) for c in span)


class Token:
    """A segment of the input text with its optional Jyutping reading and Yale syllables."""

    __slots__ = ("word", "jyutping", "yale")

    def __init__(self, word: str, jyutping: Optional[str] = None, yale: Optional[List[str]] = None):
        self.word = word
        self.jyutping = jyutping
        self.yale = yale

    def to_dict(self) -> Dict[str, object]:
        return {"word": self.word, "jyutping": self.jyutping, "yale": self.yale}

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.word, self.jyutping, self.yale) == (other.word, other.jyutping, other.yale)

    def __repr__(self):
        return f"Token({self.word!r}, {self.jyutping!r}, {self.yale!r})"


class TrieNode:
    """
    A node in the dictionary trie.

    Holds the candidate readings of the path spelled out to this node. The
    first reading is the preferred one.
    """

    __slots__ = ("children", "readings", "char_weights", "freq")

    def __init__(self):
        # Dictionary of child nodes (char -> TrieNode)
        self.children: Dict[str, "TrieNode"] = {}
        self.readings: List[str] = []
        # Parallel to readings, only filled for single characters
        self.char_weights: List[int] = []
        # Usage frequency, tiebreaker for the segmenter
        self.freq: int = 0


class Trie:
    """
    Prefix tree over code points mapping words to their Jyutping readings.

    The trie is filled once through the four insert methods and only read
    afterwards, so one instance can be shared by any number of segmenters.
    """

    def __init__(self):
        self.root = TrieNode()
        self._depth: Optional[int] = None

    def _walk_or_create(self, word: str) -> TrieNode:
        self._depth = None
        node = self.root
        for char in word:
            if char in node.children:
                node = node.children[char]
            else:
                new_node = TrieNode()
                node.children[char] = new_node
                node = new_node
        return node

    def insert_char(self, ch: str, reading: str, weight: int) -> None:
        """
        Insert a weighted reading for a single character.

        Readings stay sorted by descending weight. A new reading goes right
        before the first entry with a strictly lower weight, so equal weights
        keep their arrival order.

        Args:
            ch (str): A single character.
            reading (str): Jyutping reading, e.g. "hou2".
            weight (int): Priority rank, higher means more common.
        """
        node = self._walk_or_create(ch)
        if reading in node.readings:
            return
        pos = next(
            (i for i, w in enumerate(node.char_weights) if w < weight),
            len(node.readings)
        )
        node.readings.insert(pos, reading)
        node.char_weights.insert(pos, weight)

    def insert_word(self, word: str, reading: str) -> None:
        """Insert a multi-character word. Words shorter than two characters are ignored."""
        if len(word) < 2:
            return
        node = self._walk_or_create(word)
        if reading not in node.readings:
            node.readings.append(reading)

    def insert_freq(self, word: str, freq: int) -> None:
        """
        Attach a usage frequency to an existing word.

        Frequency data never creates nodes: if any character of `word` is
        missing from the trie the call does nothing.
        """
        node = self.lookup(word)
        if node is None or node is self.root:
            return
        node.freq = freq

    def insert_lettered(self, word: str, reading: str) -> None:
        """
        Insert an entry from the lettered dictionary.

        Unlike insert_word, single characters ("%", "K") and mixed
        Latin/CJK keys ("AB膠", "chok-cheat") are accepted.
        """
        if not word:
            return
        node = self._walk_or_create(word)
        if reading not in node.readings:
            node.readings.append(reading)

    def lookup(self, word: str) -> Optional[TrieNode]:
        """Return the node at the end of the exact path for `word`, or None."""
        node = self.root
        for char in word:
            node = node.children.get(char)
            if node is None:
                return None
        return node

    def primary_reading(self, word: str) -> Optional[str]:
        node = self.lookup(word)
        if node is None or not node.readings:
            return None
        return node.readings[0]

    def depth(self) -> int:
        """Length in characters of the longest path in the trie."""
        if self._depth is not None:
            return self._depth
        deepest = 0
        stack = [(self.root, 0)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children.values())
        self._depth = deepest
        return deepest

    def __contains__(self, word: str) -> bool:
        return self.primary_reading(word) is not None

    def __len__(self) -> int:
        # Number of entries, i.e. nodes carrying at least one reading
        count = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.readings:
                count += 1
            stack.extend(node.children.values())
        return count
