import logging
from typing import List, Optional, Tuple

from canto_annotate.utils import Token, Trie, is_alpha_char, is_connector

logger = logging.getLogger(__name__)

# (token count, total frequency) of the best segmentation of a prefix
Cost = Tuple[int, int]


class Segmenter:
    """
    Dictionary-driven segmenter based on dynamic programming.

    Splits text into the smallest possible number of tokens. Among segmentations
    with the same number of tokens, the one whose dictionary words have the
    highest summed frequency wins.

    Example for "好學生":
        best[1] = (1, 0)           "好"
        best[2] = (1, freq(好學))  "好學" found in the trie
        best[3] = (2, freq(好學))  "好學" + "生"
               vs (2, freq(學生))  "好" + "學生"
        freq(學生) >> freq(好學), so the result is ["好", "學生"].

    Non-CJK text:
        - Runs of letters and digits (accented letters included), optionally
          joined by "-", "_" or "'", become a single token. The trie is
          checked first, so "ge" or "café" keep their dictionary reading and
          only unknown runs end up without one.
        - Whitespace, punctuation and symbols become one token per character,
          with the trie reading if there is one ("%" -> "pat6 sen1"). So "3%"
          splits into "3" and "%".
    """

    def __init__(self, trie: Trie) -> None:
        """
        Args:
            trie (Trie): A fully built dictionary trie. It is only read.
        """
        self.trie = trie
        # Longest dictionary key, bounds the trie walks
        self.max_depth = trie.depth()

    @staticmethod
    def better(candidate: Cost, current: Optional[Cost]) -> bool:
        """Fewer tokens wins; on a tie, higher total frequency wins. Exact ties keep the current entry."""
        if current is None:
            return True
        if candidate[0] != current[0]:
            return candidate[0] < current[0]
        return candidate[1] > current[1]

    def segment(self, text: str) -> List[Token]:
        """
        Segment text into tokens carrying their preferred Jyutping reading.

        Args:
            text (str): The text to segment.

        Returns:
            List[Token]: Tokens whose words concatenate back to `text`.
        """
        # 1. Input validation
        if not isinstance(text, str):
            raise TypeError("Text to segment must be a string.")

        chars = list(text)
        n = len(chars)
        root = self.trie.root

        # 2. DP tables; None marks an unreachable prefix
        best: List[Optional[Cost]] = [None] * (n + 1)
        back: List[Tuple[int, Optional[str]]] = [(0, None)] * (n + 1)
        best[0] = (0, 0)

        for end in range(1, n + 1):
            # 2.1 Single-character fallback, reading from the trie if any
            prev = best[end - 1]
            if prev is not None:
                node = root.children.get(chars[end - 1])
                single_reading = node.readings[0] if node is not None and node.readings else None
                cost = (prev[0] + 1, prev[1])
                if self.better(cost, best[end]):
                    best[end] = cost
                    back[end] = (end - 1, single_reading)

            # 2.2 Spans ending at `end`, shortest first
            # run_open: chars[start:end] still only holds alphanumerics and connectors
            run_open = is_alpha_char(chars[end - 1])
            for start in range(end - 1, -1, -1):
                if run_open and not (is_alpha_char(chars[start]) or is_connector(chars[start])):
                    run_open = False
                # Past the deepest dictionary entry only alpha runs can still match
                if end - start > self.max_depth and not run_open:
                    break

                base = best[start]
                if base is None:
                    continue

                # Trie walk over chars[start:end]
                trie_matched = False
                if end - start <= self.max_depth:
                    node = root
                    for j in range(start, end):
                        node = node.children.get(chars[j])
                        if node is None:
                            break
                        if j == end - 1 and node.readings:
                            trie_matched = True
                            cost = (base[0] + 1, base[1] + node.freq)
                            if self.better(cost, best[end]):
                                best[end] = cost
                                back[end] = (start, node.readings[0])

                # Alpha-run fallback, only for spans the dictionary does not know
                if not trie_matched and run_open and is_alpha_char(chars[start]):
                    cost = (base[0] + 1, base[1])
                    if self.better(cost, best[end]):
                        best[end] = cost
                        back[end] = (start, None)

        # 3. Follow the back pointers from the end of the text
        tokens: List[Token] = []
        curr = n
        while curr > 0:
            prev_idx, reading = back[curr]
            tokens.append(Token("".join(chars[prev_idx:curr]), reading))
            curr = prev_idx
        tokens.reverse()

        logger.debug("Segmented %d characters into %d tokens", n, len(tokens))
        return tokens
