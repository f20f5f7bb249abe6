"""
Annotation entry points.

The Annotator combines the segmenter output with the Yale conversion. The
module-level functions are the public boundary: they accept loosely typed
input and never raise, falling back to an empty result instead.
"""

import json
import logging
from typing import Dict, List, Optional, Union

from canto_annotate.data import default_trie
from canto_annotate.segmenter import Segmenter
from canto_annotate.utils import Token, Trie
from canto_annotate.yale import jyutping_to_yale, jyutping_to_yale_list

logger = logging.getLogger(__name__)


class Annotator:
    """Segments text and attaches Jyutping and Yale readings to every token."""

    def __init__(self, trie: Trie) -> None:
        self.segmenter = Segmenter(trie)

    def annotate(self, text: str) -> List[Token]:
        """
        Annotate text.

        Args:
            text (str): The text to annotate.

        Returns:
            List[Token]: Tokens in input order. Tokens with a Jyutping reading
            also carry one Yale syllable per Jyutping syllable.
        """
        tokens = self.segmenter.segment(text)
        for token in tokens:
            if token.jyutping is not None:
                token.yale = jyutping_to_yale_list(token.jyutping)
        return tokens


def _decode(text: Union[str, bytes, None]) -> str:
    if isinstance(text, str):
        return text
    if isinstance(text, (bytes, bytearray)):
        try:
            return bytes(text).decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Input is not valid UTF-8, treating it as empty text")
            return ""
    return ""


def annotate(text: Union[str, bytes], trie: Optional[Trie] = None) -> List[Dict[str, object]]:
    """
    Annotate text and return plain records {word, jyutping, yale}.

    `text` may be a str or UTF-8 bytes; invalid bytes count as empty text.
    Without `trie` the bundled dictionary is used.
    """
    if trie is None:
        try:
            trie = default_trie()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Could not load the bundled dictionary: %s", e)
            return []
    annotator = Annotator(trie)
    return [token.to_dict() for token in annotator.annotate(_decode(text))]


def annotate_json(text: Union[str, bytes], trie: Optional[Trie] = None) -> str:
    """Annotate text and serialize the records to JSON; "[]" if serialization fails."""
    records = annotate(text, trie)
    try:
        return json.dumps(records, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.warning("Could not serialize annotation: %s", e)
        return "[]"


def to_yale_numeric(jyutping: str) -> str:
    """Jyutping to Yale with tone numbers, e.g. "gwong2 dung1 waa2" -> "gwong2 dung1 wa2"."""
    if not isinstance(jyutping, str):
        return ""
    return jyutping_to_yale(jyutping, diacritics=False) or ""


def to_yale_diacritics(jyutping: str) -> str:
    """Jyutping to Yale with tone marks, e.g. "ngo5" -> "ngóh"."""
    if not isinstance(jyutping, str):
        return ""
    return jyutping_to_yale(jyutping, diacritics=True) or ""
