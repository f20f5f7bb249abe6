from canto_annotate.annotator import (
    Annotator,
    annotate,
    annotate_json,
    to_yale_diacritics,
    to_yale_numeric,
)
from canto_annotate.data import build_trie, default_trie
from canto_annotate.segmenter import Segmenter
from canto_annotate.utils import Token, Trie, TrieNode

__all__ = [
    "Annotator",
    "Segmenter",
    "Token",
    "Trie",
    "TrieNode",
    "annotate",
    "annotate_json",
    "build_trie",
    "default_trie",
    "to_yale_diacritics",
    "to_yale_numeric",
]
