import pytest

from canto_annotate.data import build_trie
from canto_annotate.utils import Trie


@pytest.fixture
def small_trie():
    trie = Trie()
    trie.insert_char("好", "hou2", 95)
    trie.insert_char("好", "hou3", 5)
    trie.insert_char("學", "hok6", 100)
    trie.insert_char("生", "saang1", 60)
    trie.insert_char("生", "sang1", 40)
    trie.insert_word("好學", "hou3 hok6")
    trie.insert_word("學生", "hok6 saang1")
    trie.insert_lettered("%", "pat6 sen1")
    trie.insert_lettered("ab", "ei1 bi1")
    trie.insert_freq("好學", 2847)
    trie.insert_freq("學生", 71278)
    trie.insert_freq("ab", 5)
    return trie


@pytest.fixture(scope="session")
def bundled_trie():
    return build_trie()
