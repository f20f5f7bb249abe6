import pytest

from canto_annotate.utils import Token, Trie, is_alpha_char, is_alpha_run, is_cjk, is_connector


@pytest.mark.parametrize("ch", [
    "\u4e00", "\u9fff", "\u3400", "\u4dbf", "\U00020000", "\U00020ba9", "\U00020e4c",
    "\U0002a6df", "\U0002a700", "\U0002b73f", "\U0002b740", "\U0002b81f", "\U0002b820",
    "\U0002ceaf", "\uf900", "\ufaff",
])
def test_is_cjk_inside_blocks(ch):
    assert is_cjk(ch)


@pytest.mark.parametrize("ch", [
    "a", "\u00e9", "3", "%", " ", "\u3002", "\u33ff", "\u4dc0", "\ua000",
    "\U0002a6e0", "\U0002ceb0", "\uf8ff", "\ufb00",
])
def test_is_cjk_outside_blocks(ch):
    assert not is_cjk(ch)


def test_is_alpha_char():
    assert is_alpha_char("a")
    assert is_alpha_char("Z")
    assert is_alpha_char("7")
    assert is_alpha_char("é")
    assert not is_alpha_char("學")
    assert not is_alpha_char("-")
    assert not is_alpha_char("%")
    assert not is_alpha_char(" ")


@pytest.mark.parametrize("ch", [
    "\u0e34",  # Thai sara i
    "\u093f",  # Devanagari vowel sign i
    "\u0902",  # Devanagari anusvara
    "\u0663",  # Arabic-Indic digit three
    "\u2163",  # Roman numeral four
])
def test_is_alpha_char_accepts_word_forming_marks_and_numerals(ch):
    assert is_alpha_char(ch)


def test_is_alpha_char_rejects_plain_combining_accent():
    assert not is_alpha_char("\u0301")


def test_is_connector():
    assert all(is_connector(c) for c in "-_'")
    assert not is_connector("%")
    assert not is_connector(" ")


@pytest.mark.parametrize("span,expected", [
    ("package", True),
    ("café", True),
    ("part-time", True),
    ("rust_canto", True),
    ("i'm", True),
    ("3", True),
    ("-abc", False),
    ("abc-", False),
    ("3%", False),
    ("a b", False),
    ("AB膠", False),
    ("", False),
])
def test_is_alpha_run(span, expected):
    assert is_alpha_run(list(span)) is expected


def test_token_to_dict():
    token = Token("香港", "hoeng1 gong2", ["hēung", "góng"])
    assert token.to_dict() == {"word": "香港", "jyutping": "hoeng1 gong2", "yale": ["hēung", "góng"]}
    assert Token(" ").to_dict() == {"word": " ", "jyutping": None, "yale": None}


def test_insert_char_orders_by_weight():
    trie = Trie()
    trie.insert_char("會", "wui5", 20)
    trie.insert_char("會", "wui6", 70)
    trie.insert_char("會", "kui2", 10)
    node = trie.lookup("會")
    assert node.readings == ["wui6", "wui5", "kui2"]
    assert node.char_weights == [70, 20, 10]


def test_insert_char_equal_weights_keep_arrival_order():
    trie = Trie()
    trie.insert_char("生", "saang1", 50)
    trie.insert_char("生", "sang1", 50)
    trie.insert_char("生", "sang3", 100)
    assert trie.lookup("生").readings == ["sang3", "saang1", "sang1"]


def test_insert_char_ignores_duplicates():
    trie = Trie()
    trie.insert_char("學", "hok6", 10)
    trie.insert_char("學", "hok6", 100)
    node = trie.lookup("學")
    assert node.readings == ["hok6"]
    assert node.char_weights == [10]


def test_insert_word_skips_single_characters():
    trie = Trie()
    trie.insert_word("好", "hou2")
    assert "好" not in trie
    assert trie.lookup("好") is None


def test_insert_word_appends_in_arrival_order():
    trie = Trie()
    trie.insert_word("學生", "hok6 saang1")
    trie.insert_word("學生", "hok6 sang1")
    trie.insert_word("學生", "hok6 saang1")
    assert trie.lookup("學生").readings == ["hok6 saang1", "hok6 sang1"]
    assert trie.primary_reading("學生") == "hok6 saang1"
    # The intermediate node exists but is not an entry
    assert trie.lookup("學") is not None
    assert "學" not in trie


def test_insert_freq_only_updates_existing_nodes():
    trie = Trie()
    trie.insert_word("學生", "hok6 saang1")
    trie.insert_freq("學生", 71278)
    trie.insert_freq("火星文", 120)
    trie.insert_freq("", 5)
    assert trie.lookup("學生").freq == 71278
    assert trie.lookup("火星文") is None
    assert trie.root.freq == 0


def test_insert_freq_overwrites():
    trie = Trie()
    trie.insert_word("學生", "hok6 saang1")
    trie.insert_freq("學生", 1)
    trie.insert_freq("學生", 2)
    assert trie.lookup("學生").freq == 2


def test_insert_freq_on_prefix_node():
    trie = Trie()
    trie.insert_word("學生", "hok6 saang1")
    trie.insert_freq("學", 10)
    assert trie.lookup("學").freq == 10
    assert "學" not in trie


def test_insert_lettered_accepts_single_and_mixed_keys():
    trie = Trie()
    trie.insert_lettered("%", "pat6 sen1")
    trie.insert_lettered("AB膠", "ei1 bi1 gaau1")
    trie.insert_lettered("", "nothing")
    assert trie.primary_reading("%") == "pat6 sen1"
    assert trie.primary_reading("AB膠") == "ei1 bi1 gaau1"
    assert trie.primary_reading("AB") is None
    assert len(trie) == 2


def test_depth_tracks_inserts():
    trie = Trie()
    assert trie.depth() == 0
    trie.insert_word("學生", "hok6 saang1")
    assert trie.depth() == 2
    trie.insert_lettered("chok-cheat", "cok1 cit1")
    assert trie.depth() == 10
