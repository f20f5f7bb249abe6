import json

from canto_annotate import annotator as annotator_module
from canto_annotate import data
from canto_annotate.annotator import (
    Annotator,
    annotate,
    annotate_json,
    to_yale_diacritics,
    to_yale_numeric,
)


def test_annotator_attaches_yale(bundled_trie):
    tokens = Annotator(bundled_trie).annotate("都會大學")
    assert len(tokens) == 1
    assert tokens[0].word == "都會大學"
    assert tokens[0].jyutping == "dou1 wui6 daai6 hok6"
    assert tokens[0].yale == ["dōu", "wuih", "daaih", "hohk"]


def test_tokens_without_reading_have_no_yale(bundled_trie):
    tokens = Annotator(bundled_trie).annotate("ABCD 一二")
    assert [t.to_dict() for t in tokens] == [
        {"word": "ABCD", "jyutping": None, "yale": None},
        {"word": " ", "jyutping": None, "yale": None},
        {"word": "一", "jyutping": "jat1", "yale": ["yāt"]},
        {"word": "二", "jyutping": "ji6", "yale": ["yih"]},
    ]


def test_yale_is_aligned_with_syllables(bundled_trie):
    for token in Annotator(bundled_trie).annotate("我哋係好學生，去香港食飯"):
        if token.jyutping is not None:
            assert len(token.yale) == len(token.jyutping.split())


def test_annotate_records(bundled_trie):
    records = annotate("3%人", bundled_trie)
    assert records == [
        {"word": "3", "jyutping": None, "yale": None},
        {"word": "%", "jyutping": "pat6 sen1", "yale": ["paht", "sēn"]},
        {"word": "人", "jyutping": "jan4", "yale": ["yàhn"]},
    ]


def test_annotate_accepts_utf8_bytes(bundled_trie):
    assert annotate("好學生".encode("utf-8"), bundled_trie) == annotate("好學生", bundled_trie)


def test_annotate_invalid_bytes_is_empty(bundled_trie):
    assert annotate(b"\xff\xfe\xfa", bundled_trie) == []
    assert annotate(None, bundled_trie) == []
    assert annotate("", bundled_trie) == []


def test_annotate_uses_default_trie():
    assert annotate("好學生") == [
        {"word": "好", "jyutping": "hou2", "yale": ["hóu"]},
        {"word": "學生", "jyutping": "hok6 saang1", "yale": ["hohk", "sāang"]},
    ]


def test_annotate_survives_unreadable_default_dictionary(tmp_path, monkeypatch):
    (tmp_path / "chars.tsv").write_bytes(b"\xff\xfe\tjan4\n")
    monkeypatch.setattr(data, "_default_trie", None)
    monkeypatch.setattr(data, "DEFAULT_DICT_DIR", str(tmp_path))
    assert annotate("人") == []
    assert annotate_json("人") == "[]"


def test_annotate_json(bundled_trie):
    payload = annotate_json("香港", bundled_trie)
    assert "香港" in payload
    assert json.loads(payload) == [{"word": "香港", "jyutping": "hoeng1 gong2", "yale": ["hēung", "góng"]}]


def test_annotate_json_falls_back_on_serialization_error(bundled_trie, monkeypatch):
    def broken_dumps(*args, **kwargs):
        raise TypeError("not serializable")

    monkeypatch.setattr(annotator_module.json, "dumps", broken_dumps)
    assert annotate_json("香港", bundled_trie) == "[]"


def test_annotate_is_idempotent(bundled_trie):
    text = "Hap唔Happy呀，我哋去食飯 part-time"
    assert annotate_json(text, bundled_trie) == annotate_json(text, bundled_trie)


def test_to_yale_numeric():
    assert to_yale_numeric("gwong2 dung1 waa2") == "gwong2 dung1 wa2"
    assert to_yale_numeric("abc") == ""
    assert to_yale_numeric("") == ""
    assert to_yale_numeric(None) == ""


def test_to_yale_diacritics():
    assert to_yale_diacritics("ngo5") == "ngóh"
    assert to_yale_diacritics("hok6") == "hohk"
    assert to_yale_diacritics("aa3") == "a"
    assert to_yale_diacritics("nope") == ""
    assert to_yale_diacritics(42) == ""
