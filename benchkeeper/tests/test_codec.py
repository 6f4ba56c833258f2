from pathlib import Path

from benchkeeper.codec import DEFAULT_CODEC, JsonCodec


def test_canonical_encoding_ignores_key_order():
    a = {"Zed": "1.0", "Alpha": {"b": 1, "a": 2}}
    b = {"Alpha": {"a": 2, "b": 1}, "Zed": "1.0"}
    assert DEFAULT_CODEC.encode_canonical(a) == DEFAULT_CODEC.encode_canonical(b)
    assert DEFAULT_CODEC.encode_canonical(a) == '{"Alpha":{"a":2,"b":1},"Zed":"1.0"}'
    assert DEFAULT_CODEC.encode_canonical(None) == "null"


def test_clean_converts_non_json_values():
    class Version:
        def __str__(self):
            return "1.2.3"

    cleaned = JsonCodec().clean({"v": Version(), "t": (1, 2), "s": {"b", "a"}, "p": Path("x"), 1: b"raw"})
    assert cleaned == {"v": "1.2.3", "t": [1, 2], "s": ["a", "b"], "p": "x", "1": "raw"}


def test_decode():
    assert DEFAULT_CODEC.decode('[200, "OK", [], {}]') == [200, "OK", [], {}]
