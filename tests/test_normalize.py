"""
Tests for text normalization.
"""

from ingestion.normalize import TextNormalizer, clean_text, normalize_text


def test_lowercases_and_splits():
    assert normalize_text("To be, or NOT to be?") == ["to", "be", "or", "not", "to", "be"]


def test_line_breaks_become_separators():
    assert normalize_text("first\nsecond\r\nthird\rfourth") == [
        "first",
        "second",
        "third",
        "fourth",
    ]


def test_punctuation_splits_words():
    assert normalize_text("well-known,fact") == ["well", "known", "fact"]


def test_digits_and_non_latin_characters_split_words():
    assert normalize_text("abc123def") == ["abc", "def"]
    assert normalize_text("café au lait") == ["caf", "au", "lait"]


def test_empty_and_symbol_only_input():
    assert normalize_text("") == []
    assert normalize_text("   \n\t ") == []
    assert normalize_text("!!! 42 ??? @#$") == []


def test_clean_text_keeps_only_letters_and_spaces():
    cleaned = clean_text("Hello,\nWorld!")
    assert cleaned == "Hello  World "


def test_text_normalizer_matches_function():
    text = "Seek out new life; and new civilizations."
    assert TextNormalizer().tokenize(text) == normalize_text(text)
