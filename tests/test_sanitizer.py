from quote_relay.text.language import Language
from quote_relay.text.sanitizer import sanitize_quote, strip_decoration, tokenize


def test_short_english_text_is_returned_trimmed() -> None:
    quote = sanitize_quote("  Courage is the quiet voice that says try again tomorrow.  ", Language.EN)
    assert quote.text == "Courage is the quiet voice that says try again tomorrow."
    assert quote.truncated is False
    assert quote.word_count == 10


def test_english_text_at_budget_is_not_truncated() -> None:
    words = [f"w{i}" for i in range(20)]
    quote = sanitize_quote(" ".join(words), Language.EN)
    assert quote.text == " ".join(words)
    assert quote.truncated is False


def test_long_english_text_keeps_first_twenty_words() -> None:
    words = [f"w{i}" for i in range(27)]
    quote = sanitize_quote("\n".join(words), Language.EN)
    assert quote.text == " ".join(words[:20]) + "..."
    assert quote.truncated is True
    assert quote.word_count == 27


def test_quote_marks_are_stripped() -> None:
    for raw in ['"Hello world"', "“Hello world”", "„Hello world”", "'Hello world'", '""Hello world"']:
        assert sanitize_quote(raw, Language.EN).text == "Hello world"


def test_stripping_is_stable_when_applied_twice() -> None:
    once = sanitize_quote("“Hello world”", Language.EN).text
    assert sanitize_quote(once, Language.EN).text == once


def test_quotes_inside_surrounding_whitespace_are_stripped() -> None:
    assert strip_decoration('  "Keep going."  ') == "Keep going."


def test_asterisks_are_removed() -> None:
    assert sanitize_quote("*Hello* world", Language.EN).text == "Hello world"
    assert sanitize_quote('**"You are enough."**', Language.EN).text == "You are enough."


def test_only_one_trailing_quote_is_removed() -> None:
    assert strip_decoration('Hello world""') == 'Hello world"'


def test_empty_result_is_flagged() -> None:
    assert sanitize_quote('"**"', Language.EN).empty
    assert sanitize_quote("   ", Language.TH).empty
    assert sanitize_quote(None, Language.EN).empty
    assert not sanitize_quote("ok", Language.EN).empty


def test_thai_splits_at_thai_character_boundaries() -> None:
    assert tokenize("ก ข", Language.TH) == ["ก", "ข"]
    assert tokenize("okก", Language.TH) == ["ok", "ก"]
    assert tokenize("รัก", Language.TH) == ["ร", "ั", "ก"]


def test_english_tokenizer_ignores_thai_boundaries() -> None:
    assert tokenize("ความรัก คือ", Language.EN) == ["ความรัก", "คือ"]


def test_short_thai_text_is_unchanged() -> None:
    quote = sanitize_quote("“ความรัก”", Language.TH)
    assert quote.text == "ความรัก"
    assert quote.truncated is False


def test_long_thai_text_is_joined_without_spaces() -> None:
    quote = sanitize_quote("ก" * 15 + " " + "ข" * 15, Language.TH)
    assert quote.text == "ก" * 15 + "ข" * 10 + "..."
    assert quote.truncated is True
    assert quote.word_count == 30


def test_thai_budget_is_twenty_five() -> None:
    assert sanitize_quote("ก" * 25, Language.TH).text == "ก" * 25
    assert sanitize_quote("ก" * 26, Language.TH).text == "ก" * 25 + "..."


def test_doubled_trailing_quotes_need_a_second_pass() -> None:
    once = sanitize_quote('""Hello world""', Language.EN).text
    assert once == 'Hello world"'
    assert sanitize_quote(once, Language.EN).text == "Hello world"
