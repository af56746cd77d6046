import pytest

from bert_wordpiece import BasicTokenizer, InvalidArgumentError, UnsupportedOperationError


def test_splits_on_whitespace_and_punctuation():
    tokenizer = BasicTokenizer()

    assert tokenizer.tokenize("Hello, World!") == ["hello", ",", "world", "!"]
    assert tokenizer.tokenize("don't stop...") == ["don", "'", "t", "stop", ".", ".", "."]


def test_lowercase_can_be_disabled():
    tokenizer = BasicTokenizer(lowercase=False)

    assert tokenizer.tokenize("Hello World") == ["Hello", "World"]


def test_never_split_tokens_are_kept_whole_and_cased():
    tokenizer = BasicTokenizer(never_split=["[CLS]", "[SEP]"])

    assert tokenizer.tokenize("[CLS] Hello [SEP]") == ["[CLS]", "hello", "[SEP]"]
    # Only exact whitespace tokens are protected
    assert tokenizer.tokenize("[CLS],") == ["[", "cls", "]", ","]


def test_cleaning_drops_nul_replacement_and_control_characters():
    tokenizer = BasicTokenizer()

    assert tokenizer.tokenize("hel\x00lo\ufffd wor\x07ld") == ["hello", "world"]
    # Tabs and newlines are control characters, not separators
    assert tokenizer.tokenize("a\tb\nc") == ["abc"]


def test_runs_of_spaces_do_not_produce_empty_tokens():
    tokenizer = BasicTokenizer()

    assert tokenizer.tokenize("  a   b ") == ["a", "b"]
    assert tokenizer.tokenize("a ,b") == ["a", ",", "b"]
    assert tokenizer.tokenize("\x01") == []


def test_unicode_punctuation_categories():
    tokenizer = BasicTokenizer()

    assert tokenizer.tokenize("¿Qué?") == ["¿", "qué", "?"]
    assert tokenizer.tokenize("a—b") == ["a", "—", "b"]
    assert tokenizer.tokenize("«hi»") == ["«", "hi", "»"]
    # Symbols are not punctuation
    assert tokenizer.tokenize("$5 a+b") == ["$5", "a+b"]


@pytest.mark.parametrize("text", ["", None])
def test_empty_text_is_rejected(text):
    with pytest.raises(InvalidArgumentError):
        BasicTokenizer().tokenize(text)


def test_only_tokenize_is_supported():
    tokenizer = BasicTokenizer()

    assert BasicTokenizer.supports("tokenize")
    assert not BasicTokenizer.supports("encode")

    with pytest.raises(UnsupportedOperationError) as excinfo:
        tokenizer.encode(["hello"])
    assert excinfo.value.capability == "encode"
    assert excinfo.value.variant == "BasicTokenizer"

    with pytest.raises(UnsupportedOperationError):
        tokenizer.decode([0])
    with pytest.raises(UnsupportedOperationError):
        tokenizer.detokenize(["hello"])
    for accessor in ("beginning_token", "end_token", "classifier_token", "mask_token",
                     "pad_token", "separator_token", "unknown_token"):
        with pytest.raises(UnsupportedOperationError):
            getattr(tokenizer, accessor)
