import pytest

from bert_wordpiece import BertTokenizer


VOCAB_TOKENS = [
    "[PAD]",
    "[UNK]",
    "[CLS]",
    "[SEP]",
    "[MASK]",
    "hello",
    "world",
    "un",
    "##aff",
    "##able",
    ",",
    ".",
    "!",
    "play",
    "##ing",
]


@pytest.fixture
def vocab_tokens():
    return list(VOCAB_TOKENS)


@pytest.fixture
def tokenizer():
    return BertTokenizer(VOCAB_TOKENS)


@pytest.fixture
def vocab_file(tmp_path):
    path = tmp_path / "vocab.txt"
    path.write_text("".join(token + "\n" for token in VOCAB_TOKENS), encoding="utf-8")
    return str(path)


@pytest.fixture
def hf_tokenizer_dir(tmp_path, vocab_file):
    from transformers import BertTokenizer as HFBertTokenizer

    path = tmp_path / "hf"
    HFBertTokenizer(vocab_file, do_lower_case=True).save_pretrained(str(path))
    return str(path)
