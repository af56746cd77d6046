"""BERT WordPiece tokenization: basic, WordPiece and end-to-end BERT tokenizers."""

from bert_wordpiece.errors import (
    ConfigurationError,
    InvalidArgumentError,
    TokenizerError,
    UnsupportedOperationError,
)
from bert_wordpiece.base import Tokenizer
from bert_wordpiece.basic import BasicTokenizer
from bert_wordpiece.wordpiece import WordpieceTokenizer
from bert_wordpiece.bert import BertTokenizer
from bert_wordpiece.vocab import load_vocab, load_vocab_json, save_vocab

__all__ = [
    "Tokenizer",
    "BasicTokenizer",
    "WordpieceTokenizer",
    "BertTokenizer",
    "load_vocab",
    "load_vocab_json",
    "save_vocab",
    "TokenizerError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
    "ConfigurationError",
]
