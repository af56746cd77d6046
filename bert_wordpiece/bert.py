"""
BERT tokenizer.

Text goes through three stages:

1. Special tokens ([CLS], [SEP], ...) are cut out of the text so they survive whole.
2. `BasicTokenizer` cleans the remaining text and splits it on spaces and punctuation.
3. `WordpieceTokenizer` splits every basic token into vocabulary word pieces.

Example:
    "Hello, unaffable world [SEP]"
    -> ["hello", ",", "un", "##aff", "##able", "world", "[SEP]"]

[CLS] and [SEP] are never added automatically.
"""

import json
import logging
import os
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from bert_wordpiece.base import Tokenizer
from bert_wordpiece.basic import BasicTokenizer
from bert_wordpiece.errors import ConfigurationError, InvalidArgumentError
from bert_wordpiece.vocab import load_vocab, load_vocab_json, save_vocab
from bert_wordpiece.wordpiece import WordpieceTokenizer

logger = logging.getLogger(__name__)

VOCAB_FILE_NAME = "vocab.txt"
CONFIG_FILE_NAME = "tokenizer_config.json"

# Keyword arguments that may be stored in tokenizer_config.json
CONFIG_KEYS = (
    "lowercase",
    "classifier_token",
    "mask_token",
    "pad_token",
    "separator_token",
    "unknown_token",
    "max_chars_per_word",
)


def build_vocabularies(
    vocabulary: Union[Sequence[str], Mapping[str, int]]
) -> Tuple[Mapping[str, int], Mapping[int, str]]:
    """
    Build the token -> ID and ID -> token mappings in one pass.

    Args:
        vocabulary: Either tokens in ID order or a token -> ID mapping.

    Returns:
        Tuple of read-only (vocabulary, inverse vocabulary) mappings.
    """
    if isinstance(vocabulary, str):
        raise ConfigurationError("vocabulary must be a sequence of tokens or a mapping, not a string")

    if isinstance(vocabulary, Mapping):
        items = vocabulary.items()
    else:
        items = ((token, index) for index, token in enumerate(vocabulary))

    forward: Dict[str, int] = {}
    inverse: Dict[int, str] = {}
    for token, index in items:
        if not isinstance(token, str):
            raise ConfigurationError(f"Vocabulary tokens must be strings, got {token!r}")
        if not isinstance(index, int) or isinstance(index, bool) or index < 0:
            raise ConfigurationError(f"Token {token!r} has an invalid ID {index!r}")
        if token in forward:
            raise ConfigurationError(f"Duplicate token {token!r} in vocabulary")
        if index in inverse:
            raise ConfigurationError(f"ID {index} is assigned to both {inverse[index]!r} and {token!r}")
        forward[token] = index
        inverse[index] = token

    return MappingProxyType(forward), MappingProxyType(inverse)


class BertTokenizer(Tokenizer):
    """
    End-to-end BERT tokenizer: special token splitting, basic tokenization and WordPiece.

    Args:
        vocabulary: Tokens in ID order, or a token -> ID mapping.
        lowercase (bool): Lowercase text before WordPiece. Special tokens are never lowercased.
        classifier_token (str): Classifier token.
        mask_token (str): Mask token for masked language modeling.
        pad_token (str): Pad token for batching.
        separator_token (str): Separator token between sentences.
        unknown_token (str): Token used for out-of-vocabulary words and IDs.
        max_chars_per_word (int): Words longer than this become the unknown token.

    Example:
        >>> tokenizer = BertTokenizer(["[CLS]", "hello", "world", "[SEP]", "[UNK]", ","])
        >>> tokenizer.encode(tokenizer.tokenize("Hello , world"))
        [1, 5, 2]
    """

    capabilities = frozenset({
        "tokenize",
        "encode",
        "decode",
        "detokenize",
        "classifier_token",
        "mask_token",
        "pad_token",
        "separator_token",
        "unknown_token",
    })

    def __init__(
        self,
        vocabulary: Union[Sequence[str], Mapping[str, int]],
        lowercase: bool = True,
        classifier_token: str = "[CLS]",
        mask_token: str = "[MASK]",
        pad_token: str = "[PAD]",
        separator_token: str = "[SEP]",
        unknown_token: str = "[UNK]",
        max_chars_per_word: int = 200,
    ) -> None:
        self._vocabulary, self._inverse_vocabulary = build_vocabularies(vocabulary)

        self.special_tokens: Tuple[str, ...] = (
            classifier_token,
            mask_token,
            pad_token,
            separator_token,
            unknown_token,
        )
        for token in self.special_tokens:
            if not isinstance(token, str) or not token:
                raise ConfigurationError(f"Special tokens must be non-empty strings, got {token!r}")
        self._special_token_set = frozenset(self.special_tokens)

        self._classifier_token = classifier_token
        self._mask_token = mask_token
        self._pad_token = pad_token
        self._separator_token = separator_token
        self._unknown_token = unknown_token

        self.basic_tokenizer = BasicTokenizer(lowercase=lowercase, never_split=self.special_tokens)
        self.wordpiece_tokenizer = WordpieceTokenizer(
            self._vocabulary,
            unknown_token=unknown_token,
            max_chars_per_word=max_chars_per_word,
        )

        if unknown_token not in self._vocabulary:
            logger.warning("Unknown token %r is not in the vocabulary, encoding unknown tokens will fail", unknown_token)
        logger.debug("Created %s with %d tokens (lowercase=%s)", type(self).__name__, len(self._vocabulary), lowercase)

    @property
    def lowercase(self) -> bool:
        return self.basic_tokenizer.lowercase

    # -- Special tokens

    @property
    def classifier_token(self) -> str:
        return self._classifier_token

    @property
    def mask_token(self) -> str:
        return self._mask_token

    @property
    def pad_token(self) -> str:
        return self._pad_token

    @property
    def separator_token(self) -> str:
        return self._separator_token

    @property
    def unknown_token(self) -> str:
        return self._unknown_token

    @property
    def unknown_token_id(self) -> int:
        """ID of the unknown token. Raises ConfigurationError if it is not in the vocabulary."""
        try:
            return self._vocabulary[self._unknown_token]
        except KeyError:
            raise ConfigurationError(
                f"Unknown token {self._unknown_token!r} is not in the vocabulary"
            ) from None

    # -- Vocabulary

    @property
    def vocabulary(self) -> Mapping[str, int]:
        """Read-only token -> ID mapping."""
        return self._vocabulary

    @property
    def vocab_size(self) -> int:
        return len(self._vocabulary)

    def __len__(self) -> int:
        return len(self._vocabulary)

    # -- Tokenization

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize a piece of text into BERT tokens.

        Args:
            text (str): Input text. Empty or whitespace-only text gives no tokens.

        Returns:
            List[str]: Tokens, with every special token kept as a single token.
        """
        if text is None:
            return []
        if not isinstance(text, str):
            raise InvalidArgumentError("text to tokenize must be a string")
        if not text.strip():
            return []

        # One pass per special token, segments that are already special are kept as they are
        segments = [text]
        for special_token in self.special_tokens:
            pending = []
            for segment in segments:
                if segment in self._special_token_set:
                    pending.append(segment)
                else:
                    pending.extend(self.split_on_token(segment, special_token))
            segments = pending

        tokens = []
        for segment in segments:
            if segment in self._special_token_set:
                tokens.append(segment)
            else:
                tokens.extend(self._tokenize_segment(segment))
        return tokens

    @staticmethod
    def split_on_token(text: str, token: str) -> List[str]:
        """
        Split `text` on every occurrence of `token`, keeping `token` as a segment.

        Args:
            text (str): Text to split.
            token (str): Literal token to split on.

        Returns:
            List[str]: Stripped non-empty pieces with `token` between the pieces it separated.
        """
        segments = []
        for i, piece in enumerate(text.split(token)):
            if i > 0:
                segments.append(token)
            piece = piece.strip()
            if piece:
                segments.append(piece)
        return segments

    def _tokenize_segment(self, segment: str) -> List[str]:
        return [
            piece
            for token in self.basic_tokenizer.tokenize(segment)
            for piece in self.wordpiece_tokenizer.tokenize(token)
        ]

    # -- Encoding

    def encode(self, tokens: Iterable[str]) -> List[int]:
        """
        Encode tokens into their vocabulary IDs.

        Args:
            tokens (Iterable[str]): Input tokens.

        Returns:
            List[int]: IDs. Tokens missing from the vocabulary get the unknown token's ID.
        """
        if isinstance(tokens, str):
            raise InvalidArgumentError("encode expects a sequence of tokens, not a string")

        ids = []
        for token in tokens:
            index = self._vocabulary.get(token)
            ids.append(self.unknown_token_id if index is None else index)
        return ids

    def decode(self, ids: Iterable[int]) -> List[str]:
        """
        Decode vocabulary IDs into tokens.

        Args:
            ids (Iterable[int]): Vocabulary IDs.

        Returns:
            List[str]: Tokens. IDs missing from the vocabulary decode to the unknown token.
        """
        if isinstance(ids, (str, bytes)):
            raise InvalidArgumentError("decode expects a sequence of IDs")

        tokens = []
        for index in ids:
            # bool and float would otherwise match integer keys by hash
            if not isinstance(index, int) or isinstance(index, bool):
                raise InvalidArgumentError(f"IDs must be integers, got {index!r}")
            tokens.append(self._inverse_vocabulary.get(index, self._unknown_token))
        return tokens

    def detokenize(self, tokens: Iterable[str]) -> str:
        """
        Join tokens into a plain string, merging '##' continuation pieces.

        This does NOT reconstruct the original text: spacing around punctuation and casing are lost.

        Args:
            tokens (Iterable[str]): Input tokens.

        Returns:
            str: Detokenized string.
        """
        if isinstance(tokens, str):
            raise InvalidArgumentError("detokenize expects a sequence of tokens, not a string")
        return " ".join(tokens).replace(" ##", "").strip()

    def encode_text(self, text: str) -> List[int]:
        """Tokenize and encode `text` without adding [CLS] or [SEP]."""
        return self.encode(self.tokenize(text))

    def decode_text(self, ids: Iterable[int]) -> str:
        """Decode and detokenize `ids`."""
        return self.detokenize(self.decode(ids))

    # -- Resources

    def config(self) -> Dict[str, Union[bool, int, str]]:
        """Return the constructor options needed to rebuild this tokenizer."""
        return {
            "lowercase": self.lowercase,
            "classifier_token": self._classifier_token,
            "mask_token": self._mask_token,
            "pad_token": self._pad_token,
            "separator_token": self._separator_token,
            "unknown_token": self._unknown_token,
            "max_chars_per_word": self.wordpiece_tokenizer.max_chars_per_word,
        }

    def save_resources(self, path: str) -> None:
        """
        Save the vocabulary and the configuration.

        Args:
            path (str): Directory where 'vocab.txt' and 'tokenizer_config.json' will be saved.
        """
        os.makedirs(path, exist_ok=True)
        save_vocab(self._vocabulary, os.path.join(path, VOCAB_FILE_NAME))
        with open(os.path.join(path, CONFIG_FILE_NAME), "w", encoding="utf-8") as f:
            json.dump(self.config(), f, ensure_ascii=False, indent=2)
        logger.info("Saved %s resources to %s", type(self).__name__, path)

    @classmethod
    def load_resources(cls, path: str, **overrides) -> "BertTokenizer":
        """
        Load a tokenizer saved with `save_resources`.

        Args:
            path (str): Directory holding 'vocab.txt' and, optionally, 'tokenizer_config.json'.
            **overrides: Constructor options that take precedence over the saved ones.
        """
        vocabulary = load_vocab(os.path.join(path, VOCAB_FILE_NAME))

        options = {}
        config_file = os.path.join(path, CONFIG_FILE_NAME)
        if os.path.isfile(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                try:
                    options = json.load(f)
                except json.JSONDecodeError as e:
                    raise ConfigurationError(f"Malformed tokenizer config {config_file}: {e}") from e
            if not isinstance(options, dict):
                raise ConfigurationError(f"{config_file} must hold a JSON object")
            unknown_keys = set(options) - set(CONFIG_KEYS)
            if unknown_keys:
                raise ConfigurationError(f"Unknown options in {config_file}: {', '.join(sorted(unknown_keys))}")

        options.update(overrides)
        logger.info("Loaded %d tokens from %s", len(vocabulary), path)
        return cls(vocabulary, **options)

    @classmethod
    def from_vocab_file(cls, vocab_file: str, **options) -> "BertTokenizer":
        """
        Create a tokenizer from a 'vocab.txt' or 'vocab.json' file.

        Args:
            vocab_file (str): Path to the vocabulary; '.json' files are read as JSON.
            **options: Constructor options (lowercase, special tokens, ...).
        """
        if vocab_file.lower().endswith(".json"):
            vocabulary = load_vocab_json(vocab_file)
        else:
            vocabulary = load_vocab(vocab_file)
        return cls(vocabulary, **options)

    @classmethod
    def from_huggingface(cls, name_or_path: str, lowercase: Optional[bool] = None, **options) -> "BertTokenizer":
        """
        Create a tokenizer from the vocabulary of a pretrained Hugging Face tokenizer.

        Args:
            name_or_path (str): Model name on the Hub (e.g. "bert-base-uncased") or a local directory.
            lowercase (bool, optional): Defaults to the pretrained tokenizer's `do_lower_case`.
            **options: Other constructor options; special tokens default to the pretrained ones.
        """
        from transformers import AutoTokenizer

        hf_tokenizer = AutoTokenizer.from_pretrained(name_or_path)
        if lowercase is None:
            lowercase = getattr(hf_tokenizer, "do_lower_case", True)

        special_tokens = {
            "classifier_token": hf_tokenizer.cls_token,
            "mask_token": hf_tokenizer.mask_token,
            "pad_token": hf_tokenizer.pad_token,
            "separator_token": hf_tokenizer.sep_token,
            "unknown_token": hf_tokenizer.unk_token,
        }
        for key, value in special_tokens.items():
            if value is not None:
                options.setdefault(key, str(value))

        return cls(hf_tokenizer.get_vocab(), lowercase=lowercase, **options)
