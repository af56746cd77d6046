"""
Vocabulary files for BERT tokenizers.

A vocabulary maps tokens (words and word pieces) to integer IDs. Two formats are read:

- vocab.txt: one token per line, the line number (0-indexed) is the token's ID.
- vocab.json: either a list of tokens (position is the ID) or a token -> ID object.
"""

import collections
import json
import os
from typing import Dict, Mapping

from bert_wordpiece.errors import ConfigurationError


def load_vocab(vocab_file: str) -> Dict[str, int]:
    """
    Load a line-delimited vocabulary file.

    Args:
        vocab_file (str): Path to the vocabulary file (e.g. "vocab.txt").

    Returns:
        Dict[str, int]: Ordered mapping from token to ID.
    """
    if not os.path.isfile(vocab_file):
        raise ConfigurationError(f"Vocabulary file not found: {vocab_file}")

    vocab = collections.OrderedDict()
    with open(vocab_file, "r", encoding="utf-8") as reader:
        for index, token in enumerate(reader):
            # Only the line terminator is stripped, tokens may contain spaces
            token = token.rstrip("\n")
            if token in vocab:
                raise ConfigurationError(f"Duplicate token {token!r} on line {index + 1} of {vocab_file}")
            vocab[token] = index

    return vocab


def load_vocab_json(vocab_file: str) -> Dict[str, int]:
    """
    Load a JSON vocabulary file.

    Args:
        vocab_file (str): Path to a JSON list of tokens or a JSON token -> ID object.

    Returns:
        Dict[str, int]: Ordered mapping from token to ID.
    """
    if not os.path.isfile(vocab_file):
        raise ConfigurationError(f"Vocabulary file not found: {vocab_file}")

    with open(vocab_file, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Malformed vocabulary file {vocab_file}: {e}") from e

    if isinstance(data, list):
        vocab = collections.OrderedDict()
        for index, token in enumerate(data):
            if token in vocab:
                raise ConfigurationError(f"Duplicate token {token!r} at position {index} of {vocab_file}")
            vocab[token] = index
        return vocab
    if isinstance(data, dict):
        return collections.OrderedDict(sorted(data.items(), key=lambda item: item[1]))

    raise ConfigurationError(f"{vocab_file} must hold a JSON list or object, got {type(data).__name__}")


def save_vocab(vocabulary: Mapping[str, int], vocab_file: str) -> None:
    """
    Write a vocabulary as a line-delimited file ordered by ID.

    Args:
        vocabulary (Mapping[str, int]): Token to ID mapping with IDs 0..n-1.
        vocab_file (str): Destination path.
    """
    ordered = sorted(vocabulary.items(), key=lambda item: item[1])
    for expected, (token, index) in enumerate(ordered):
        if index != expected:
            raise ConfigurationError(
                f"Cannot write {vocab_file}: IDs are not contiguous (token {token!r} has ID {index}, expected {expected})"
            )
        if "\n" in token:
            raise ConfigurationError(f"Cannot write {vocab_file}: token {token!r} contains a newline")

    with open(vocab_file, "w", encoding="utf-8") as writer:
        for token, _ in ordered:
            writer.write(token + "\n")
