from types import MappingProxyType
from typing import List, Mapping

from bert_wordpiece.base import Tokenizer
from bert_wordpiece.errors import InvalidArgumentError


class WordpieceTokenizer(Tokenizer):
    """
    Runs WordPiece tokenization on text already split by `BasicTokenizer`.

    Uses a greedy longest-match-first algorithm against a fixed vocabulary.
    Pieces that do not start a word are looked up with a '##' prefix.
    """

    capabilities = frozenset({"tokenize", "unknown_token"})

    def __init__(
        self,
        vocabulary: Mapping[str, int],
        unknown_token: str = "[UNK]",
        max_chars_per_word: int = 200,
    ) -> None:
        '''
        Initialize the WordPiece tokenizer.
            vocabulary (Mapping[str, int]): token to ID mapping used for lookups.
            unknown_token (str): token emitted for words that cannot be split.
            max_chars_per_word (int): words longer than this become `unknown_token`.
        '''
        self.vocabulary = MappingProxyType(dict(vocabulary))
        self._unknown_token = unknown_token
        self.max_chars_per_word = max_chars_per_word

    @property
    def unknown_token(self) -> str:
        return self._unknown_token

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize a word (or space separated words) into word pieces.

        For example, "unaffable" becomes ["un", "##aff", "##able"].

        Args:
            text (str): A single token or space separated tokens.

        Returns:
            List[str]: WordPiece tokens.
        """
        if text is None:
            raise InvalidArgumentError("text to tokenize must not be None")
        if not isinstance(text, str):
            raise InvalidArgumentError("text to tokenize must be a string")

        result = []
        for word in text.strip().split(" "):
            result.extend(self.encode_word(word))
        return result

    def encode_word(self, word: str) -> List[str]:
        """
        Encode a single word into word pieces.

        Args:
            word (str): Word without spaces.

        Returns:
            List[str]: Word pieces, or [unknown_token] if the word is too long or
            contains a position where no piece of the vocabulary matches.
        """
        if len(word) > self.max_chars_per_word:
            return [self._unknown_token]

        pieces = []
        start = 0
        while start < len(word):
            end = len(word)
            match = None
            # Try the longest remaining substring first
            while start < end:
                piece = word[start:end]
                if start > 0:
                    piece = f"##{piece}"
                if piece in self.vocabulary:
                    match = piece
                    break
                end -= 1

            if match is None:
                return [self._unknown_token]

            pieces.append(match)
            start = end

        return pieces
