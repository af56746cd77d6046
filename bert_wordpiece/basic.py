import unicodedata
from typing import FrozenSet, Iterable, List, Optional

from bert_wordpiece.base import Tokenizer
from bert_wordpiece.errors import InvalidArgumentError


def is_control(char: str) -> bool:
    """Return True if `char` is a Unicode control character (category Cc)."""
    return unicodedata.category(char) == "Cc"


def is_punctuation(char: str) -> bool:
    """Return True if `char` is in one of the Unicode punctuation categories (P*)."""
    return unicodedata.category(char).startswith("P")


class BasicTokenizer(Tokenizer):
    """
    Runs basic whitespace and punctuation tokenization.

    Text is cleaned of NUL, replacement and control characters, split on the
    ASCII space, optionally lowercased, and every punctuation character is
    emitted as a token of its own. Tokens in `never_split` are neither
    lowercased nor split.
    """

    def __init__(self, lowercase: bool = True, never_split: Optional[Iterable[str]] = None) -> None:
        '''
        Initialize the basic tokenizer.
            lowercase (bool): lowercase every token not listed in `never_split`.
            never_split (Iterable[str]): tokens that must be emitted whole.
        '''
        self.lowercase = lowercase
        self.never_split: FrozenSet[str] = frozenset(never_split or ())

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize a piece of text by white spaces and punctuations.

        Args:
            text (str): Input text.

        Returns:
            List[str]: Basic tokens, in order. Never contains empty strings.
        """
        if text is None or text == "":
            raise InvalidArgumentError("text to tokenize must be a non-empty string")
        if not isinstance(text, str):
            raise InvalidArgumentError("text to tokenize must be a string")

        tokens = []
        for token in self.clean(text).split(" "):
            if self.lowercase and token not in self.never_split:
                token = token.lower()
            tokens.extend(self.split_on_punctuation(token))

        return [token for token in tokens if token]

    @staticmethod
    def clean(text: str) -> str:
        """Drop NUL, U+FFFD and control characters from `text`."""
        return "".join(
            char for char in text
            if char != "\x00" and char != "\ufffd" and not is_control(char)
        )

    def split_on_punctuation(self, token: str) -> List[str]:
        """
        Split a token on punctuation characters.

        Args:
            token (str): A single whitespace-delimited token.

        Returns:
            List[str]: Runs of non-punctuation characters and single punctuation characters.
        """
        if token in self.never_split:
            return [token]

        pieces = []
        buffer = []
        for char in token:
            if is_punctuation(char):
                if buffer:
                    pieces.append("".join(buffer))
                    buffer = []
                pieces.append(char)
            else:
                buffer.append(char)
        if buffer:
            pieces.append("".join(buffer))

        return pieces
