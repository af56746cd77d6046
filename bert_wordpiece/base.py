from abc import ABC, abstractmethod
from typing import FrozenSet, Iterable, List

from bert_wordpiece.errors import UnsupportedOperationError


class Tokenizer(ABC):
    """
    A parent class for the BERT tokenizers.

    Every tokenizer can `tokenize`. The other operations and the special token
    accessors are optional: a subclass lists what it implements in
    `capabilities`, and anything else raises `UnsupportedOperationError`.
    """

    # Operations and accessors implemented by the subclass
    capabilities: FrozenSet[str] = frozenset({"tokenize"})

    @classmethod
    def supports(cls, capability: str) -> bool:
        """Return True if the tokenizer implements `capability`."""
        return capability in cls.capabilities

    def _unsupported(self, capability: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(capability, type(self).__name__)

    @abstractmethod
    def tokenize(self, text: str) -> List[str]:
        """Split a piece of text into tokens."""

    def encode(self, tokens: Iterable[str]) -> List[int]:
        """Convert tokens into their vocabulary IDs."""
        raise self._unsupported("encode")

    def decode(self, ids: Iterable[int]) -> List[str]:
        """Convert vocabulary IDs back into tokens."""
        raise self._unsupported("decode")

    def detokenize(self, tokens: Iterable[str]) -> str:
        """Join tokens back into a plain string."""
        raise self._unsupported("detokenize")

    @property
    def beginning_token(self) -> str:
        raise self._unsupported("beginning_token")

    @property
    def end_token(self) -> str:
        raise self._unsupported("end_token")

    @property
    def classifier_token(self) -> str:
        raise self._unsupported("classifier_token")

    @property
    def mask_token(self) -> str:
        raise self._unsupported("mask_token")

    @property
    def pad_token(self) -> str:
        raise self._unsupported("pad_token")

    @property
    def separator_token(self) -> str:
        raise self._unsupported("separator_token")

    @property
    def unknown_token(self) -> str:
        raise self._unsupported("unknown_token")
