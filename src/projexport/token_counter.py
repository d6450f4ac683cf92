"""Token counting for exported text.

Token counting uses OpenAI's tiktoken library, installed through the optional
``token_counting`` extra.
"""

import importlib.util
from typing import Any

from projexport.exceptions import TokenizationError, TokenizerNotAvailableError


def check_tiktoken_available() -> bool:
    """Check if the tiktoken library is available.

    Returns:
        True if tiktoken is installed, False otherwise.
    """
    return importlib.util.find_spec("tiktoken") is not None


class TokenCounter:
    """Counts tokens with the tokenizer of one model.

    The counter holds no running state, so one instance can be shared by
    concurrent exports.

    Attributes:
        model (str): Model whose tokenizer is used.
        encoder (Any): The tiktoken encoder.

    Example:
        >>> counter = TokenCounter("gpt-4")  # doctest: +SKIP
        >>> counter.count_tokens("Hello world")  # doctest: +SKIP
        2

    Raises:
        TokenizerNotAvailableError: If tiktoken is not installed.
        ValueError: If tiktoken does not know the given model.
    """

    def __init__(self, model: str):
        if not check_tiktoken_available():
            raise TokenizerNotAvailableError(
                f"Token counting was requested for model '{model}', but tiktoken is not installed."
            )
        self.model = model
        self.encoder = self._get_encoder(model)

    @staticmethod
    def _get_encoder(model: str) -> Any:
        import tiktoken

        try:
            return tiktoken.encoding_for_model(model)
        except KeyError:
            raise ValueError(
                f"Could not load tokenizer for model '{model}'. Use a model tiktoken knows, "
                "such as 'gpt-4', for an approximate count."
            )

    def count_tokens(self, text: str) -> int:
        """Count the tokens in text.

        Raises:
            TokenizationError: If the encoder fails.
        """
        try:
            return len(self.encoder.encode(text))
        except Exception as e:
            raise TokenizationError(f"Failed to tokenize text: {e}") from e
