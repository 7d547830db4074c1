# =============================================================================
# Message Tokenizer
# =============================================================================
# Converts message text into tokens (features) for the spam classifier.
#
# Tokenization is deliberately crude:
#   1. Drop every character that isn't a letter, whitespace, or ':'
#   2. Split on whitespace
#   3. Lowercase
#   4. Keep tokens longer than two bytes of UTF-8 ("né" stays, "ab" goes)
#
# Dropped characters are removed, not turned into separators, so
# "don't" becomes "dont" and "-30% on" becomes " on". Colons survive,
# which makes "promotion:" a different token from "promotion".
# =============================================================================

from dataclasses import dataclass


@dataclass
class TokenizerConfig:
    """
    Configuration for message tokenization.

    Attributes:
        min_token_length: Minimum UTF-8 byte length for a token to be included.
        keep_chars: Non-letter characters that survive cleaning.
    """
    min_token_length: int = 3
    keep_chars: str = ":"


class Tokenizer:
    """
    Converts message text into tokens for spam classification.

    Usage:
        >>> tokenizer = Tokenizer()
        >>> tokenizer.tokenize("Hi Bob, don't forget our meeting today at 4pm.")
        ['bob', 'dont', 'forget', 'our', 'meeting', 'today']
    """

    def __init__(self, config: TokenizerConfig | None = None) -> None:
        """
        Initialize the tokenizer.

        Args:
            config: Tokenizer configuration.
        """
        self.config = config or TokenizerConfig()

    def tokenize(self, message: str) -> list[str]:
        """
        Tokenize message text.

        Args:
            message: Raw message text.

        Returns:
            Tokens in message order. Empty if nothing survives cleaning.
        """
        cleaned = "".join(c for c in message if self._keep(c))

        tokens = []
        for word in cleaned.split():
            word = word.lower()
            if len(word.encode("utf-8")) < self.config.min_token_length:
                continue
            tokens.append(word)

        return tokens

    def _keep(self, char: str) -> bool:
        """Check whether a character survives cleaning."""
        return (
            char.islower()
            or char.isupper()
            or char.isspace()
            or char in self.config.keep_chars
        )


_default_tokenizer = Tokenizer()


def tokenize(message: str) -> list[str]:
    """Tokenize message text with the default configuration."""
    return _default_tokenizer.tokenize(message)
