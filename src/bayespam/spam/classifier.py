# =============================================================================
# Bayesian Spam Classifier
# =============================================================================
# Scores a message by combining per-token spam ratings.
#
# How it works:
#   1. During training, every token occurrence bumps its ham or spam count
#   2. Each token of a message gets a rating in [0.01, 0.99]:
#        - never seen              -> 0.4 (slightly hammy prior)
#        - only seen in spam       -> 0.99
#        - only seen in ham        -> 0.01
#        - seen in both            -> P(token|spam) / (P(token|ham) + P(token|spam))
#   3. Ratings are combined with
#        score = Π r / (Π r + Π (1 - r))
#
# Long messages (more than 20 tokens) are scored on their 10 lowest and
# 10 highest ratings only.
# =============================================================================

import logging
import math
from dataclasses import dataclass
from pathlib import Path

from bayespam.spam.model import FrequencyModel
from bayespam.spam.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


# Rating for tokens the model has never seen
INIT_RATING = 0.4

# Ratings for tokens seen in only one class
SPAM_ONLY_RATING = 0.99
HAM_ONLY_RATING = 0.01

# Floor for ratings of tokens seen in both classes
MIN_RATING = 0.01

# Scores above this are spam
SPAM_PROB_THRESHOLD = 0.8

# Messages with more ratings than this are truncated to their tails
MAX_RATINGS = 20
TAIL_SIZE = 10


@dataclass
class ClassifierStats:
    """
    Statistics about the classifier.

    Attributes:
        spam_total: Number of spam token occurrences trained on.
        ham_total: Number of ham token occurrences trained on.
        token_count: Number of unique tokens in vocabulary.
    """
    spam_total: int = 0
    ham_total: int = 0
    token_count: int = 0


class Classifier:
    """
    Bayesian spam classifier.

    Usage:
        >>> classifier = Classifier()
        >>> classifier.train_spam("Don't forget our special promotion: -30% on men shoes, only today!")
        >>> classifier.train_ham("Hi Bob, don't forget our meeting today at 4pm.")
        >>> classifier.identify("Lose up to 19% weight. Special promotion on our new weightloss.")
        True
        >>> classifier.save(Path("model.json"))

    Attributes:
        model: Token frequency model.
        tokenizer: Tokenizer for extracting tokens from messages.
    """

    def __init__(
        self,
        model: FrequencyModel | None = None,
        tokenizer: Tokenizer | None = None,
    ) -> None:
        """
        Initialize the classifier.

        Args:
            model: Frequency model to use. Creates an empty one if None.
            tokenizer: Tokenizer instance. Creates default if None.
        """
        self.model = model if model is not None else FrequencyModel()
        self.tokenizer = tokenizer or Tokenizer()

    @classmethod
    def from_file(cls, path: Path | str, tokenizer: Tokenizer | None = None) -> "Classifier":
        """
        Build a classifier from a saved model.

        Raises:
            ModelReadError: If the file is missing, unreadable, or malformed.
        """
        return cls(model=FrequencyModel.load(path), tokenizer=tokenizer)

    def save(self, path: Path | str, *, pretty: bool = False) -> None:
        """
        Save the model to disk.

        Args:
            path: File to write.
            pretty: Indent the JSON output.

        Raises:
            ModelWriteError: If the file can't be written.
        """
        self.model.save(path, pretty=pretty)

    @property
    def stats(self) -> ClassifierStats:
        """Get classifier statistics."""
        return ClassifierStats(
            spam_total=self.model.spam_total(),
            ham_total=self.model.ham_total(),
            token_count=len(self.model),
        )

    @property
    def is_trained(self) -> bool:
        """Returns True if the classifier has seen both spam and ham."""
        return self.model.spam_total() > 0 and self.model.ham_total() > 0

    # -------------------------------------------------------------------------
    # Training
    # -------------------------------------------------------------------------

    def train_spam(self, message: str) -> None:
        """Train the classifier with a spam message."""
        tokens = self.tokenizer.tokenize(message)
        for token in tokens:
            self.model.increment_spam(token)
        logger.debug(f"Trained spam message with {len(tokens)} tokens")

    def train_ham(self, message: str) -> None:
        """Train the classifier with a ham message."""
        tokens = self.tokenizer.tokenize(message)
        for token in tokens:
            self.model.increment_ham(token)
        logger.debug(f"Trained ham message with {len(tokens)} tokens")

    def train(self, message: str, *, is_spam: bool) -> None:
        """
        Train the classifier on a labeled message.

        Every token occurrence counts, so a word repeated five times adds
        five to its count.

        Args:
            message: Message to learn from.
            is_spam: True if message is spam, False if ham.
        """
        if is_spam:
            self.train_spam(message)
        else:
            self.train_ham(message)

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def estimate(self, token: str) -> float:
        """
        Rate how strongly a single token indicates spam.

        Args:
            token: A normalized token.

        Returns:
            Spam rating in [0.01, 0.99], or INIT_RATING for unknown tokens.
        """
        counts = self.model.lookup(token)
        if counts is None:
            return INIT_RATING

        if counts.spam > 0 and counts.ham == 0:
            return SPAM_ONLY_RATING
        if counts.spam == 0 and counts.ham > 0:
            return HAM_ONLY_RATING

        ham_total = self.model.ham_total()
        spam_total = self.model.spam_total()
        if spam_total > 0 and ham_total > 0:
            ham_prob = counts.ham / ham_total
            spam_prob = counts.spam / spam_total
            return max(MIN_RATING, spam_prob / (ham_prob + spam_prob))

        return INIT_RATING

    def score(self, message: str) -> float:
        """
        Calculate the spam score of a message.

        Args:
            message: Message to score.

        Returns:
            Spam probability (0.0 = definitely ham, 1.0 = definitely spam).
            Returns exactly 0.0 if the message has no tokens.

        Raises:
            ArithmeticDegeneracy: If both rating products underflow to zero.
        """
        ratings = [self.estimate(token) for token in self.tokenizer.tokenize(message)]
        if not ratings:
            return 0.0

        result = combine_ratings(ratings)
        logger.debug(f"Scored message with {len(ratings)} tokens: {result:.4f}")
        return result

    def identify(self, message: str) -> bool:
        """
        Decide whether a message is spam.

        Returns:
            True if the score is above SPAM_PROB_THRESHOLD.
        """
        return self.score(message) > SPAM_PROB_THRESHOLD


def select_ratings(ratings: list[float]) -> list[float]:
    """
    Pick the ratings that take part in scoring.

    Up to MAX_RATINGS ratings are all used. Beyond that only the
    TAIL_SIZE lowest and TAIL_SIZE highest are kept.
    """
    if len(ratings) <= MAX_RATINGS:
        return ratings

    ordered = sorted(ratings)
    logger.debug(f"Truncating {len(ratings)} ratings to {2 * TAIL_SIZE}")
    return ordered[:TAIL_SIZE] + ordered[-TAIL_SIZE:]


def combine_ratings(ratings: list[float]) -> float:
    """
    Combine token ratings into one score.

    Args:
        ratings: Non-empty list of token ratings.

    Returns:
        Π r / (Π r + Π (1 - r)) over the selected ratings.

    Raises:
        ArithmeticDegeneracy: If both products are zero.
    """
    selected = select_ratings(ratings)

    product = math.prod(selected)
    alt_product = math.prod(1.0 - r for r in selected)

    denominator = product + alt_product
    if denominator == 0.0:
        raise ArithmeticDegeneracy(
            f"Both rating products vanished for {len(selected)} ratings"
        )

    return product / denominator


# =============================================================================
# Model File Shortcuts
# =============================================================================

def score(message: str, model_path: Path | str) -> float:
    """
    Score a message against a saved model.

    Args:
        message: Message to score.
        model_path: Model file to load.

    Raises:
        ModelReadError: If the model can't be loaded.
    """
    return Classifier.from_file(model_path).score(message)


def identify(message: str, model_path: Path | str) -> bool:
    """
    Decide whether a message is spam using a saved model.

    Raises:
        ModelReadError: If the model can't be loaded.
    """
    return score(message, model_path) > SPAM_PROB_THRESHOLD


# =============================================================================
# Exceptions
# =============================================================================

class ArithmeticDegeneracy(ArithmeticError):
    """Raised when a score can't be computed because both products are zero."""
    pass
