# =============================================================================
# Spam Module
# =============================================================================
# Bayesian spam classification based on token frequencies.
#
#   - tokenizer:  message text -> tokens
#   - model:      token -> (ham, spam) counts, JSON persistence
#   - classifier: per-token ratings, combined score, spam/ham decision
# =============================================================================

from bayespam.spam.classifier import (
    INIT_RATING,
    SPAM_PROB_THRESHOLD,
    ArithmeticDegeneracy,
    Classifier,
    ClassifierStats,
    identify,
    score,
)
from bayespam.spam.model import (
    FrequencyModel,
    ModelError,
    ModelReadError,
    ModelStats,
    ModelWriteError,
    TokenCounts,
)
from bayespam.spam.tokenizer import Tokenizer, TokenizerConfig, tokenize

__all__ = [
    "ArithmeticDegeneracy",
    "Classifier",
    "ClassifierStats",
    "FrequencyModel",
    "INIT_RATING",
    "ModelError",
    "ModelReadError",
    "ModelStats",
    "ModelWriteError",
    "SPAM_PROB_THRESHOLD",
    "TokenCounts",
    "Tokenizer",
    "TokenizerConfig",
    "identify",
    "score",
    "tokenize",
]
