# =============================================================================
# bayespam: A Simple Bayesian Spam Classifier
# =============================================================================
#
# Messages are cut into simple words (tokens). Each token is rated by how
# often it appeared in spam versus ham during training, and the ratings
# are combined into one spam probability. Above 0.8 the message is spam.
#
# Usage:
#   >>> from bayespam import Classifier
#   >>> classifier = Classifier()
#   >>> classifier.train_spam("Don't forget our special promotion: -30% on men shoes, only today!")
#   >>> classifier.train_ham("Hi Bob, don't forget our meeting today at 4pm.")
#   >>> classifier.identify("Lose up to 19% weight. Special promotion on our new weightloss.")
#   True
#
# =============================================================================

__version__ = "0.2.0"
__app_name__ = "bayespam"

from bayespam.config import ConfigError
from bayespam.spam import (
    INIT_RATING,
    SPAM_PROB_THRESHOLD,
    ArithmeticDegeneracy,
    Classifier,
    ClassifierStats,
    FrequencyModel,
    ModelError,
    ModelReadError,
    ModelWriteError,
    TokenCounts,
    Tokenizer,
    identify,
    score,
    tokenize,
)

__all__ = [
    "ArithmeticDegeneracy",
    "Classifier",
    "ClassifierStats",
    "ConfigError",
    "FrequencyModel",
    "INIT_RATING",
    "ModelError",
    "ModelReadError",
    "ModelWriteError",
    "SPAM_PROB_THRESHOLD",
    "TokenCounts",
    "Tokenizer",
    "__app_name__",
    "__version__",
    "identify",
    "score",
    "tokenize",
]
