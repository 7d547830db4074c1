# =============================================================================
# Token Frequency Model
# =============================================================================
# The learned state of the classifier: how often each token was seen in
# ham and in spam.
#
# Counters are only ever incremented. There is no way to remove a token or
# decrement a count; the whole model is replaced by loading a new one.
#
# On-disk format (the only one read or written):
#
#   {"token_table": {"special": {"ham": 0, "spam": 1}, ...}}
#
# Totals are not stored. They are rebuilt from the per-token counts on load.
# =============================================================================

import json
import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

logger = logging.getLogger(__name__)


@dataclass
class TokenCounts:
    """
    Token frequency counts.

    Attributes:
        ham: Times this token appeared in ham.
        spam: Times this token appeared in spam.
    """
    ham: int = 0
    spam: int = 0


@dataclass
class ModelStats:
    """
    Statistics about a frequency model.

    Attributes:
        token_count: Number of unique tokens in the table.
        ham_total: Sum of all ham counts.
        spam_total: Sum of all spam counts.
    """
    token_count: int = 0
    ham_total: int = 0
    spam_total: int = 0


class FrequencyModel:
    """
    Mapping from token to its ham/spam counts.

    Running totals are kept alongside the table so the estimator does
    not have to sum the whole table for every token it rates.

    Usage:
        >>> model = FrequencyModel()
        >>> model.increment_spam("promotion")
        >>> model.lookup("promotion")
        TokenCounts(ham=0, spam=1)
        >>> model.save(Path("model.json"))
    """

    def __init__(self) -> None:
        self._token_table: dict[str, TokenCounts] = {}
        self._ham_total = 0
        self._spam_total = 0

    def __len__(self) -> int:
        return len(self._token_table)

    def __contains__(self, token: object) -> bool:
        return token in self._token_table

    def __iter__(self) -> Iterator[str]:
        return iter(self._token_table)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrequencyModel):
            return NotImplemented
        return self._token_table == other._token_table

    # -------------------------------------------------------------------------
    # Counting
    # -------------------------------------------------------------------------

    def increment_spam(self, token: str) -> None:
        """Count one spam occurrence of a token."""
        self._counter(token).spam += 1
        self._spam_total += 1

    def increment_ham(self, token: str) -> None:
        """Count one ham occurrence of a token."""
        self._counter(token).ham += 1
        self._ham_total += 1

    def _counter(self, token: str) -> TokenCounts:
        counts = self._token_table.get(token)
        if counts is None:
            counts = self._token_table[token] = TokenCounts()
        return counts

    def lookup(self, token: str) -> TokenCounts | None:
        """
        Get the counts for a token.

        Returns:
            The token's counts, or None if the token was never trained.
        """
        return self._token_table.get(token)

    def ham_total(self) -> int:
        """Sum of ham counts across all tokens."""
        return self._ham_total

    def spam_total(self) -> int:
        """Sum of spam counts across all tokens."""
        return self._spam_total

    @property
    def stats(self) -> ModelStats:
        """Get model statistics."""
        return ModelStats(
            token_count=len(self._token_table),
            ham_total=self._ham_total,
            spam_total=self._spam_total,
        )

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Convert the model to its JSON document."""
        return {
            "token_table": {
                token: {"ham": counts.ham, "spam": counts.spam}
                for token, counts in self._token_table.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Any) -> "FrequencyModel":
        """
        Build a model from a parsed JSON document.

        Raises:
            ModelReadError: If the document doesn't have the expected shape.
        """
        if not isinstance(data, dict) or "token_table" not in data:
            raise ModelReadError("Model must be an object with a 'token_table' field")

        table = data["token_table"]
        if not isinstance(table, dict):
            raise ModelReadError("'token_table' must be an object")

        model = cls()
        for token, counts in table.items():
            if not isinstance(counts, dict):
                raise ModelReadError(f"Counts for token {token!r} must be an object")
            ham = _read_count(token, counts, "ham")
            spam = _read_count(token, counts, "spam")
            model._token_table[token] = TokenCounts(ham=ham, spam=spam)
            model._ham_total += ham
            model._spam_total += spam

        return model

    @classmethod
    def load(cls, path: Path | str) -> "FrequencyModel":
        """
        Load a model from a JSON file.

        Args:
            path: File to read.

        Raises:
            ModelReadError: If the file is missing, unreadable, or malformed.
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ModelReadError(f"Model file not found: {path}") from e
        except OSError as e:
            raise ModelReadError(f"Could not read model file {path}: {e}") from e
        except (ValueError, RecursionError) as e:
            # JSONDecodeError, UnicodeDecodeError and oversized int literals
            raise ModelReadError(f"Invalid model file {path}: {e}") from e

        model = cls.from_dict(data)
        logger.info(f"Loaded model from {path} ({len(model)} tokens)")
        return model

    def save(self, path: Path | str, *, pretty: bool = False) -> None:
        """
        Save the model to a JSON file.

        The document is written to a temporary file next to the destination
        and then moved into place, so the destination either holds the old
        model or the complete new one.

        Args:
            path: File to write. Parent directories are created.
            pretty: Indent the output for humans.

        Raises:
            ModelWriteError: If the destination can't be created or written.
        """
        path = Path(path)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                json.dump(self.to_dict(), f, indent=2 if pretty else None)
            # NamedTemporaryFile is 0600; keep the mode open() would give
            os.chmod(tmp_name, _file_mode(path))
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise ModelWriteError(f"Could not write model file {path}: {e}") from e

        logger.info(f"Saved model to {path} ({len(self)} tokens)")


def _file_mode(path: Path) -> int:
    """Permissions for a saved model: the current file's, else 0666 minus umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _read_count(token: str, counts: dict[str, Any], field_name: str) -> int:
    """Validate one count field of a serialized counter."""
    value = counts.get(field_name)
    # bool is an int subclass; true/false are not counts
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ModelReadError(
            f"'{field_name}' count for token {token!r} must be a non-negative integer"
        )
    return value


# =============================================================================
# Exceptions
# =============================================================================

class ModelError(Exception):
    """Base exception for model persistence."""
    pass


class ModelReadError(ModelError):
    """Raised when a model file is missing, unreadable, or malformed."""
    pass


class ModelWriteError(ModelError):
    """Raised when a model file can't be written."""
    pass
