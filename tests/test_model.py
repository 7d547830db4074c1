"""Tests for the token frequency model and its JSON persistence."""

import json
import os
import stat

import pytest

from bayespam.spam import FrequencyModel, ModelReadError, ModelWriteError, TokenCounts


@pytest.fixture
def model():
    """A small model with tokens in spam, ham, and both."""
    model = FrequencyModel()
    for _ in range(3):
        model.increment_spam("promotion")
    model.increment_spam("special")
    model.increment_ham("special")
    model.increment_ham("meeting")
    model.increment_ham("meeting")
    return model


class TestCounting:
    """Incrementing and looking up counters."""

    def test_empty_model(self):
        model = FrequencyModel()
        assert len(model) == 0
        assert model.ham_total() == 0
        assert model.spam_total() == 0
        assert model.lookup("anything") is None

    def test_counter_created_on_first_increment(self):
        model = FrequencyModel()
        model.increment_spam("xyzzy")
        assert model.lookup("xyzzy") == TokenCounts(ham=0, spam=1)
        assert "xyzzy" in model

    def test_lookup(self, model):
        assert model.lookup("promotion") == TokenCounts(ham=0, spam=3)
        assert model.lookup("special") == TokenCounts(ham=1, spam=1)
        assert model.lookup("meeting") == TokenCounts(ham=2, spam=0)
        assert model.lookup("unknown") is None

    def test_totals(self, model):
        assert model.spam_total() == 4
        assert model.ham_total() == 3

    def test_totals_match_counter_sums(self, model):
        counters = [model.lookup(token) for token in model]
        assert model.ham_total() == sum(c.ham for c in counters)
        assert model.spam_total() == sum(c.spam for c in counters)

    def test_stats(self, model):
        stats = model.stats
        assert stats.token_count == 3
        assert stats.spam_total == 4
        assert stats.ham_total == 3


class TestSerialization:
    """Dict conversion and file round trips."""

    def test_to_dict(self, model):
        assert model.to_dict() == {
            "token_table": {
                "promotion": {"ham": 0, "spam": 3},
                "special": {"ham": 1, "spam": 1},
                "meeting": {"ham": 2, "spam": 0},
            }
        }

    def test_from_dict_rebuilds_totals(self, model):
        loaded = FrequencyModel.from_dict(model.to_dict())
        assert loaded == model
        assert loaded.ham_total() == 3
        assert loaded.spam_total() == 4

    @pytest.mark.parametrize("pretty", [False, True])
    def test_file_round_trip(self, temp_dir, model, pretty):
        path = temp_dir / "model.json"
        model.save(path, pretty=pretty)

        loaded = FrequencyModel.load(path)
        assert loaded == model
        assert loaded.stats == model.stats

    def test_pretty_output_is_indented(self, temp_dir, model):
        compact = temp_dir / "compact.json"
        pretty = temp_dir / "pretty.json"
        model.save(compact)
        model.save(pretty, pretty=True)

        assert "\n" not in compact.read_text().strip()
        assert "\n  " in pretty.read_text()
        assert json.loads(compact.read_text()) == json.loads(pretty.read_text())

    def test_save_creates_parent_directories(self, temp_dir, model):
        path = temp_dir / "nested" / "dir" / "model.json"
        model.save(path)
        assert FrequencyModel.load(path) == model

    def test_save_overwrites_without_leftovers(self, temp_dir, model):
        path = temp_dir / "model.json"
        FrequencyModel().save(path)
        model.save(path)

        assert FrequencyModel.load(path) == model
        assert os.listdir(temp_dir) == ["model.json"]

    def test_new_file_gets_default_mode(self, temp_dir, model):
        umask = os.umask(0o022)
        try:
            path = temp_dir / "model.json"
            model.save(path)
            assert stat.S_IMODE(path.stat().st_mode) == 0o644
        finally:
            os.umask(umask)

    def test_save_keeps_existing_mode(self, temp_dir, model):
        path = temp_dir / "model.json"
        FrequencyModel().save(path)
        path.chmod(0o640)

        model.save(path)
        assert stat.S_IMODE(path.stat().st_mode) == 0o640

    def test_empty_model_round_trip(self, temp_dir):
        path = temp_dir / "model.json"
        FrequencyModel().save(path)
        assert json.loads(path.read_text()) == {"token_table": {}}
        assert len(FrequencyModel.load(path)) == 0


class TestErrors:
    """Read and write failures surface as typed errors."""

    def test_missing_file(self, temp_dir):
        with pytest.raises(ModelReadError, match="not found"):
            FrequencyModel.load(temp_dir / "missing.json")

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "model.json"
        path.write_text("{not json")
        with pytest.raises(ModelReadError):
            FrequencyModel.load(path)

    @pytest.mark.parametrize(
        "document",
        [
            [],
            {},
            {"token_table": []},
            {"token_table": {"spam": [1, 2]}},
            {"token_table": {"spam": {"ham": 1}}},
            {"token_table": {"spam": {"ham": -1, "spam": 0}}},
            {"token_table": {"spam": {"ham": 1.5, "spam": 0}}},
            {"token_table": {"spam": {"ham": True, "spam": 0}}},
        ],
    )
    def test_malformed_document(self, temp_dir, document):
        path = temp_dir / "model.json"
        path.write_text(json.dumps(document))
        with pytest.raises(ModelReadError):
            FrequencyModel.load(path)

    def test_oversized_integer(self, temp_dir):
        path = temp_dir / "model.json"
        huge = "9" * 5000
        path.write_text(f'{{"token_table": {{"spam": {{"ham": {huge}, "spam": 0}}}}}}')
        with pytest.raises(ModelReadError):
            FrequencyModel.load(path)

    def test_deeply_nested_document(self, temp_dir):
        path = temp_dir / "model.json"
        path.write_text("[" * 100000 + "]" * 100000)
        with pytest.raises(ModelReadError):
            FrequencyModel.load(path)

    def test_unwritable_destination(self, temp_dir, model):
        blocker = temp_dir / "file"
        blocker.write_text("not a directory")
        with pytest.raises(ModelWriteError):
            model.save(blocker / "model.json")

    def test_failed_save_keeps_previous_model(self, temp_dir, model):
        path = temp_dir / "model.json"
        model.save(path)

        # A directory can't be replaced by a file
        target = temp_dir / "taken"
        target.mkdir()
        with pytest.raises(ModelWriteError):
            model.save(target)

        assert FrequencyModel.load(path) == model
        assert sorted(os.listdir(temp_dir)) == ["model.json", "taken"]
