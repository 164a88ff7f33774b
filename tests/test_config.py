"""
test_config.py
==============

Tests for engine settings and YAML configuration loading.
"""

import pytest
from pathlib import Path
import sys

# Add project root to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from chartmatch.config import EngineSettings, load_engine_settings, load_search_config


class TestEngineSettings:

    def test_defaults(self):
        settings = EngineSettings()
        assert settings.outcome_length == 80
        assert settings.max_results == 200
        assert settings.outcome_band_pct == 2.0
        assert settings.clamp_scores is False

    @pytest.mark.parametrize("kwargs", [
        {"outcome_length": 0},
        {"max_results": 0},
        {"outcome_band_pct": -1.0},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            EngineSettings(**kwargs)

    def test_from_dict_rejects_unknown(self):
        with pytest.raises(ValueError):
            EngineSettings.from_dict({"outcome_length": 10, "workers": 4})


class TestYamlLoading:

    def test_load_engine_settings(self, tmp_path):
        path = tmp_path / "chartmatch.yaml"
        path.write_text("engine:\n  outcome_length: 40\n  clamp_scores: true\n")
        settings = load_engine_settings(path)
        assert settings.outcome_length == 40
        assert settings.clamp_scores is True
        assert settings.max_results == 200

    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        assert load_engine_settings(tmp_path / "absent.yaml") == EngineSettings()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_engine_settings(path) == EngineSettings()

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_engine_settings(path)

    def test_load_search_config(self, tmp_path):
        path = tmp_path / "search.yaml"
        path.write_text(
            "search:\n"
            "  assets: [BTC, ETH]\n"
            "  timeframes: [1h, 4h]\n"
            "  timeOfDay: '09:00'\n"
            "  timezoneOffset: '+02:00'\n"
            "  dateFrom: '2023-01-01'\n"
            "  similarity_threshold: 75\n"
        )
        config = load_search_config(path)
        assert config.assets == ("BTC", "ETH")
        assert config.timeframes == ("1h", "4h")
        assert config.time_of_day == "09:00"
        assert config.similarity_threshold == 75
        assert config.has_date_filter

    def test_search_section_required(self, tmp_path):
        path = tmp_path / "engine_only.yaml"
        path.write_text("engine:\n  max_results: 10\n")
        with pytest.raises(ValueError):
            load_search_config(path)
