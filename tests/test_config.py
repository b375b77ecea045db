"""
Tests for configuration loading and validation.
"""

from datetime import date, time
from pathlib import Path

import pytest

from clinicslots.config import (
    AppConfig,
    BlockConfig,
    DefaultsConfig,
    PolicyOverride,
    SlotPolicyConfig,
    StrategyName,
)


VALID_CONFIG = """
defaults:
  service_duration_minutes: 45
slot_policy:
  default_strategy: fixed_interval
  interval_minutes: 30
  overrides:
    - service: implant
      strategy: dynamic_duration
practitioners:
  - id: dr-ana
    name: Ana Torres
    blocks:
      - date: 2024-01-01
        start: "08:00"
        end: "12:00"
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestAppConfig:
    """Tests for AppConfig loading."""

    def test_load_valid_config(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, VALID_CONFIG))

        assert config.defaults.service_duration_minutes == 45
        assert config.slot_policy.overrides[0].strategy is StrategyName.DYNAMIC_DURATION
        block = config.practitioners[0].blocks[0]
        assert block.date == date(2024, 1, 1)
        assert block.start == time(8, 0)
        assert block.end == time(12, 0)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(_write(tmp_path, "practitioners: [unclosed"))

    def test_root_must_be_mapping(self, tmp_path):
        with pytest.raises(ValueError, match="mapping at the root level"):
            AppConfig.load_from_yaml(_write(tmp_path, "- just\n- a list\n"))

    def test_empty_file_uses_defaults(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, ""))

        assert config.slot_policy.default_strategy is StrategyName.FIXED_INTERVAL
        assert config.slot_policy.interval_minutes == 30
        assert config.practitioners == []

    def test_unquoted_time_rejected(self, tmp_path):
        content = VALID_CONFIG.replace('start: "08:00"', "start: 9:00")

        with pytest.raises(ValueError, match="must be quoted"):
            AppConfig.load_from_yaml(_write(tmp_path, content))

    def test_duplicate_practitioner_ids(self):
        with pytest.raises(ValueError, match="Duplicate practitioner id"):
            AppConfig(practitioners=[{"id": "dr-ana"}, {"id": "DR-ANA"}])

    def test_find_practitioner_case_insensitive(self):
        config = AppConfig(practitioners=[{"id": "dr-ana", "name": "Ana"}])

        assert config.find_practitioner("DR-Ana").display_name() == "Ana"
        assert config.find_practitioner("dr-luis") is None


class TestValidators:
    """Tests for individual model validators."""

    def test_block_end_before_start(self):
        with pytest.raises(ValueError, match="must be later than start"):
            BlockConfig(date=date(2024, 1, 1), start="12:00", end="08:00")

    @pytest.mark.parametrize("value", [0, -10])
    def test_non_positive_duration(self, value):
        with pytest.raises(ValueError, match="greater than zero"):
            DefaultsConfig(service_duration_minutes=value)

    def test_non_positive_interval(self):
        with pytest.raises(ValueError, match="greater than zero"):
            SlotPolicyConfig(interval_minutes=0)

    def test_unknown_strategy_name(self):
        with pytest.raises(ValueError):
            SlotPolicyConfig(default_strategy="hourly")

    def test_override_needs_target(self):
        with pytest.raises(ValueError, match="needs a practitioner"):
            PolicyOverride(strategy="fixed_interval")

    def test_override_specificity(self):
        both = PolicyOverride(practitioner="a", service="b", strategy="fixed_interval")
        service = PolicyOverride(service="b", strategy="fixed_interval")
        practitioner = PolicyOverride(practitioner="a", strategy="fixed_interval")

        assert both.specificity() > service.specificity() > practitioner.specificity()

    def test_override_matches_ignoring_case(self):
        override = PolicyOverride(practitioner="dr-luis", service="Implant", strategy="dynamic_duration")

        assert override.matches("DR-LUIS", "implant")
        assert not override.matches("dr-ana", "implant")
        assert not override.matches("DR-LUIS", None)
