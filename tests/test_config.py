"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from company_dedup.config.policies import (
    DEFAULT_NOISE_WORDS,
    DEFAULT_THRESHOLD,
    GroupingPolicy,
    Policies,
    load_policies,
)
from company_dedup.config.settings import PROJECT_ROOT, Settings


@pytest.fixture
def minimal_policy_dict() -> dict:
    return {
        "policy_version": "test-version",
        "grouping": {
            "threshold": 0.4,
            "extra_noise_words": ["Games"],
        },
    }


def test_grouping_policy_defaults() -> None:
    policy = GroupingPolicy()

    assert policy.threshold == DEFAULT_THRESHOLD == 0.5
    assert set(policy.noise_words) == DEFAULT_NOISE_WORDS
    assert policy.extra_noise_words == []
    assert policy.effective_noise_words == DEFAULT_NOISE_WORDS


@pytest.mark.parametrize("threshold", [0.0, -0.5, 1.2])
def test_grouping_policy_rejects_out_of_range_threshold(threshold: float) -> None:
    with pytest.raises(ValueError):
        GroupingPolicy(threshold=threshold)


def test_grouping_policy_cleans_noise_words() -> None:
    policy = GroupingPolicy(noise_words=["Inc", " LTD ", "inc", ""], extra_noise_words=["Games"])

    assert policy.noise_words == ["inc", "ltd"]
    assert policy.extra_noise_words == ["games"]
    assert policy.effective_noise_words == frozenset({"inc", "ltd", "games"})


def test_grouping_policy_folds_noise_words_like_name_tokens() -> None:
    policy = GroupingPolicy(extra_noise_words=["Société", "S.A.", " Ltd. ", "!!"])

    assert policy.extra_noise_words == ["societe", "sa", "ltd"]


def test_policies_require_version() -> None:
    with pytest.raises(ValueError):
        Policies(policy_version="")


def test_load_policies_from_dict(minimal_policy_dict: dict) -> None:
    policies = load_policies(minimal_policy_dict)

    assert policies.policy_version == "test-version"
    assert policies.grouping.threshold == 0.4
    assert "games" in policies.grouping.effective_noise_words
    assert minimal_policy_dict["grouping"]["extra_noise_words"] == ["Games"]


def test_load_policies_from_yaml(tmp_path: Path, minimal_policy_dict: dict) -> None:
    path = tmp_path / "policies.yaml"
    path.write_text(yaml.safe_dump(minimal_policy_dict), encoding="utf-8")

    assert load_policies(path).grouping.threshold == 0.4


def test_load_policies_rejects_missing_and_malformed_files(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_policies(tmp_path / "missing.yaml")

    path = tmp_path / "policies.yaml"
    path.write_text("- not\n- a mapping\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_policies(path)


def test_load_policies_env_override(monkeypatch: pytest.MonkeyPatch, minimal_policy_dict: dict) -> None:
    monkeypatch.setenv("COMPANY_DEDUP_POLICY__GROUPING__THRESHOLD", "0.75")
    monkeypatch.setenv("COMPANY_DEDUP_POLICY__GROUPING__EXTRA_NOISE_WORDS", '["Labs"]')

    policies = load_policies(minimal_policy_dict)

    assert policies.grouping.threshold == 0.75
    assert policies.grouping.extra_noise_words == ["labs"]


def test_load_policies_env_override_cannot_descend_into_scalar(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMPANY_DEDUP_POLICY__POLICY_VERSION__NESTED", "x")

    with pytest.raises(ValueError):
        load_policies({"policy_version": "v1"})


def test_settings_environment_override(tmp_path: Path, minimal_policy_dict: dict) -> None:
    default_yaml = {
        "environment": "development",
        "logging": {"level": "INFO"},
        "policies": minimal_policy_dict,
    }
    testing_yaml = {
        "policies": {
            "policy_version": "testing",
            "grouping": {"threshold": 0.8},
        },
    }
    (tmp_path / "default.yaml").write_text(yaml.safe_dump(default_yaml), encoding="utf-8")
    (tmp_path / "testing.yaml").write_text(yaml.safe_dump(testing_yaml), encoding="utf-8")

    settings = Settings(config_dir=tmp_path, environment="testing")

    assert settings.environment == "testing"
    assert settings.logging.level == "INFO"
    assert settings.policy_version == "testing"
    assert settings.policies.grouping.threshold == 0.8
    assert settings.policies.grouping.extra_noise_words == ["games"]


def test_settings_env_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, minimal_policy_dict: dict) -> None:
    (tmp_path / "default.yaml").write_text(
        yaml.safe_dump({"policies": minimal_policy_dict}), encoding="utf-8"
    )
    monkeypatch.setenv("COMPANY_DEDUP_SETTINGS__LOGGING__LEVEL", "DEBUG")
    monkeypatch.setenv("COMPANY_DEDUP_SETTINGS__PATHS__LOGS_DIR", str(tmp_path / "logs"))

    settings = Settings(config_dir=tmp_path)

    assert settings.logging.level == "DEBUG"
    assert settings.log_file == tmp_path / "logs" / "company_dedup.log"


def test_settings_kwargs_take_precedence(tmp_path: Path, minimal_policy_dict: dict) -> None:
    (tmp_path / "default.yaml").write_text(
        yaml.safe_dump({"policies": minimal_policy_dict}), encoding="utf-8"
    )

    settings = Settings(config_dir=tmp_path, policies={"grouping": {"threshold": 0.9}})

    assert settings.policies.grouping.threshold == 0.9
    assert settings.policies.policy_version == "test-version"


def test_paths_resolve_relative_output_under_output_dir(tmp_path: Path) -> None:
    settings = Settings(config_dir=tmp_path, paths={"output_dir": tmp_path / "exports"})

    assert settings.paths.resolve_output("groups.json") == tmp_path / "exports" / "groups.json"
    assert settings.paths.resolve_output(tmp_path / "elsewhere.json") == tmp_path / "elsewhere.json"


def test_paths_anchor_relative_directories_at_project_root(tmp_path: Path) -> None:
    settings = Settings(config_dir=tmp_path, paths={"output_dir": "exports", "logs_dir": "var/logs"})

    assert settings.paths.resolve_output("groups.json") == PROJECT_ROOT / "exports" / "groups.json"
    assert settings.log_file == PROJECT_ROOT / "var" / "logs" / "company_dedup.log"


def test_settings_reject_non_mapping_yaml(tmp_path: Path) -> None:
    (tmp_path / "default.yaml").write_text("- not\n- a mapping\n", encoding="utf-8")

    with pytest.raises(ValueError):
        Settings(config_dir=tmp_path)


def test_settings_reject_invalid_threshold(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        Settings(config_dir=tmp_path, policies={"grouping": {"threshold": 0}})


def test_settings_create_dirs(tmp_path: Path) -> None:
    settings = Settings(
        config_dir=tmp_path,
        paths={"output_dir": tmp_path / "out", "logs_dir": tmp_path / "logs"},
        create_dirs=True,
    )

    assert settings.paths.output_dir.is_dir()
    assert settings.paths.logs_dir.is_dir()


def test_repository_configuration_loads() -> None:
    settings = Settings(environment="testing")

    assert settings.policies.grouping.threshold == 0.5
    assert settings.policies.grouping.extra_noise_words == []
    assert settings.logging.log_to_file is False
