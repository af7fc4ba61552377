import pytest

from regroup.config import DEFAULT_CONFIG, BindingConfig
from regroup.exceptions import ConfigurationError
from regroup.layouts import RFC3339


def test_defaults():
    assert DEFAULT_CONFIG.tag_key == "regroup"
    assert DEFAULT_CONFIG.default_time_layout == RFC3339
    assert DEFAULT_CONFIG.strip_whitespace is False


def test_from_env():
    config = BindingConfig.from_env(
        {
            "REGROUP_TAG_KEY": "rx",
            "REGROUP_TIME_LAYOUT": "2006-01-02",
            "REGROUP_STRIP_WHITESPACE": "Yes",
        }
    )
    assert config == BindingConfig(
        tag_key="rx", default_time_layout="2006-01-02", strip_whitespace=True
    )


def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("REGROUP_TAG_KEY", "pattern")
    monkeypatch.delenv("REGROUP_STRIP_WHITESPACE", raising=False)
    assert BindingConfig.from_env().tag_key == "pattern"


def test_from_env_rejects_bad_boolean():
    with pytest.raises(ConfigurationError):
        BindingConfig.from_env({"REGROUP_STRIP_WHITESPACE": "maybe"})


def test_empty_tag_key_is_rejected():
    with pytest.raises(ConfigurationError):
        BindingConfig(tag_key="")


def test_with_options_returns_a_copy():
    config = DEFAULT_CONFIG.with_options(strip_whitespace=True)
    assert config.strip_whitespace
    assert not DEFAULT_CONFIG.strip_whitespace
