"""Tests for configuration resolution."""

import dataclasses

import pytest

from bingraph.config import DEFAULT_LIB_PATH, BingraphConfig
from bingraph.errors import GeneralError


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in (
        "BINGRAPH_LIB_PATH",
        "BINGRAPH_OUTPUT",
        "BINGRAPH_OUTPUT_GRAPHVIZ",
        "BINGRAPH_JOBS",
        "BINGRAPH_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PATH", "/usr/local/bin:/usr/bin")
    return monkeypatch


class TestBingraphConfig:
    def test_defaults_from_environment(self, clean_env):
        config = BingraphConfig.from_env()

        assert config.bin_path == "/usr/local/bin:/usr/bin"
        assert config.lib_path == DEFAULT_LIB_PATH
        assert config.output == "graph.json"
        assert config.output_graphviz == ""
        assert not config.graphviz_enabled
        assert config.jobs == 1

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("BINGRAPH_LIB_PATH", "/opt/lib")
        clean_env.setenv("BINGRAPH_JOBS", "4")
        clean_env.setenv("BINGRAPH_OUTPUT_GRAPHVIZ", "graph.dot")
        config = BingraphConfig.from_env()

        assert config.lib_path == "/opt/lib"
        assert config.jobs == 4
        assert config.graphviz_enabled

    def test_search_path_joins_bin_then_lib(self):
        config = BingraphConfig(bin_path="/bin:/sbin", lib_path="/lib")
        assert config.search_path == "/bin:/sbin:/lib"

    def test_overrides_skip_none(self):
        config = BingraphConfig(bin_path="/bin").with_overrides(
            {"bin_path": None, "output": "out.json", "output_graphviz": ""}
        )
        assert config.bin_path == "/bin"
        assert config.output == "out.json"
        assert config.output_graphviz == ""

    def test_is_frozen(self):
        config = BingraphConfig(bin_path="/bin")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.bin_path = "/usr/bin"

    def test_invalid_jobs(self, clean_env):
        clean_env.setenv("BINGRAPH_JOBS", "many")
        with pytest.raises(GeneralError):
            BingraphConfig.from_env()
        with pytest.raises(GeneralError):
            BingraphConfig(bin_path="/bin", jobs=0)

    def test_log_level_from_environment_is_case_insensitive(self, clean_env):
        clean_env.setenv("BINGRAPH_LOG_LEVEL", "debug")
        assert BingraphConfig.from_env().log_level == "DEBUG"

    @pytest.mark.parametrize("level", ["verbose", "", "info"])
    def test_invalid_log_level(self, level):
        with pytest.raises(GeneralError, match="log level"):
            BingraphConfig(bin_path="/bin", log_level=level)

    def test_invalid_log_level_from_environment(self, clean_env):
        clean_env.setenv("BINGRAPH_LOG_LEVEL", "chatty")
        with pytest.raises(GeneralError, match="CHATTY"):
            BingraphConfig.from_env()
