import json
import pytest
from gitkeep.const import DEFAULT_EXCLUDE_DIRS
from gitkeep.domain import Mode
from gitkeep.errors import ConfigError
from gitkeep.services.config_loader import ConfigLoader


@pytest.fixture
def loader():
    return ConfigLoader()


def write_cfg(root, text):
    (root / ".gitkeepcfg").write_text(text, encoding="utf-8")


# ==========================================
# 1. MERGING
# ==========================================

def test_defaults_without_config_file(tmp_path, loader):
    config = loader.load(str(tmp_path))

    assert config.root == tmp_path.resolve()
    assert config.mode is Mode.NORMAL
    assert config.dry_run is False
    assert config.marker_name == ".gitkeep"
    assert config.marker_content == ""
    assert config.exclude_dirs == frozenset(DEFAULT_EXCLUDE_DIRS)
    assert config.respect_marker_ignore is True
    assert config.report_file is None


def test_json_config_file_is_applied(tmp_path, loader):
    write_cfg(tmp_path, json.dumps({
        "content": "This directory is intentionally kept empty",
        "excludeDirs": ["temp", "cache"],
        "verbose": True,
    }))

    config = loader.load(str(tmp_path))

    assert config.marker_content == "This directory is intentionally kept empty"
    assert config.exclude_dirs == frozenset({"temp", "cache"})
    assert config.verbose is True


def test_yaml_config_file_is_applied(tmp_path, loader):
    write_cfg(tmp_path, "gitkeepName: .keep\nrespectGitkeepIgnore: false\ncheck: true\n")

    config = loader.load(str(tmp_path))

    assert config.marker_name == ".keep"
    assert config.respect_marker_ignore is False
    assert config.mode is Mode.CHECK


def test_cli_overrides_beat_file(tmp_path, loader):
    write_cfg(tmp_path, json.dumps({"content": "from file", "dryRun": False}))

    config = loader.load(str(tmp_path), {"content": "from cli", "dryRun": True, "verbose": None})

    assert config.marker_content == "from cli"
    assert config.dry_run is True
    assert config.verbose is False


def test_empty_config_file_means_defaults(tmp_path, loader):
    write_cfg(tmp_path, "")
    assert loader.load(str(tmp_path)).mode is Mode.NORMAL


def test_clean_wins_over_check(tmp_path, loader, caplog):
    config = loader.load(str(tmp_path), {"clean": True, "check": True})

    assert config.mode is Mode.CLEAN
    assert "clean takes precedence" in caplog.text


# ==========================================
# 2. VALIDATION
# ==========================================

def test_invalid_syntax_raises(tmp_path, loader):
    write_cfg(tmp_path, "{bad: [")

    with pytest.raises(ConfigError) as excinfo:
        loader.load(str(tmp_path))

    assert "Invalid syntax" in str(excinfo.value)


def test_unknown_key_raises(tmp_path, loader):
    write_cfg(tmp_path, json.dumps({"exclude": ["x"]}))

    with pytest.raises(ConfigError) as excinfo:
        loader.load(str(tmp_path))

    assert "unknown keys" in str(excinfo.value)


def test_config_path_that_is_a_directory_raises(tmp_path, loader):
    (tmp_path / ".gitkeepcfg").mkdir()

    with pytest.raises(ConfigError) as excinfo:
        loader.load(str(tmp_path))

    assert "Cannot read" in str(excinfo.value)


def test_non_utf8_config_file_raises(tmp_path, loader):
    (tmp_path / ".gitkeepcfg").write_bytes(b"content: \xff\xfe\n")

    with pytest.raises(ConfigError) as excinfo:
        loader.load(str(tmp_path))

    assert "Cannot read" in str(excinfo.value)


def test_non_mapping_document_raises(tmp_path, loader):
    write_cfg(tmp_path, "- a\n- b\n")

    with pytest.raises(ConfigError):
        loader.load(str(tmp_path))


@pytest.mark.parametrize("settings", [
    {"dryRun": "yes"},
    {"content": 42},
    {"excludeDirs": "temp,cache"},
    {"gitkeepName": "sub/.gitkeep"},
    {"gitkeepName": ""},
    {"reportFile": 1},
])
def test_wrong_value_types_raise(tmp_path, loader, settings):
    write_cfg(tmp_path, json.dumps(settings))

    with pytest.raises(ConfigError):
        loader.load(str(tmp_path))


def test_unknown_override_key_raises(tmp_path, loader):
    with pytest.raises(ConfigError):
        loader.load(str(tmp_path), {"colour": True})
