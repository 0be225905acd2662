from pathlib import Path

import pytest

from daycal.config import load_config
from daycal.state import STATE_PATH_DEFAULT


def test_missing_config_file_uses_defaults(tmp_path):
    cfg = load_config(str(tmp_path / "nope.yaml"))

    assert cfg.timezone == "UTC"
    assert cfg.storage.path == STATE_PATH_DEFAULT
    assert cfg.events.default_type == "Work"
    assert set(cfg.events.types) == {"Work", "Personal", "Holiday"}
    assert cfg.logging.level == "WARNING"


def test_config_overrides_nested_values(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        """
        timezone: 'America/Phoenix'
        storage:
          path: /tmp/daycal/events.json
        export:
          directory: /tmp/daycal/exports
        events:
          default_type: Personal
          types:
            Gym: [10, 20, 30]
        display:
          width: 800
        logging:
          level: debug
        """,
        encoding="utf-8",
    )

    cfg = load_config(str(cfg_path))

    assert cfg.timezone == "America/Phoenix"
    assert cfg.storage.path == "/tmp/daycal/events.json"
    assert cfg.export.directory == "/tmp/daycal/exports"
    assert cfg.events.default_type == "Personal"
    assert cfg.events.types == {"Gym": [10, 20, 30]}
    assert cfg.display.width == 800
    assert cfg.display.height == 1000
    assert cfg.logging.level == "DEBUG"


def test_empty_config_file_uses_defaults(tmp_path):
    cfg_path = Path(tmp_path) / "config.yaml"
    cfg_path.write_text("", encoding="utf-8")

    assert load_config(str(cfg_path)).display.width == 1400


def test_top_level_list_or_scalar_is_rejected(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    for text in ("- a\n- b\n", "just a string\n"):
        cfg_path.write_text(text, encoding="utf-8")
        with pytest.raises(ValueError, match="YAML mapping"):
            load_config(str(cfg_path))


def test_section_that_is_not_a_mapping_is_rejected(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("storage: /tmp/events.json\n", encoding="utf-8")

    with pytest.raises(ValueError, match="'storage' must be a mapping"):
        load_config(str(cfg_path))
