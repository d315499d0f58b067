from __future__ import annotations

from pathlib import Path

import pytest

from crimelog.config import AppConfig, load_app_config
from crimelog.contracts.error import BadInputError


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "CRIMELOG_INITIAL_CAPACITY",
        "CRIMELOG_LOAD_FACTOR_THRESHOLD",
        "CRIMELOG_DELIMITER",
        "CRIMELOG_SKIP_MALFORMED",
        "CRIMELOG_MAX_ROWS",
        "CRIMELOG_ENCODING",
        "CRIMELOG_TOP_K",
    ):
        monkeypatch.delenv(key, raising=False)


def test_default_config_validates() -> None:
    cfg = load_app_config(None)
    assert cfg.store.initial_capacity == 10
    assert cfg.store.load_factor_threshold == pytest.approx(4.0)
    assert cfg.ingest.delimiter == ","
    assert cfg.ingest.skip_malformed is False
    assert cfg.report.top_k == 3


def test_load_from_toml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cfg_path = tmp_path / "config.toml"
    cfg_path.write_text(
        """
[store]
initial_capacity = 32
load_factor_threshold = 2.5

[ingest]
delimiter = "|"
skip_malformed = "yes"
max_rows = 100
encoding = "latin-1"

[report]
top_k = 5
""",
        encoding="utf-8",
    )
    cfg = load_app_config(str(cfg_path))
    assert cfg.store.initial_capacity == 32
    assert cfg.store.load_factor_threshold == pytest.approx(2.5)
    assert cfg.ingest.delimiter == "|"
    assert cfg.ingest.skip_malformed is True
    assert cfg.ingest.max_rows == 100
    assert cfg.ingest.encoding == "latin-1"
    assert cfg.report.top_k == 5

    # env override takes precedence
    monkeypatch.setenv("CRIMELOG_INITIAL_CAPACITY", "64")
    monkeypatch.setenv("CRIMELOG_SKIP_MALFORMED", "off")
    monkeypatch.setenv("CRIMELOG_TOP_K", "1")
    cfg_env = AppConfig.load(cfg_path)
    assert cfg_env.store.initial_capacity == 64
    assert cfg_env.ingest.skip_malformed is False
    assert cfg_env.report.top_k == 1


@pytest.mark.parametrize(
    "body",
    [
        "[store]\ninitial_capacity = 0\n",
        "[store]\nload_factor_threshold = -1.0\n",
        '[ingest]\ndelimiter = "::"\n',
        "[ingest]\nmax_rows = -5\n",
        '[ingest]\nskip_malformed = "maybe"\n',
        "[report]\ntop_k = -1\n",
        "[store]\nbuckets = 4\n",
        "[store]\nload_factor_threshold = nan\n",
        "[store]\nload_factor_threshold = inf\n",
        "[store]\nload_factor_threshold = 1e-30\n",
        "[store]\ninitial_capacity = 4\nload_factor_threshold = 0.2\n",
        '[store]\ninitial_capacity = "ten"\n',
        "[store]\ninitial_capacity = 2.5\n",
        "[store]\ninitial_capacity = true\n",
        '[store]\nload_factor_threshold = "high"\n',
        "[ingest]\nmax_rows = inf\n",
        "[ingest]\ndelimiter = 5\n",
        '[ingest]\nencoding = "no-such-codec"\n',
        "[report]\ntop_k = [3]\n",
        'store = "flat"\n',
        "[store\n",
    ],
)
def test_invalid_values_raise(tmp_path: Path, body: str) -> None:
    bad_path = tmp_path / "bad.toml"
    bad_path.write_text(body, encoding="utf-8")
    with pytest.raises(BadInputError):
        load_app_config(str(bad_path))


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(BadInputError):
        load_app_config(str(tmp_path / "absent.toml"))


@pytest.mark.parametrize(
    "key,value",
    [
        ("CRIMELOG_INITIAL_CAPACITY", "ten"),
        ("CRIMELOG_LOAD_FACTOR_THRESHOLD", "high"),
        ("CRIMELOG_SKIP_MALFORMED", "sometimes"),
    ],
)
def test_invalid_env_override(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)
    with pytest.raises(BadInputError) as excinfo:
        load_app_config(None)
    assert key in str(excinfo.value)


def test_whole_float_capacity_is_accepted(tmp_path: Path) -> None:
    cfg_path = tmp_path / "config.toml"
    cfg_path.write_text(
        "[store]\ninitial_capacity = 16.0\nload_factor_threshold = 2\n", encoding="utf-8"
    )
    cfg = load_app_config(str(cfg_path))
    assert cfg.store.initial_capacity == 16
    assert isinstance(cfg.store.initial_capacity, int)
    assert cfg.store.load_factor_threshold == pytest.approx(2.0)


def test_threshold_at_inverse_capacity_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRIMELOG_INITIAL_CAPACITY", "4")
    monkeypatch.setenv("CRIMELOG_LOAD_FACTOR_THRESHOLD", "0.25")
    cfg = load_app_config(None)
    assert cfg.store.load_factor_threshold == pytest.approx(0.25)


@pytest.mark.parametrize(
    "key,value",
    [
        ("CRIMELOG_LOAD_FACTOR_THRESHOLD", "nan"),
        ("CRIMELOG_LOAD_FACTOR_THRESHOLD", "inf"),
        ("CRIMELOG_LOAD_FACTOR_THRESHOLD", "1e-30"),
        ("CRIMELOG_ENCODING", "no-such-codec"),
    ],
)
def test_env_override_rejected_by_validation(
    monkeypatch: pytest.MonkeyPatch, key: str, value: str
) -> None:
    monkeypatch.setenv(key, value)
    with pytest.raises(BadInputError):
        load_app_config(None)
