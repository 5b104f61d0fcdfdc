"""Tests for Config resolution order."""

from diff_review.config import Config


class TestConfig:

    def test_defaults(self, monkeypatch):
        for key in ("DIFF_REVIEW_URL", "DIFF_REVIEW_READ_TIMEOUT",
                    "DIFF_REVIEW_CLOSE_DELAY"):
            monkeypatch.delenv(key, raising=False)
        cfg = Config()
        assert cfg.AUTHORITY_URL == "http://127.0.0.1:8080"
        assert cfg.READ_TIMEOUT == 60.0
        assert cfg.CLOSE_DELAY == 3.0

    def test_yaml_overrides_defaults(self, monkeypatch):
        monkeypatch.delenv("DIFF_REVIEW_URL", raising=False)
        cfg = Config({"authority_url": "http://review:9000", "read_timeout": 15})
        assert cfg.AUTHORITY_URL == "http://review:9000"
        assert cfg.READ_TIMEOUT == 15.0

    def test_env_overrides_yaml(self, monkeypatch):
        monkeypatch.setenv("DIFF_REVIEW_URL", "http://env:1")
        cfg = Config({"authority_url": "http://review:9000"})
        assert cfg.AUTHORITY_URL == "http://env:1"

    def test_load_from_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DIFF_REVIEW_CLOSE_DELAY", raising=False)
        path = tmp_path / "review.yaml"
        path.write_text("close_delay: 0.5\n")
        assert Config.load(str(path)).CLOSE_DELAY == 0.5

    def test_missing_explicit_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DIFF_REVIEW_LOG_DIR", raising=False)
        cfg = Config.load(str(tmp_path / "absent.yaml"))
        assert cfg.LOG_DIR == ".diff_review/logs"
