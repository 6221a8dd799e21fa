import json

from shrimpcheck.config import DEFAULT_AUDIO_URL, AppConfig, load_config


def test_missing_file_gives_defaults(tmp_path):
	cfg = load_config(tmp_path / "nope.json")
	assert cfg == AppConfig()
	assert cfg.posture.timeout_seconds == 10.0
	assert cfg.hand.timeout_seconds == 1.0
	assert cfg.hand.volume == 0.25
	assert cfg.audio.url == DEFAULT_AUDIO_URL
	assert cfg.capture.frame_rate == 5


def test_malformed_file_gives_defaults(tmp_path):
	p = tmp_path / "config.json"
	p.write_text("{not json", encoding="utf-8")
	assert load_config(p) == AppConfig()


def test_values_are_parsed_and_sanitised(tmp_path):
	p = tmp_path / "config.json"
	p.write_text(
		json.dumps(
			{
				"enabled": "off",
				"posture": {"enabled": "yes", "timeout_seconds": "4.5", "volume": 3},
				"hand": {"enabled": False, "timeout_seconds": -1},
				"audio": {"url": "  "},
				"capture": {"frame_rate": 0},
				"server": {"port": "9001"},
			}
		),
		encoding="utf-8",
	)
	cfg = load_config(p)
	assert cfg.enabled is False
	assert cfg.posture.enabled is True
	assert cfg.posture.timeout_seconds == 4.5
	assert cfg.posture.volume == 1.0
	assert cfg.hand.enabled is False
	assert cfg.hand.timeout_seconds == 1.0
	assert cfg.audio.url == DEFAULT_AUDIO_URL
	assert cfg.capture.frame_rate == 5
	assert cfg.server.port == 9001
