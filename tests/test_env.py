import pytest
from oson.env import DEFAULT_MAX_DEPTH, ENV_OSON_MAX_DEPTH, env, resolve_max_depth


def test_default_max_depth():
	assert env.max_depth == DEFAULT_MAX_DEPTH
	assert resolve_max_depth(None) == DEFAULT_MAX_DEPTH


def test_max_depth_from_environment(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv(ENV_OSON_MAX_DEPTH, "12")
	assert env.max_depth == 12
	assert resolve_max_depth(None) == 12
	assert resolve_max_depth(40) == 40


def test_blank_value_falls_back_to_default(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv(ENV_OSON_MAX_DEPTH, "  ")
	assert env.max_depth == DEFAULT_MAX_DEPTH


@pytest.mark.parametrize("raw", ["abc", "0", "-4", "1.5"])
def test_invalid_environment_values(monkeypatch: pytest.MonkeyPatch, raw: str):
	monkeypatch.setenv(ENV_OSON_MAX_DEPTH, raw)
	with pytest.raises(ValueError, match=ENV_OSON_MAX_DEPTH):
		_ = env.max_depth


def test_explicit_max_depth_must_be_positive():
	with pytest.raises(ValueError, match="max_depth"):
		resolve_max_depth(0)


def test_setter_round_trips_through_environment(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.delenv(ENV_OSON_MAX_DEPTH, raising=False)
	env.max_depth = 25
	try:
		assert env.max_depth == 25
	finally:
		env.max_depth = None
	assert env.max_depth == DEFAULT_MAX_DEPTH
