import pytest
from oson import DEFAULT_REGISTRY, ENV_OSON_MAX_DEPTH


@pytest.fixture(autouse=True)
def _restore_default_registry():  # pyright: ignore[reportUnusedFunction]
	snapshot = DEFAULT_REGISTRY.copy()
	yield
	for cls in list(DEFAULT_REGISTRY):
		DEFAULT_REGISTRY.unregister(cls)
	for cls in snapshot:
		match = snapshot.lookup_by_type(cls)
		assert match is not None
		DEFAULT_REGISTRY.register(cls, match.descriptor)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch):  # pyright: ignore[reportUnusedFunction]
	monkeypatch.delenv(ENV_OSON_MAX_DEPTH, raising=False)
