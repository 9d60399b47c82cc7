"""Environment configuration for OSON.

Values are read from ``os.environ`` on every access so tests and host
applications can change them at runtime.
"""

import os

ENV_OSON_MAX_DEPTH = "OSON_MAX_DEPTH"

DEFAULT_MAX_DEPTH = 300


class OsonEnv:
	__slots__ = ()  # pyright: ignore[reportUnannotatedClassAttribute]

	@property
	def max_depth(self) -> int:
		raw = os.environ.get(ENV_OSON_MAX_DEPTH)
		if raw is None or raw.strip() == "":
			return DEFAULT_MAX_DEPTH
		try:
			value = int(raw)
		except ValueError:
			raise ValueError(
				f"{ENV_OSON_MAX_DEPTH} must be a positive integer, got {raw!r}"
			) from None
		if value <= 0:
			raise ValueError(
				f"{ENV_OSON_MAX_DEPTH} must be a positive integer, got {raw!r}"
			)
		return value

	@max_depth.setter
	def max_depth(self, value: int | None) -> None:
		if value is None:
			os.environ.pop(ENV_OSON_MAX_DEPTH, None)
		else:
			os.environ[ENV_OSON_MAX_DEPTH] = str(value)


env = OsonEnv()


def resolve_max_depth(max_depth: int | None) -> int:
	if max_depth is None:
		return env.max_depth
	if max_depth <= 0:
		raise ValueError("max_depth must be a positive integer")
	return max_depth
