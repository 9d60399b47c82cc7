class OsonError(Exception):
	pass


class EncodeError(OsonError, TypeError):
	"""Raised when a value cannot be represented in an OSON document."""


class DecodeError(OsonError, ValueError):
	"""Raised when an OSON document is malformed."""


class UnknownLabelError(DecodeError):
	"""Raised when an object label does not resolve against the registry."""

	label: str

	def __init__(self, label: str) -> None:
		super().__init__(f"Unknown object type: {label!r}")
		self.label = label


class MissingCapabilityError(DecodeError):
	"""Raised when a registered descriptor cannot rebuild its cell."""


class RegistrationError(OsonError, TypeError):
	pass


class DepthLimitError(OsonError, RecursionError):
	max_depth: int

	def __init__(self, max_depth: int) -> None:
		super().__init__(f"Value graph is nested deeper than max_depth={max_depth}")
		self.max_depth = max_depth


__all__ = [
	"OsonError",
	"EncodeError",
	"DecodeError",
	"UnknownLabelError",
	"MissingCapabilityError",
	"RegistrationError",
	"DepthLimitError",
]
