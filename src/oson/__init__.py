"""OSON: JSON-safe serialization for arbitrary Python value graphs.

Shared references, cycles, big integers, sparse lists, ``UNDEFINED`` and
instances of registered classes survive a round trip::

    >>> import oson
    >>> root = {"name": "root"}
    >>> root["self"] = root
    >>> text = oson.dumps(root)
    >>> copy = oson.loads(text)
    >>> copy["self"] is copy
    True

Custom classes are added to a registry with a descriptor::

    >>> oson.register(
    ...     Point,
    ...     oson.ValueDescriptor(
    ...         decompose=lambda p: [p.x, p.y],
    ...         create=lambda values: Point(*values),
    ...     ),
    ... )
"""

from oson.defaults import DEFAULT_REGISTRY as DEFAULT_REGISTRY
from oson.defaults import default_registry as default_registry
from oson.document import BIGINT_LABEL as BIGINT_LABEL
from oson.document import MAX_SAFE_INTEGER as MAX_SAFE_INTEGER
from oson.document import PLAIN_OBJECT_LABEL as PLAIN_OBJECT_LABEL
from oson.document import Oson as Oson
from oson.document import OsonValue as OsonValue
from oson.env import ENV_OSON_MAX_DEPTH as ENV_OSON_MAX_DEPTH
from oson.env import env as env
from oson.errors import DecodeError as DecodeError
from oson.errors import DepthLimitError as DepthLimitError
from oson.errors import EncodeError as EncodeError
from oson.errors import MissingCapabilityError as MissingCapabilityError
from oson.errors import OsonError as OsonError
from oson.errors import RegistrationError as RegistrationError
from oson.errors import UnknownLabelError as UnknownLabelError
from oson.magic import HOLE as HOLE
from oson.magic import UNDEFINED as UNDEFINED
from oson.magic import Hole as Hole
from oson.magic import Undefined as Undefined
from oson.magic import from_magic as from_magic
from oson.magic import to_magic as to_magic
from oson.registry import BucketDescriptor as BucketDescriptor
from oson.registry import Descriptor as Descriptor
from oson.registry import RegistryMatch as RegistryMatch
from oson.registry import TypeRegistry as TypeRegistry
from oson.registry import ValueDescriptor as ValueDescriptor
from oson.serializer import deserialize as deserialize
from oson.serializer import dumps as dumps
from oson.serializer import loads as loads
from oson.serializer import serialize as serialize


def register(cls: type, descriptor: Descriptor) -> None:
	"""Register ``cls`` on ``DEFAULT_REGISTRY``."""
	DEFAULT_REGISTRY.register(cls, descriptor)


def unregister(cls: type) -> Descriptor:
	"""Remove ``cls`` from ``DEFAULT_REGISTRY`` and return its descriptor."""
	return DEFAULT_REGISTRY.unregister(cls)


__all__: list[str] = [
	"DEFAULT_REGISTRY",
	"default_registry",
	"BIGINT_LABEL",
	"MAX_SAFE_INTEGER",
	"PLAIN_OBJECT_LABEL",
	"Oson",
	"OsonValue",
	"ENV_OSON_MAX_DEPTH",
	"env",
	"DecodeError",
	"DepthLimitError",
	"EncodeError",
	"MissingCapabilityError",
	"OsonError",
	"RegistrationError",
	"UnknownLabelError",
	"HOLE",
	"UNDEFINED",
	"Hole",
	"Undefined",
	"from_magic",
	"to_magic",
	"BucketDescriptor",
	"Descriptor",
	"RegistryMatch",
	"TypeRegistry",
	"ValueDescriptor",
	"deserialize",
	"dumps",
	"loads",
	"serialize",
	"register",
	"unregister",
]

