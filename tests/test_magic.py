import copy
import math

import pytest
from oson.magic import (
	HOLE,
	HOLE_CODE,
	NAN_CODE,
	NEG_INF_CODE,
	POS_INF_CODE,
	UNDEFINED,
	UNDEFINED_CODE,
	from_magic,
	to_magic,
)


def test_to_magic_codes():
	assert to_magic(UNDEFINED) == UNDEFINED_CODE
	assert to_magic(math.nan) == NAN_CODE
	assert to_magic(math.inf) == POS_INF_CODE
	assert to_magic(-math.inf) == NEG_INF_CODE


@pytest.mark.parametrize("value", [None, 0, 0.0, -1, "", False, 1.5, [], HOLE])
def test_to_magic_ignores_ordinary_values(value: object):
	assert to_magic(value) is None


def test_from_magic_inverts_to_magic():
	assert from_magic(UNDEFINED_CODE) is UNDEFINED
	assert math.isnan(from_magic(NAN_CODE))  # pyright: ignore[reportArgumentType]
	assert from_magic(POS_INF_CODE) == math.inf
	assert from_magic(NEG_INF_CODE) == -math.inf


@pytest.mark.parametrize("code", [0, 1, 17, HOLE_CODE, -6, -100, True, False, "x", None, -1.0])
def test_from_magic_rejects_non_magic(code: object):
	assert from_magic(code) is None


def test_sentinels_are_falsy_singletons():
	assert not UNDEFINED
	assert not HOLE
	assert repr(UNDEFINED) == "UNDEFINED"
	assert repr(HOLE) == "HOLE"
	assert copy.deepcopy([UNDEFINED, HOLE])[0] is UNDEFINED
	assert copy.deepcopy([UNDEFINED, HOLE])[1] is HOLE
