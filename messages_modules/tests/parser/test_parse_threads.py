# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""The shared parser gives the same result whether or not callers overlap."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from messages_modules.parser import parse_module

IF_MODULE = """
import { getMessages } from 'messages-modules'
if (ready) {
	getMessages('en')
} else {
	fallback()
}
"""

OBJECT_MODULE = """
const table = {
	a: [1, 2],
	b: {
		c: 'three'
	}
}
export { table }
"""


def test_concurrent_parses_match_sequential_parses():
	sources = [IF_MODULE, OBJECT_MODULE] * 40
	expected = [parse_module(source) for source in sources]

	with ThreadPoolExecutor(max_workers=8) as pool:
		results = list(pool.map(parse_module, sources))

	assert results == expected
