# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Shared Hypothesis strategies for property-based tests."""

from __future__ import annotations

from hypothesis import strategies as st

from cem_validator.typerefs import NATIVE_JS_TYPES

__all__ = [
    "identifiers",
    "native_type_names",
    "plain_paths",
    "release_numbers",
    "version_triples",
]


def identifiers() -> st.SearchStrategy[str]:
    """Return a strategy for PascalCase type identifiers."""
    return st.from_regex(r"[A-Z][A-Za-z0-9_]{0,12}", fullmatch=True)


def native_type_names() -> st.SearchStrategy[str]:
    """Return a strategy for built-in type names, optionally as arrays."""
    names = st.sampled_from(sorted(NATIVE_JS_TYPES))
    return st.one_of(names, names.map(lambda name: f"{name}[]"))


def plain_paths() -> st.SearchStrategy[str]:
    """Return a strategy for paths made only of accepted name characters."""
    return st.from_regex(r"(\./|\.\./|/)?[a-zA-Z0-9_\-.]+(/[a-zA-Z0-9_\-.]+){0,4}", fullmatch=True)


def release_numbers(max_value: int = 50) -> st.SearchStrategy[int]:
    return st.integers(min_value=0, max_value=max_value)


def version_triples() -> st.SearchStrategy[tuple[int, int, int]]:
    """Return a strategy for ``(major, minor, patch)`` tuples.

    Returns:
        Hypothesis strategy with small components so ties are common.
    """
    return st.tuples(release_numbers(5), release_numbers(5), release_numbers(5))
