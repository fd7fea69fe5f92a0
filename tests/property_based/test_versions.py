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

"""Property-based tests for version comparison."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from cem_validator.versions import is_at_least, parse_version
from tests.property_based.strategies import version_triples

pytestmark = pytest.mark.property

_TAGS = st.from_regex(r"[a-z]+(\.[0-9]+)?", fullmatch=True)


def _text(version: tuple[int, int, int]) -> str:
    return ".".join(str(part) for part in version)


@given(version_triples(), version_triples())
def test_matches_tuple_ordering(current: tuple[int, int, int], latest: tuple[int, int, int]) -> None:
    assert is_at_least(_text(current), _text(latest)) is (current >= latest)


@given(version_triples())
def test_is_reflexive(version: tuple[int, int, int]) -> None:
    assert is_at_least(_text(version), _text(version))


@given(version_triples(), _TAGS)
def test_prerelease_ranks_below_release(version: tuple[int, int, int], tag: str) -> None:
    release = _text(version)
    tagged = f"{release}-{tag}"
    assert not is_at_least(tagged, release)
    assert is_at_least(release, tagged)
    assert parse_version(tagged).prerelease == tag


@given(version_triples())
def test_missing_components_count_as_zero(version: tuple[int, int, int]) -> None:
    major, minor, _ = version
    assert parse_version(f"{major}.{minor}").release == (major, minor, 0)
    assert parse_version(str(major)).release == (major, 0, 0)
