"""Property-based tests for manifest generation."""

from __future__ import annotations

from hypothesis import given, strategies as st

from persistmount.mounts.generator import build_manifest
from persistmount.mounts.models import MOUNT_OPTIONS


_segment = st.text(
    alphabet=st.characters(min_codepoint=33, max_codepoint=126, exclude_characters="/"),
    min_size=1,
    max_size=12,
)
absolute_paths = st.lists(_segment, min_size=1, max_size=5).map(lambda parts: "/" + "/".join(parts))
roots = st.one_of(st.just("/"), absolute_paths)


@given(roots, st.lists(absolute_paths, max_size=20))
def test_keys_match_distinct_inputs(persist_root: str, paths: list[str]) -> None:
    manifest = build_manifest(persist_root, paths)
    assert set(manifest) == set(paths)
    assert list(manifest) == list(dict.fromkeys(paths))


@given(roots, st.lists(absolute_paths, max_size=20))
def test_device_is_plain_concatenation(persist_root: str, paths: list[str]) -> None:
    manifest = build_manifest(persist_root, paths)
    for path, spec in manifest.items():
        assert spec.device == persist_root + path
        assert spec.options == MOUNT_OPTIONS


@given(roots, st.lists(absolute_paths, max_size=20))
def test_generation_is_deterministic(persist_root: str, paths: list[str]) -> None:
    assert build_manifest(persist_root, paths) == build_manifest(persist_root, list(paths))


@given(roots, absolute_paths, st.integers(min_value=2, max_value=5))
def test_repeated_path_collapses(persist_root: str, path: str, copies: int) -> None:
    manifest = build_manifest(persist_root, [path] * copies)
    assert len(manifest) == 1
    assert manifest[path].device == persist_root + path
