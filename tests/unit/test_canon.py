"""Tests for pathcanon.canon: splitting, resolution, reconstruction, volumes."""

from __future__ import annotations

import logging

import pytest

from pathcanon.canon import (
    EFI,
    POSIX,
    Component,
    InvalidPathError,
    canonicalize,
    canonicalize_efi_path,
    canonicalize_path,
    explain,
    format_component,
    get_style,
    join_components,
    resolve_components,
    split_components,
    split_volume,
)


def _texts(components: list[Component]) -> list[str]:
    return [c.text for c in components]


def _lengths(components: list[Component]) -> list[int]:
    return [c.length for c in components]


class TestSplitComponents:
    def test_simple(self) -> None:
        comps = split_components("abc/123", "/")
        assert _texts(comps) == ["abc", "123"]
        assert [c.offset for c in comps] == [0, 4]

    def test_count_is_one_plus_separators(self) -> None:
        path = "//a///b/"
        assert len(split_components(path, "/")) == 1 + path.count("/")

    def test_consecutive_separators_give_empty_components(self) -> None:
        assert _texts(split_components("a//b", "/")) == ["a", "", "b"]

    def test_leading_separator_gives_empty_first_component(self) -> None:
        assert _texts(split_components("/abc", "/")) == ["", "abc"]

    def test_empty_string_gives_one_empty_component(self) -> None:
        comps = split_components("", "/")
        assert len(comps) == 1
        assert comps[0].length == 0

    def test_backslash_separator(self) -> None:
        assert _texts(split_components("a\\b/c", "\\")) == ["a", "b/c"]

    def test_separator_must_be_single_character(self) -> None:
        with pytest.raises(ValueError, match="single character"):
            split_components("a/b", "//")
        with pytest.raises(ValueError, match="single character"):
            split_components("a/b", "")


class TestResolveComponents:
    def test_dot_is_elided(self) -> None:
        comps = split_components("a/./b", "/")
        resolve_components(comps)
        assert _lengths(comps) == [1, 0, 1]

    def test_dotdot_elides_previous(self) -> None:
        comps = split_components("a/b/../c", "/")
        resolve_components(comps)
        assert _lengths(comps) == [1, 0, 0, 1]
        assert comps[1].elided
        assert comps[2].elided

    def test_dotdot_skips_elided_and_empty_components(self) -> None:
        comps = split_components("a//./..", "/")
        resolve_components(comps)
        assert all(c.length == 0 for c in comps)
        assert comps[0].elided

    def test_dotdot_binds_to_nearest_survivor_not_textual_neighbour(self) -> None:
        comps = split_components("a/b/c/../../d", "/")
        resolve_components(comps)
        assert [c.text for c in comps if c.live] == ["a", "d"]

    def test_unresolvable_dotdot_raises(self) -> None:
        comps = split_components("../x", "/")
        with pytest.raises(InvalidPathError):
            resolve_components(comps, "../x")

    def test_stops_at_first_unresolvable_dotdot(self) -> None:
        comps = split_components("a/../../b/.", "/")
        with pytest.raises(InvalidPathError):
            resolve_components(comps)
        # components after the failing '..' are never visited
        assert not comps[3].elided
        assert not comps[4].elided

    def test_dot_prefixed_names_are_ordinary(self) -> None:
        comps = split_components(".../.hidden/..x", "/")
        resolve_components(comps)
        assert _lengths(comps) == [3, 7, 3]


class TestJoinComponents:
    def test_relative(self) -> None:
        comps = split_components("a//b/", "/")
        assert join_components(comps, "/") == "a/b"

    def test_absolute_keeps_single_leading_separator(self) -> None:
        comps = split_components("///a//b", "/")
        assert join_components(comps, "/", absolute=True) == "/a/b"

    def test_absolute_with_no_survivors_is_root(self) -> None:
        comps = split_components("/abc/..", "/")
        resolve_components(comps)
        assert join_components(comps, "/", absolute=True) == "/"

    def test_relative_with_no_survivors_is_empty(self) -> None:
        comps = split_components("abc/..", "/")
        resolve_components(comps)
        assert join_components(comps, "/") == ""


class TestSplitVolume:
    def test_no_colon(self) -> None:
        assert split_volume("\\abc") == ("", "\\abc")

    def test_volume_with_tail(self) -> None:
        assert split_volume("fs0:\\abc") == ("fs0:", "\\abc")

    def test_bare_volume(self) -> None:
        assert split_volume("c:") == ("c:", "")

    def test_first_colon_wins(self) -> None:
        assert split_volume("a:b:c") == ("a:", "b:c")

    def test_volume_name_not_validated(self) -> None:
        assert split_volume("we ird\\name:x") == ("we ird\\name:", "x")


class TestCanonicalizePosix:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("abc//123", "abc/123"),
            ("abc/x/../123", "abc/123"),
            ("./", ""),
            ("/abc/..", "/"),
            ("d/./e/.././o/f/g/./h/../../.././n/././e/./i/..", "d/o/n/e"),
        ],
    )
    def test_literal_scenarios(self, path: str, expected: str) -> None:
        assert canonicalize_path(path) == expected

    @pytest.mark.parametrize("path", ["..", "/..", "../123", "//../123", "./../abc", "a/../.."])
    def test_ascending_above_root_is_invalid(self, path: str) -> None:
        with pytest.raises(InvalidPathError):
            canonicalize_path(path)

    def test_empty_path_is_invalid(self) -> None:
        with pytest.raises(InvalidPathError, match="empty path"):
            canonicalize_path("")

    def test_error_carries_path(self) -> None:
        with pytest.raises(InvalidPathError) as exc_info:
            canonicalize_path("/abc/../..")
        assert exc_info.value.path == "/abc/../.."
        assert isinstance(exc_info.value, ValueError)

    def test_colon_is_ordinary_text(self) -> None:
        assert canonicalize_path("c:/x/../y") == "c:/y"

    def test_input_is_not_modified_on_failure(self) -> None:
        path = "a/b/../../.."
        with pytest.raises(InvalidPathError):
            canonicalize_path(path)
        assert path == "a/b/../../.."

    def test_default_separator_is_slash(self) -> None:
        assert canonicalize("a/./b") == "a/b"


class TestCanonicalizeEfi:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("fs0:\\", "fs0:\\"),
            ("c:.\\abc", "c:abc"),
            ("\\\\abc\\\\..\\\\z\\\\", "\\z"),
        ],
    )
    def test_literal_scenarios(self, path: str, expected: str) -> None:
        assert canonicalize_efi_path(path) == expected

    def test_volume_dotdot_is_invalid(self) -> None:
        with pytest.raises(InvalidPathError):
            canonicalize_efi_path("fs0:..\\123")

    def test_empty_path_is_returned_unchanged(self) -> None:
        assert canonicalize_efi_path("") == ""

    def test_bare_volume_is_returned_unchanged(self) -> None:
        assert canonicalize_efi_path("fs0:") == "fs0:"

    def test_volume_is_not_canonicalized(self) -> None:
        assert canonicalize_efi_path("a.\\..:\\x\\..\\y") == "a.\\..:\\y"

    def test_forward_slash_is_ordinary_text(self) -> None:
        assert canonicalize_efi_path("a/b\\..\\c") == "c"

    def test_generic_entry_point(self) -> None:
        assert canonicalize("fs0:\\a\\.\\b", separator="\\", volume_prefix=True) == "fs0:\\a\\b"


class TestProperties:
    _POSIX_SAMPLES = [
        "/",
        "abc",
        "/a/b/../c/./d//",
        "a/./b/../../c",
        "x/y/z/../../..",
        "////q",
        "./././r/",
    ]

    @pytest.mark.parametrize("path", _POSIX_SAMPLES)
    def test_idempotent(self, path: str) -> None:
        once = canonicalize_path(path)
        if once:
            assert canonicalize_path(once) == once

    @pytest.mark.parametrize("path", _POSIX_SAMPLES)
    def test_length_does_not_increase(self, path: str) -> None:
        assert len(canonicalize_path(path)) <= len(path)

    @pytest.mark.parametrize("path", _POSIX_SAMPLES)
    def test_separator_runs_collapse(self, path: str) -> None:
        doubled = path.replace("/", "///")
        assert canonicalize_path(doubled) == canonicalize_path(path)

    @pytest.mark.parametrize("path", ["/a", "/a/..", "//a/./b", "/./"])
    def test_absolute_is_preserved(self, path: str) -> None:
        assert canonicalize_path(path).startswith("/")

    def test_efi_length_does_not_increase_after_prefix(self) -> None:
        path = "fs0:\\\\a\\.\\b\\..\\c"
        volume, tail = split_volume(path)
        result = canonicalize_efi_path(path)
        assert result.startswith(volume)
        assert len(result) - len(volume) <= len(tail)

    def test_deep_path_resolves(self) -> None:
        path = "/".join(["d"] * 5000 + [".."] * 4999)
        assert canonicalize_path(path) == "d"


class TestFormatComponent:
    def test_live_component(self) -> None:
        assert format_component(Component(text="abc", offset=0)) == "  3 abc"

    def test_elided_component_has_no_text(self) -> None:
        assert format_component(Component(text="abc", offset=0, elided=True)) == "  0 "

    def test_no_truncation_by_default(self) -> None:
        long = "x" * 100
        assert format_component(Component(text=long, offset=0)).endswith(long)

    def test_limit_truncates_text(self) -> None:
        assert format_component(Component(text="abcdef", offset=0), limit=3) == "  6 abc"


class TestExplain:
    def test_valid_trace(self) -> None:
        trace = explain("/a/../b", POSIX)
        assert trace.valid
        assert trace.result == "/b"
        assert _texts(trace.split) == ["", "a", "..", "b"]
        assert not any(c.elided for c in trace.split)
        assert [c.elided for c in trace.resolved] == [False, True, True, False]

    def test_invalid_trace_does_not_raise(self) -> None:
        trace = explain("a/../..", POSIX)
        assert not trace.valid
        assert trace.result is None
        assert "ascends above its root" in (trace.error or "")
        assert trace.resolved[0].elided

    def test_efi_trace_records_volume(self) -> None:
        trace = explain("fs0:.\\abc", EFI)
        assert trace.volume == "fs0:"
        assert trace.tail == ".\\abc"
        assert trace.result == "fs0:abc"

    def test_empty_posix_trace(self) -> None:
        trace = explain("", POSIX)
        assert not trace.valid
        assert trace.split == []

    def test_bare_volume_trace(self) -> None:
        trace = explain("c:", EFI)
        assert trace.result == "c:"
        assert trace.split == []


class TestGetStyle:
    def test_known_styles(self) -> None:
        assert get_style("posix") is POSIX
        assert get_style(" EFI ") is EFI

    def test_unknown_style(self) -> None:
        with pytest.raises(ValueError, match="Unknown path style"):
            get_style("dos")


class TestDebugLogging:
    def test_component_tables_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="pathcanon.canon"):
            canonicalize_path("a/./b")
        assert "in: a/./b (3)" in caplog.text
        assert "resolved:" in caplog.text

    def test_nothing_logged_above_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="pathcanon.canon"):
            canonicalize_path("a/./b")
        assert caplog.text == ""
