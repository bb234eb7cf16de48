"""Built-in input/expected tables used by ``pathcanon check``."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .canon import EFI, POSIX, InvalidPathError, PathStyle, canonicalize_style

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelfCheckCase:
    path: str
    expected: str | None  # None = InvalidPath


@dataclass
class CheckResult:
    case: SelfCheckCase
    actual: str | None

    @property
    def passed(self) -> bool:
        return self.actual == self.case.expected


def _cases(*pairs: tuple[str, str | None]) -> tuple[SelfCheckCase, ...]:
    return tuple(SelfCheckCase(path, expected) for path, expected in pairs)


POSIX_CASES = _cases(
    ("/", "/"),
    ("//", "/"),
    ("///", "/"),
    ("/abc", "/abc"),
    ("//abc", "/abc"),
    ("///abc", "/abc"),
    ("abc", "abc"),
    ("abc/", "abc"),
    ("abc//", "abc"),
    ("abc/123", "abc/123"),
    ("abc//123", "abc/123"),
    ("abc///123", "abc/123"),
    ("abc/./123", "abc/123"),
    ("abc/x/../123", "abc/123"),
    ("..", None),
    ("/..", None),
    ("../123", None),
    ("/../123", None),
    ("//../123", None),
    ("./../123", None),
    ("./", ""),
    (".//", ""),
    (".///", ""),
    ("./abc", "abc"),
    ("././abc", "abc"),
    ("./../abc", None),
    ("abc/.", "abc"),
    ("abc/./.", "abc"),
    ("/abc/.", "/abc"),
    ("/abc/./.", "/abc"),
    ("/./abc/.", "/abc"),
    ("/abc/././123", "/abc/123"),
    ("abc/../123", "123"),
    ("/abc/../123", "/123"),
    ("abc/./../123", "123"),
    ("/abc/./../123", "/123"),
    ("abc/def/../123", "abc/123"),
    ("/abc/def/../123", "/abc/123"),
    ("abc/def/../../123", "123"),
    ("/abc/def/../../123", "/123"),
    ("/abc/..", "/"),
    ("abc/..", ""),
    ("abc/123/..", "abc"),
    ("/abc/123/..", "/abc"),
    ("abc/123/../..", ""),
    ("/abc/123/../..", "/"),
    ("abc/123/../../.", ""),
    ("/abc/123/../../.", "/"),
    ("abc/123/.././..", ""),
    ("/abc/123/.././..", "/"),
    ("abc////..////z////", "z"),
    ("/////abc////..////z////", "/z"),
    ("d/./e/.././o/f/g/./h/../../.././n/././e/./i/..", "d/o/n/e"),
)

EFI_CASES = _cases(
    ("", ""),
    ("\\", "\\"),
    ("\\\\", "\\"),
    ("\\\\\\", "\\"),
    ("c:\\", "c:\\"),
    ("fs0:\\", "fs0:\\"),
    ("\\abc", "\\abc"),
    ("\\\\abc", "\\abc"),
    ("\\\\\\abc", "\\abc"),
    ("abc", "abc"),
    ("abc\\", "abc"),
    ("abc\\\\", "abc"),
    ("abc\\123", "abc\\123"),
    ("abc\\\\123", "abc\\123"),
    ("abc\\\\\\123", "abc\\123"),
    ("abc\\.\\123", "abc\\123"),
    ("abc\\x\\..\\123", "abc\\123"),
    ("c:abc", "c:abc"),
    ("fs0:abc", "fs0:abc"),
    ("..", None),
    ("\\..", None),
    ("..\\123", None),
    ("c:..\\123", None),
    ("fs0:..\\123", None),
    ("\\..\\123", None),
    ("\\\\..\\123", None),
    (".\\..\\123", None),
    (".\\", ""),
    (".\\\\", ""),
    (".\\\\\\", ""),
    (".\\abc", "abc"),
    (".\\.\\abc", "abc"),
    (".\\..\\abc", None),
    ("c:.\\abc", "c:abc"),
    ("fs0:.\\abc", "fs0:abc"),
    ("abc\\.", "abc"),
    ("abc\\.\\.", "abc"),
    ("\\abc\\.", "\\abc"),
    ("\\abc\\.\\.", "\\abc"),
    ("\\.\\abc\\.", "\\abc"),
    ("\\abc\\.\\.\\123", "\\abc\\123"),
    ("abc\\..\\123", "123"),
    ("\\abc\\..\\123", "\\123"),
    ("abc\\.\\..\\123", "123"),
    ("\\abc\\.\\..\\123", "\\123"),
    ("abc\\def\\..\\123", "abc\\123"),
    ("\\abc\\def\\..\\123", "\\abc\\123"),
    ("abc\\def\\..\\..\\123", "123"),
    ("\\abc\\def\\..\\..\\123", "\\123"),
    ("\\abc\\..", "\\"),
    ("abc\\..", ""),
    ("abc\\123\\..", "abc"),
    ("\\abc\\123\\..", "\\abc"),
    ("abc\\123\\..\\..", ""),
    ("\\abc\\123\\..\\..", "\\"),
    ("abc\\123\\..\\..\\.", ""),
    ("\\abc\\123\\..\\..\\.", "\\"),
    ("abc\\123\\..\\.\\..", ""),
    ("\\abc\\123\\..\\.\\..", "\\"),
    ("abc\\\\\\\\..\\\\\\\\z\\\\\\\\", "z"),
    ("\\\\\\\\\\abc\\\\\\\\..\\\\\\\\z\\\\\\\\", "\\z"),
    ("d\\.\\e\\..\\.\\o\\f\\g\\.\\h\\..\\..\\..\\.\\n\\.\\.\\e\\.\\i\\..", "d\\o\\n\\e"),
)

_TABLES: dict[str, tuple[SelfCheckCase, ...]] = {
    POSIX.name: POSIX_CASES,
    EFI.name: EFI_CASES,
}


def cases_for(style: PathStyle) -> tuple[SelfCheckCase, ...]:
    try:
        return _TABLES[style.name]
    except KeyError:
        raise ValueError(f"No self-check table for style {style.name!r}") from None


def run_case(case: SelfCheckCase, style: PathStyle) -> CheckResult:
    try:
        actual: str | None = canonicalize_style(case.path, style)
    except InvalidPathError:
        actual = None
    result = CheckResult(case=case, actual=actual)
    if not result.passed:
        logger.warning("%s self-check failed: %r, expected %r, got %r", style.name, case.path, case.expected, actual)
    return result


def run_self_check(style: PathStyle) -> list[CheckResult]:
    """Run every built-in case for ``style`` and return one result per case."""
    results = [run_case(case, style) for case in cases_for(style)]
    failed = sum(1 for r in results if not r.passed)
    logger.info("%s self-check: %d passed, %d failed", style.name, len(results) - failed, failed)
    return results
