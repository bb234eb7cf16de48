"""Textual path canonicalization.

Resolves ``.`` and ``..`` components and collapses repeated separators without
touching the filesystem. Two styles share one algorithm:

- POSIX: ``/`` separators, no volume prefix, the empty string is invalid.
- EFI: ``\\`` separators and an optional ``name:`` volume prefix which is
  passed through verbatim. An empty path (or a bare volume) is returned as is.

A ``..`` cancels the nearest earlier component that is still live. When there
is nothing left to cancel the whole path is rejected with InvalidPathError;
no partial result is produced and the input string is never modified.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

VOLUME_MARKER = ":"
_CURRENT_DIR = "."
_PARENT_DIR = ".."


class InvalidPathError(ValueError):
    """Raised when a path ascends above its root or is otherwise unresolvable."""

    def __init__(self, path: str, reason: str = "invalid path") -> None:
        super().__init__(f"{reason}: {path!r}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class PathStyle:
    name: str
    separator: str
    volume_prefix: bool = False


POSIX = PathStyle(name="posix", separator="/")
EFI = PathStyle(name="efi", separator="\\", volume_prefix=True)

STYLES: dict[str, PathStyle] = {POSIX.name: POSIX, EFI.name: EFI}


def get_style(name: str) -> PathStyle:
    """Look up a built-in style by name (case-insensitive)."""
    style = STYLES.get(str(name).strip().lower())
    if style is None:
        known = ", ".join(sorted(STYLES))
        raise ValueError(f"Unknown path style {name!r} (expected one of: {known})")
    return style


@dataclass
class Component:
    """One separator-delimited piece of a path.

    ``offset`` is the index of the first character in the (post-prefix) path.
    Elided components stay in the list but contribute nothing to the output.
    """

    text: str
    offset: int
    elided: bool = False

    @property
    def length(self) -> int:
        return 0 if self.elided else len(self.text)

    @property
    def live(self) -> bool:
        return self.length > 0

    def elide(self) -> None:
        self.elided = True


@dataclass
class CanonTrace:
    """Diagnostic record of a single canonicalization."""

    path: str
    style: PathStyle
    volume: str = ""
    tail: str = ""
    split: list[Component] = field(default_factory=list)
    resolved: list[Component] = field(default_factory=list)
    result: str | None = None
    error: str | None = None

    @property
    def valid(self) -> bool:
        return self.error is None


def _check_separator(separator: str) -> None:
    if not isinstance(separator, str) or len(separator) != 1:
        raise ValueError(f"Separator must be a single character, got {separator!r}")


def split_volume(path: str) -> tuple[str, str]:
    """Split ``path`` at the first colon into (volume, tail).

    The volume keeps its trailing colon. Without a colon the volume is empty.
    The volume name itself is not validated.
    """
    head, marker, tail = path.partition(VOLUME_MARKER)
    if not marker:
        return "", path
    return head + marker, tail


def split_components(path: str, separator: str) -> list[Component]:
    """Split ``path`` on every occurrence of ``separator``.

    Always returns ``1 + path.count(separator)`` components; runs of separators
    produce empty components.
    """
    _check_separator(separator)
    components: list[Component] = []
    offset = 0
    for text in path.split(separator):
        components.append(Component(text=text, offset=offset))
        offset += len(text) + 1
    return components


def resolve_components(components: list[Component], path: str = "") -> None:
    """Elide ``.`` and ``..`` components in a single left-to-right pass.

    Each ``..`` also elides the nearest earlier live component. Raises
    InvalidPathError as soon as a ``..`` has nothing left to cancel.
    """
    live: list[int] = []
    for index, component in enumerate(components):
        if component.elided:
            continue
        if component.text == _CURRENT_DIR:
            component.elide()
        elif component.text == _PARENT_DIR:
            component.elide()
            if not live:
                raise InvalidPathError(path, "path ascends above its root")
            components[live.pop()].elide()
        elif component.live:
            live.append(index)


def join_components(components: list[Component], separator: str, absolute: bool = False) -> str:
    """Join live components with single separators.

    An absolute path keeps one leading separator, so a path that resolves to
    nothing becomes the bare separator.
    """
    _check_separator(separator)
    body = separator.join(c.text for c in components if c.live)
    if absolute:
        return separator + body
    return body


def format_component(component: Component, limit: int | None = None) -> str:
    """Render a component as ``" <len> <text>"`` for debug tables.

    With ``limit`` the text is cut to at most ``limit`` characters.
    """
    length = component.length
    text = component.text[:length]
    if limit is not None:
        text = text[: max(0, limit)]
    return f" {length:2d} {text}"


def format_components(components: list[Component], limit: int | None = None) -> str:
    return "\n".join(format_component(c, limit) for c in components)


def _snapshot(components: list[Component]) -> list[Component]:
    return [Component(text=c.text, offset=c.offset, elided=c.elided) for c in components]


def canonicalize(path: str, separator: str = "/", volume_prefix: bool = False) -> str:
    """Return the canonical form of ``path``.

    Raises InvalidPathError if the path ascends above its root or, without a
    volume prefix, if it is empty.
    """
    _check_separator(separator)
    volume, tail = split_volume(path) if volume_prefix else ("", path)

    if not tail:
        if volume_prefix:
            return path
        raise InvalidPathError(path, "empty path")

    components = split_components(tail, separator)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("in: %s (%d)\n%s", tail, len(components), format_components(components))

    resolve_components(components, path)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("resolved:\n%s", format_components(components))

    return volume + join_components(components, separator, absolute=tail.startswith(separator))


def canonicalize_style(path: str, style: PathStyle) -> str:
    return canonicalize(path, separator=style.separator, volume_prefix=style.volume_prefix)


def canonicalize_path(path: str) -> str:
    """Canonicalize a POSIX-style path."""
    return canonicalize_style(path, POSIX)


def canonicalize_efi_path(path: str) -> str:
    """Canonicalize an EFI-style path (backslashes, optional ``volume:`` prefix)."""
    return canonicalize_style(path, EFI)


def explain(path: str, style: PathStyle = POSIX) -> CanonTrace:
    """Canonicalize ``path`` and record the component tables along the way.

    Never raises InvalidPathError; failures are reported in ``trace.error``
    with ``trace.resolved`` holding the components as they stood when the
    walk stopped.
    """
    trace = CanonTrace(path=path, style=style)
    trace.volume, trace.tail = split_volume(path) if style.volume_prefix else ("", path)

    if not trace.tail:
        if style.volume_prefix:
            trace.result = path
        else:
            trace.error = str(InvalidPathError(path, "empty path"))
        return trace

    components = split_components(trace.tail, style.separator)
    trace.split = _snapshot(components)
    trace.resolved = components
    try:
        resolve_components(components, path)
    except InvalidPathError as e:
        trace.error = str(e)
        return trace

    absolute = trace.tail.startswith(style.separator)
    trace.result = trace.volume + join_components(components, style.separator, absolute=absolute)
    return trace
