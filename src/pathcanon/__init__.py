"""pathcanon - textual canonicalization of POSIX and EFI-style paths."""

from __future__ import annotations

from .canon import (
    EFI,
    POSIX,
    Component,
    InvalidPathError,
    PathStyle,
    canonicalize,
    canonicalize_efi_path,
    canonicalize_path,
    canonicalize_style,
    explain,
    get_style,
)

__version__ = "0.1.0"

__all__ = [
    "EFI",
    "POSIX",
    "Component",
    "InvalidPathError",
    "PathStyle",
    "canonicalize",
    "canonicalize_efi_path",
    "canonicalize_path",
    "canonicalize_style",
    "explain",
    "get_style",
]
