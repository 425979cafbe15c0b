from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator


class WalkError(RuntimeError):
    pass


def detect_text_encoding(sample: bytes) -> str:
    if sample.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"
    if sample.startswith(b"\xff\xfe") or sample.startswith(b"\xfe\xff"):
        return "utf-16"
    return "utf-8"


def is_likely_binary(sample: bytes) -> bool:
    if sample.startswith((b"\xff\xfe", b"\xfe\xff")):
        return False
    if b"\x00" in sample:
        return True
    if not sample:
        return False
    non_printable = 0
    for b in sample[:2048]:
        if b in (9, 10, 12, 13):
            continue
        if 32 <= b <= 126 or b >= 128:
            continue
        non_printable += 1
    return (non_printable / max(1, min(len(sample), 2048))) > 0.25


@dataclass(frozen=True)
class SourceFile:
    path: Path
    display_name: str
    size_bytes: int

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


def matches_extension(name: str, extensions: Iterable[str]) -> bool:
    lowered = name.lower()
    return any(lowered.endswith(ext) for ext in extensions)


def _walk_error(exc: OSError) -> WalkError:
    return WalkError(f"{exc.filename or exc}: {exc.strerror or exc}")


def _on_walk_error(exc: OSError) -> None:
    raise _walk_error(exc) from exc


def iter_source_files(
    root: Path,
    extensions: Iterable[str],
    ignore_dirs: Iterable[str],
) -> Iterator[SourceFile]:
    if not root.exists():
        raise WalkError(f"{root}: no such file or directory")

    exts = tuple(extensions)
    if root.is_file():
        if matches_extension(root.name, exts):
            yield SourceFile(display_name=str(root), size_bytes=_file_size(root), path=root)
        return

    ignored = set(ignore_dirs)
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
        dirnames[:] = sorted(d for d in dirnames if d not in ignored)
        for name in sorted(filenames):
            if not matches_extension(name, exts):
                continue
            p = Path(dirpath) / name
            yield SourceFile(display_name=str(p), size_bytes=_file_size(p), path=p)


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        pass
    # dangling symlink: listed by the walk, the read fails later
    try:
        return path.lstat().st_size
    except OSError as exc:
        raise _walk_error(exc) from exc
