from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .console import RichLogger
from .extractors import extract_occurrences
from .input_sources import SourceFile, detect_text_encoding, is_likely_binary
from .models import QueryOccurrence

BINARY_SAMPLE_BYTES = 4096


@dataclass
class FileScanResult:
    occurrences: List[QueryOccurrence] = field(default_factory=list)
    skipped: bool = False


class Scanner:
    def __init__(self, logger: RichLogger, max_file_mb: Optional[int] = None):
        self.logger = logger
        self.max_file_bytes = max(1, max_file_mb) * 1024 * 1024 if max_file_mb else None

    def scan_file(self, item: SourceFile) -> FileScanResult:
        if self.max_file_bytes is not None and item.size_bytes > self.max_file_bytes:
            self.logger.skipped(item.display_name, f"larger than the size cap ({item.size_bytes} bytes)")
            return FileScanResult(skipped=True)

        try:
            data = item.read_bytes()
        except OSError as e:
            self.logger.skipped(item.display_name, f"read failed: {e}")
            return FileScanResult(skipped=True)

        sample = data[:BINARY_SAMPLE_BYTES]
        if is_likely_binary(sample):
            self.logger.debug(f"Looks binary, scanning anyway: {item.display_name}")

        text = data.decode(detect_text_encoding(sample), errors="replace")
        occurrences = extract_occurrences(text, item.display_name)
        if occurrences:
            self.logger.debug(f"Hit {item.display_name}: statements={len(occurrences)}")
        return FileScanResult(occurrences=occurrences)
