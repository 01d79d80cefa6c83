"""Attach entropy and filename-risk annotations to a scan's largest files."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..logging_config import get_logger
from ..models import FileRecord
from .entropy import SAMPLE_SIZE, sample_file_entropy
from .heuristics import analyze_filename_risk

logger = get_logger(__name__)


@dataclass
class AnalyzedFileRecord:
    """A top file plus optional annotations; absent ones are left out of JSON."""

    path: str
    size_bytes: int
    entropy: Optional[float] = None
    risk_level: Optional[str] = None
    semantic_tag: Optional[str] = None

    @classmethod
    def from_record(cls, record: FileRecord) -> "AnalyzedFileRecord":
        return cls(path=record.path, size_bytes=record.size_bytes)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"path": self.path, "size_bytes": self.size_bytes}
        for key in ("entropy", "risk_level", "semantic_tag"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


def analyze_top_files(
    top_files: Iterable[FileRecord],
    analyze: bool = False,
    sample_size: int = SAMPLE_SIZE,
) -> List[AnalyzedFileRecord]:
    """Wrap *top_files* and, when *analyze* is set, annotate each one.

    Entropy is omitted for files that can no longer be read.
    """
    records = [AnalyzedFileRecord.from_record(r) for r in top_files]
    if not analyze:
        return records

    for record in records:
        try:
            record.entropy = sample_file_entropy(record.path, sample_size)
        except OSError as e:
            logger.debug("Entropy sampling skipped for %s: %s", record.path, e)

        risk = analyze_filename_risk(record.path)
        if risk is not None:
            record.risk_level = risk.value

    return records
