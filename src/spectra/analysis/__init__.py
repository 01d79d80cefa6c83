"""Post-scan enrichment of the largest files: entropy and filename risk."""

from .enrich import AnalyzedFileRecord, analyze_top_files
from .entropy import byte_entropy, sample_file_entropy
from .heuristics import RiskLevel, analyze_filename_risk

__all__ = [
    "AnalyzedFileRecord",
    "RiskLevel",
    "analyze_filename_risk",
    "analyze_top_files",
    "byte_entropy",
    "sample_file_entropy",
]
