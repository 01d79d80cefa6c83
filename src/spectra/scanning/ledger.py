"""Per-scan extension ledger: extension -> (count, size)."""

from typing import Dict, Optional

from ..models import ExtensionStat


def normalize_extension(extension: Optional[str]) -> Optional[str]:
    """Lower-case *extension* and strip one leading dot.

    Returns ``None`` for a missing or empty extension (``"README"``,
    ``".bashrc"``, ``"trailing."``).
    """
    if not extension:
        return None
    if extension.startswith("."):
        extension = extension[1:]
    if not extension:
        return None
    return extension.lower()


class ExtensionLedger:
    """Running per-extension totals for one scan.

    Not thread-safe; the scanner's aggregating thread is the only writer.
    """

    def __init__(self) -> None:
        self._stats: Dict[str, ExtensionStat] = {}

    def record(self, extension: Optional[str], size: int) -> None:
        """Count one file of *size* bytes under *extension*.

        Files without an extension are left out of the ledger; they still
        count toward the scan's global totals.
        """
        key = normalize_extension(extension)
        if key is None:
            return
        stat = self._stats.get(key)
        if stat is None:
            stat = self._stats[key] = ExtensionStat()
        stat.count += 1
        stat.size += size

    def __len__(self) -> int:
        return len(self._stats)

    def __contains__(self, extension: object) -> bool:
        return extension in self._stats

    def get(self, extension: str) -> Optional[ExtensionStat]:
        return self._stats.get(extension)

    def as_dict(self) -> Dict[str, ExtensionStat]:
        """Snapshot of the ledger as independent ``ExtensionStat`` copies."""
        return {
            ext: ExtensionStat(count=stat.count, size=stat.size)
            for ext, stat in self._stats.items()
        }
