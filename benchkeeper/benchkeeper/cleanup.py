"""
Old result cleanup.

Keeps the ``num_keep + 1`` newest result files of every scenario, for the same
CPU, the same module startup flag and the same module versions, and deletes
the rest.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from benchkeeper.codec import DEFAULT_CODEC, JsonCodec
from benchkeeper.lister import list_results
from benchkeeper.results import load_result, result_module_versions

logger = logging.getLogger(__name__)


@dataclass
class ItemResult:
    item_id: str
    status: int
    message: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class MultiStatus:
    """Per-item outcomes of a batch operation"""
    results: List[ItemResult] = field(default_factory=list)

    def add_result(self, status: int, message: str, item_id: str):
        self.results.append(ItemResult(item_id=item_id, status=status, message=message))

    @property
    def deleted(self) -> List[str]:
        return [r.item_id for r in self.results if r.ok]

    @property
    def failed(self) -> List[str]:
        return [r.item_id for r in self.results if not r.ok]

    @property
    def status(self) -> int:
        if not self.results or not self.failed:
            return 200
        if not self.deleted:
            return 500
        return 207

    @property
    def message(self) -> str:
        if not self.results:
            return "OK"
        if not self.failed:
            return "All success"
        if not self.deleted:
            return "All failed"
        return "Partial success"

    def as_struct(self) -> List[Any]:
        return [self.status, self.message, None, {"results": [asdict(r) for r in self.results]}]


def _group_key(row, record, codec: JsonCodec) -> str:
    return "|".join(
        [
            row.scenario,
            row.cpu or "",
            "1" if row.module_startup else "0",
            codec.encode_canonical(result_module_versions(record)),
        ]
    )


def group_results(
    result_dir: Union[str, Path],
    query: Optional[Iterable[str]] = None,
    codec: JsonCodec = DEFAULT_CODEC,
) -> Dict[str, List[str]]:
    """Map each retention group key to its filenames, oldest first."""
    result_dir = Path(result_dir)
    rows = list_results(result_dir, query=query, codec=codec)

    groups: Dict[str, List[str]] = defaultdict(list)
    for row in rows:
        record = load_result(result_dir / row.filename, codec=codec)
        key = _group_key(row, record, codec)
        logger.debug(f"{row.filename}: group {key}")
        groups[key].append(row.filename)
    return {key: sorted(filenames) for key, filenames in groups.items()}


def select_old_results(groups: Dict[str, List[str]], num_keep: int = 0) -> List[str]:
    """Filenames to delete so that every group keeps its ``num_keep + 1`` newest files."""
    if num_keep < 0:
        raise ValueError(f"num_keep must be >= 0, got {num_keep}")
    doomed = []
    for key in sorted(groups):
        filenames = sorted(groups[key])
        if len(filenames) <= num_keep + 1:
            continue
        doomed.extend(filenames[: len(filenames) - num_keep - 1])
    return doomed


def cleanup_old_results(
    result_dir: Union[str, Path],
    num_keep: int = 0,
    query: Optional[Iterable[str]] = None,
    dry_run: bool = False,
    codec: JsonCodec = DEFAULT_CODEC,
) -> MultiStatus:
    """
    Delete old results.

    By default only the latest result of each scenario is kept, for the same
    CPU and the same module versions. Use ``dry_run`` to see which files would
    be deleted without deleting them.

    Args:
        result_dir: Directory holding the result files
        num_keep: Number of old results to keep besides the latest one
        query: Only consider results matching every query word
        dry_run: Report the deletions without touching the filesystem
        codec: JSON codec used to decode the files

    Returns:
        MultiStatus with one item per deletion candidate
    """
    if num_keep < 0:
        raise ValueError(f"num_keep must be >= 0, got {num_keep}")
    result_dir = Path(result_dir)
    groups = group_results(result_dir, query=query, codec=codec)

    res = MultiStatus()
    for filename in select_old_results(groups, num_keep=num_keep):
        if dry_run:
            logger.warning(f"[DRY-RUN] Deleting {filename} ...")
            res.add_result(200, "OK (dry-run)", item_id=filename)
            continue
        logger.warning(f"Deleting {filename} ...")
        try:
            (result_dir / filename).unlink()
        except OSError as exc:
            logger.warning(f"Can't unlink '{filename}': {exc}")
            res.add_result(500, f"Can't unlink: {exc}", item_id=filename)
        else:
            res.add_result(200, "OK", item_id=filename)
    return res
