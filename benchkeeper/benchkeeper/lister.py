import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from benchkeeper.codec import DEFAULT_CODEC, JsonCodec
from benchkeeper.errors import ResultDirError
from benchkeeper.filename import normalize_scenario, parse_result_filename
from benchkeeper.results import load_result, result_cpu, result_module_startup

logger = logging.getLogger(__name__)

DETAIL_FIELDS = ["scenario", "module_startup", "time", "cpu", "filename"]


@dataclass
class ListedRow:
    filename: str
    scenario: str
    module_startup: bool
    time: str
    cpu: Optional[str] = None
    result: Optional[Any] = None

    @property
    def group_key(self) -> str:
        # startup results sort first: 0 for startup, 1 for ordinary runs
        return "{}.{}.{}".format(
            self.scenario,
            0 if self.module_startup else 1,
            self.cpu or "",
        )

    def matches_query(self, query: Iterable[str]) -> bool:
        fields = [(self.cpu or "").lower(), self.filename.lower(), self.scenario.lower()]
        for word in query:
            word = word.lower()
            if not any(word in f for f in fields):
                return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        data = {name: getattr(self, name) for name in DETAIL_FIELDS}
        if self.result is not None:
            data["result"] = self.result
        return data


def _read_dir(result_dir: Path) -> List[str]:
    try:
        return sorted(os.listdir(result_dir))
    except OSError as exc:
        raise ResultDirError(f"Can't read result_dir '{result_dir}': {exc}", result_dir) from exc


def list_results(
    result_dir: Union[str, Path],
    include_scenarios: Optional[Iterable[str]] = None,
    exclude_scenarios: Optional[Iterable[str]] = None,
    module_startup: Optional[bool] = None,
    query: Optional[Iterable[str]] = None,
    latest: Optional[bool] = None,
    with_result: bool = False,
    codec: JsonCodec = DEFAULT_CODEC,
) -> List[ListedRow]:
    """
    List result files in ``result_dir``.

    Args:
        result_dir: Directory holding the result files
        include_scenarios: Only keep these scenarios (``Foo::Bar`` or ``Foo/Bar``)
        exclude_scenarios: Drop these scenarios; ignored when include_scenarios is given
        module_startup: Only keep module startup results (True) or the others (False)
        query: Every word must appear in the cpu, filename or scenario (case-insensitive)
        latest: True keeps only the latest result per scenario+startup+CPU,
            False keeps everything but the latest
        with_result: Keep the decoded result on each row
        codec: JSON codec used to decode the files

    Returns:
        Rows in filename order

    Raises:
        ResultDirError: the directory cannot be read
        ResultIOError, ResultParseError: a selected result file cannot be loaded
    """
    result_dir = Path(result_dir)
    include = [normalize_scenario(s) for s in include_scenarios or []]
    exclude = [normalize_scenario(s) for s in exclude_scenarios or []]
    query = list(query or [])

    latest_time: Dict[str, str] = {}
    rows: List[ListedRow] = []

    for filename in _read_dir(result_dir):
        parsed = parse_result_filename(filename)
        if parsed is None:
            logger.debug(f"Skipping {filename}: not a result filename")
            continue
        if include:
            if parsed.scenario not in include:
                continue
        elif exclude and parsed.scenario in exclude:
            continue

        record = load_result(result_dir / filename, codec=codec)
        row = ListedRow(
            filename=filename,
            scenario=parsed.scenario,
            module_startup=parsed.module_startup,
            time=parsed.time,
            cpu=result_cpu(record),
        )
        if result_module_startup(record):
            row.module_startup = True
        if with_result:
            row.result = record

        if module_startup is not None and row.module_startup != bool(module_startup):
            continue
        if query and not row.matches_query(query):
            continue

        key = row.group_key
        if key not in latest_time or latest_time[key] < row.time:
            latest_time[key] = row.time
        rows.append(row)

    # second pass: a row can only be judged once its whole group is known
    if latest is not None:
        if latest:
            rows = [r for r in rows if r.time == latest_time[r.group_key]]
        else:
            rows = [r for r in rows if r.time != latest_time[r.group_key]]

    logger.info(f"Listed {len(rows)} result(s) in {result_dir}")
    return rows


def scenarios_in_result_dir(result_dir: Union[str, Path], word: str = "") -> List[str]:
    """Scenarios that have at least one result file in ``result_dir``, filtered by prefix."""
    word = normalize_scenario(word or "")
    scenarios = set()
    for filename in _read_dir(Path(result_dir)):
        parsed = parse_result_filename(filename)
        if parsed is None:
            continue
        if parsed.scenario.startswith(word):
            scenarios.add(parsed.scenario)
    return sorted(scenarios)
