"""
Loading bencher result files.

A result is a JSON array in the ``[status, message, rows, meta]`` shape. Only
the metadata at index 3 is interpreted here; everything else is opaque.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from benchkeeper.codec import DEFAULT_CODEC, JsonCodec
from benchkeeper.errors import ResultIOError, ResultParseError

META_INDEX = 3


def load_result(path: Union[str, Path], codec: JsonCodec = DEFAULT_CODEC) -> Any:
    """
    Read and decode one result file.

    Raises:
        ResultIOError: the file cannot be read
        ResultParseError: the file is not valid JSON
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ResultIOError(f"Can't read result file '{path}': {exc}", path) from exc
    try:
        return codec.decode(text)
    except json.JSONDecodeError as exc:
        raise ResultParseError(f"Can't parse result file '{path}': {exc}", path) from exc


def result_metadata(record: Any) -> Dict[str, Any]:
    if isinstance(record, list) and len(record) > META_INDEX and isinstance(record[META_INDEX], dict):
        return record[META_INDEX]
    return {}


def result_cpu(record: Any) -> Optional[str]:
    cpu_info = result_metadata(record).get("func.cpu_info")
    if not isinstance(cpu_info, list) or not cpu_info:
        # results produced without metadata carry no cpu information
        return None
    first = cpu_info[0]
    if not isinstance(first, dict):
        return None
    name = first.get("name")
    return None if name is None else str(name)


def result_module_startup(record: Any) -> bool:
    return bool(result_metadata(record).get("func.module_startup"))


def result_module_versions(record: Any) -> Optional[Dict[str, Any]]:
    versions = result_metadata(record).get("func.module_versions")
    return versions if isinstance(versions, dict) else None


def result_rows(record: Any) -> Optional[List[Any]]:
    if isinstance(record, list) and len(record) > 2 and isinstance(record[2], list):
        return record[2]
    return None
