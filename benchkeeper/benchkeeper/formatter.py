from typing import Any, Dict, Iterable, List, Optional

from benchkeeper.codec import DEFAULT_CODEC, JsonCodec
from benchkeeper.results import result_metadata, result_rows


def _fmt(value):
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        return f"{value:.4f}"
    if isinstance(value, (dict, list)):
        return DEFAULT_CODEC.encode_canonical(value)
    return str(value)


def _fields_of(rows: Iterable[Dict[str, Any]]) -> List[str]:
    fields: List[str] = []
    for row in rows:
        for k in row:
            if k not in fields:
                fields.append(k)
    return fields


def format_table(rows: List[Dict[str, Any]], fields: Optional[List[str]] = None) -> str:
    """Render dicts as a plain text table, one column per field."""
    fields = list(fields) if fields else _fields_of(rows)
    if not fields:
        return ""
    cells = [[_fmt(row.get(f)) for f in fields] for row in rows]
    widths = [max([len(f)] + [len(c[i]) for c in cells]) for i, f in enumerate(fields)]

    def line(values):
        return " | ".join(v.ljust(w) for v, w in zip(values, widths)).rstrip()

    lines = [line(fields), "-+-".join("-" * w for w in widths)]
    lines.extend(line(c) for c in cells)
    return "\n".join(lines)


def format_result(record: Any, codec: JsonCodec = DEFAULT_CODEC) -> str:
    """Human readable rendering of one bencher result."""
    rows = result_rows(record)
    if rows is None or not all(isinstance(r, dict) for r in rows):
        return codec.encode(record)
    fields = result_metadata(record).get("table.fields")
    return format_table(rows, fields if isinstance(fields, list) else None)


def format_listing(rows, codec: JsonCodec = DEFAULT_CODEC) -> str:
    """Render listed rows together with their formatted results."""
    content = []
    for row in rows:
        content.append(f"{row.filename} (cpu: {row.cpu or ''}):\n")
        content.append(format_result(row.result, codec=codec))
        content.append("\n\n")
    return "".join(content)
