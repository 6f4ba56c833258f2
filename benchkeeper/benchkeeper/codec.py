"""
JSON codec for result files.

One ``JsonCodec`` is built at import time as ``DEFAULT_CODEC`` and passed to
the listing and cleanup functions through their ``codec`` argument.
"""

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class JsonCodec:
    indent: int = 2

    def decode(self, text: str) -> Any:
        return json.loads(text)

    def encode(self, obj: Any) -> str:
        return json.dumps(self.clean(obj), indent=self.indent, ensure_ascii=False)

    def encode_canonical(self, obj: Any) -> str:
        """Compact, key-sorted encoding; equal mappings give equal strings."""
        return json.dumps(self.clean(obj), sort_keys=True, separators=(",", ":"), ensure_ascii=False)

    def clean(self, obj: Any) -> Any:
        """Return a copy of ``obj`` holding only JSON-compatible values."""
        if obj is None or isinstance(obj, (str, int, float, bool)):
            return obj
        if isinstance(obj, dict):
            return {str(k): self.clean(v) for k, v in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [self.clean(x) for x in obj]
        if isinstance(obj, (set, frozenset)):
            return sorted((self.clean(x) for x in obj), key=str)
        if hasattr(obj, "to_dict"):
            return self.clean(obj.to_dict())
        if isinstance(obj, bytes):
            return obj.decode("utf-8", errors="replace")
        # version objects, paths, datetimes
        return str(obj)


DEFAULT_CODEC = JsonCodec()
