import re
from dataclasses import dataclass
from typing import Optional

RESULT_FILENAME_RE = re.compile(
    r"\A"
    r"(\w+(?:-\w+)*)"
    r"(\.module_startup)?"
    r"\.(\d\d\d\d)-(\d\d)-(\d\d)T(\d\d)-(\d\d)-(\d\d)"
    r"\.json"
    r"\Z",
    re.ASCII,
)

NAMESPACE_SEP = "::"


@dataclass(frozen=True)
class ResultFileName:
    """Fields encoded in a result filename"""
    scenario: str
    module_startup: bool
    time: str


def parse_result_filename(filename: str) -> Optional[ResultFileName]:
    """
    Parse ``<scenario>[.module_startup].YYYY-MM-DDTHH-MM-SS.json``.

    Returns None for anything else; callers skip such names.
    """
    m = RESULT_FILENAME_RE.match(filename)
    if not m:
        return None
    token, startup, year, month, day, hour, minute, second = m.groups()
    return ResultFileName(
        scenario=token.replace("-", NAMESPACE_SEP),
        module_startup=bool(startup),
        time=f"{year}-{month}-{day}T{hour}:{minute}:{second}",
    )


def normalize_scenario(name: str) -> str:
    return name.replace("/", NAMESPACE_SEP)


def scenario_to_filename_token(scenario: str) -> str:
    return normalize_scenario(scenario).replace(NAMESPACE_SEP, "-")
