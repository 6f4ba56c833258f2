__version__ = "0.1.0"

from .errors import BenchKeeperError, ConfigError, ResultDirError, ResultIOError, ResultParseError
from .codec import DEFAULT_CODEC, JsonCodec
from .filename import ResultFileName, parse_result_filename
from .results import load_result
from .lister import ListedRow, list_results, scenarios_in_result_dir
from .cleanup import MultiStatus, cleanup_old_results
from .scenarios import list_scenario_modules
from .formatter import format_result
from .config import Settings, load_settings

__all__ = [
    "BenchKeeperError",
    "ConfigError",
    "ResultDirError",
    "ResultIOError",
    "ResultParseError",
    "DEFAULT_CODEC",
    "JsonCodec",
    "ResultFileName",
    "parse_result_filename",
    "load_result",
    "ListedRow",
    "list_results",
    "scenarios_in_result_dir",
    "MultiStatus",
    "cleanup_old_results",
    "list_scenario_modules",
    "format_result",
    "Settings",
    "load_settings",
]
