import fnmatch
import importlib
import logging
import pkgutil
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_SCENARIO_NAMESPACE = "bencher.scenario"

_GLOB_CHARS = set("*?[")


def _iter_module_names(namespace: str):
    try:
        package = importlib.import_module(namespace)
    except ModuleNotFoundError as exc:
        # only a missing namespace means "no scenarios"; broken scenario code propagates
        if exc.name and namespace.startswith(exc.name):
            logger.info(f"Scenario namespace {namespace} is not installed")
            return
        raise
    path = getattr(package, "__path__", None)
    if path is None:
        return
    for info in pkgutil.walk_packages(path, prefix=namespace + "."):
        yield info.name


def _matches(name: str, query: str) -> bool:
    query = query.replace("::", ".").replace("/", ".")
    if _GLOB_CHARS & set(query):
        return fnmatch.fnmatchcase(name, query)
    return query.lower() in name.lower()


def list_scenario_modules(query: Optional[str] = None, namespace: str = DEFAULT_SCENARIO_NAMESPACE) -> List[str]:
    """
    List installed scenario modules under ``namespace``, without the prefix.

    ``query`` is a glob such as ``Accessors/*``; without glob characters it is
    a case-insensitive substring match.
    """
    prefix = namespace + "."
    names = sorted(name[len(prefix):] for name in _iter_module_names(namespace))
    if query:
        names = [n for n in names if _matches(n, query)]
    return names
