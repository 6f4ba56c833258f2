import json

import pytest


def make_result(cpu=None, module_startup=None, module_versions=None, rows=None):
    meta = {}
    if cpu is not None:
        meta["func.cpu_info"] = [{"name": cpu}]
    if module_startup is not None:
        meta["func.module_startup"] = module_startup
    if module_versions is not None:
        meta["func.module_versions"] = module_versions
    return [200, "OK", rows if rows is not None else [], meta]


@pytest.fixture
def write_result(tmp_path):
    def _write(filename, **kwargs):
        path = tmp_path / filename
        path.write_text(json.dumps(make_result(**kwargs)), encoding="utf-8")
        return path

    return _write
