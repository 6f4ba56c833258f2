import json

import pytest

from benchkeeper.cli import main


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("BENCHKEEPER_CONFIG", str(tmp_path / "no-config.yaml"))
    monkeypatch.delenv("BENCHKEEPER_RESULT_DIR", raising=False)
    monkeypatch.delenv("BENCHKEEPER_NUM_KEEP", raising=False)


@pytest.fixture
def result_dir(tmp_path, write_result):
    write_result("Foo.2020-01-01T00-00-00.json", cpu="Intel", rows=[{"participant": "p1", "rate": 1.0}])
    write_result("Foo.2021-01-01T00-00-00.json", cpu="Intel", rows=[{"participant": "p1", "rate": 2.0}])
    write_result("Bar.module_startup.2020-01-01T00-00-00.json", cpu="AMD")
    return tmp_path


def test_list_filenames(result_dir, capsys):
    assert main(["list", "--result-dir", str(result_dir)]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "Bar.module_startup.2020-01-01T00-00-00.json",
        "Foo.2020-01-01T00-00-00.json",
        "Foo.2021-01-01T00-00-00.json",
    ]


def test_list_no_latest_from_env(result_dir, capsys, monkeypatch):
    monkeypatch.setenv("BENCHKEEPER_RESULT_DIR", str(result_dir))
    assert main(["list", "--no-latest"]) == 0
    assert capsys.readouterr().out.splitlines() == ["Foo.2020-01-01T00-00-00.json"]


def test_list_detail_json(result_dir, capsys):
    assert main(["list", "--result-dir", str(result_dir), "-l", "--json", "--module-startup"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert rows == [
        {
            "scenario": "Bar",
            "module_startup": True,
            "time": "2020-01-01T00:00:00",
            "cpu": "AMD",
            "filename": "Bar.module_startup.2020-01-01T00-00-00.json",
        }
    ]


def test_list_detail_table(result_dir, capsys):
    assert main(["list", "--result-dir", str(result_dir), "-l", "intel", "--latest"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split(" | ")[0].strip() == "scenario"
    assert len(lines) == 3
    assert "Foo.2021-01-01T00-00-00.json" in lines[2]


def test_list_fmt(result_dir, capsys):
    assert main(["list", "--result-dir", str(result_dir), "--fmt", "--include-scenario", "Foo"]) == 0
    out = capsys.readouterr().out
    assert "Foo.2020-01-01T00-00-00.json (cpu: Intel):" in out
    assert "2.0000" in out


def test_list_missing_dir(tmp_path, capsys):
    assert main(["list", "--result-dir", str(tmp_path / "nope")]) == 2
    assert "bk: error: Can't read result_dir" in capsys.readouterr().err


def test_missing_result_dir_setting(capsys):
    assert main(["list"]) == 2
    assert "result_dir is not set" in capsys.readouterr().err


def test_cleanup_dry_run(result_dir, capsys):
    assert main(["cleanup", "--result-dir", str(result_dir), "--dry-run"]) == 0
    assert capsys.readouterr().out.splitlines() == ["200 OK (dry-run): Foo.2020-01-01T00-00-00.json"]
    assert (result_dir / "Foo.2020-01-01T00-00-00.json").exists()


def test_cleanup_json(result_dir, capsys):
    assert main(["cleanup", "--result-dir", str(result_dir), "--json"]) == 0
    struct = json.loads(capsys.readouterr().out)
    assert struct[0] == 200
    assert [r["item_id"] for r in struct[3]["results"]] == ["Foo.2020-01-01T00-00-00.json"]
    assert not (result_dir / "Foo.2020-01-01T00-00-00.json").exists()


def test_cleanup_num_keep(result_dir, capsys):
    assert main(["cleanup", "--result-dir", str(result_dir), "--num-keep", "1"]) == 0
    assert capsys.readouterr().out == ""


def test_result_scenarios(result_dir, capsys):
    assert main(["result-scenarios", "--result-dir", str(result_dir)]) == 0
    assert capsys.readouterr().out.splitlines() == ["Bar", "Foo"]


def test_scenarios_missing_namespace(capsys):
    assert main(["scenarios", "--namespace", "bk_no_such_package.scenario"]) == 0
    assert capsys.readouterr().out == ""


def test_no_subcommand_prints_help(capsys):
    assert main([]) == 0
    assert "usage: bk" in capsys.readouterr().out
