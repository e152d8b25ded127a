from __future__ import annotations

import json
import logging

from cargo_optimizer.cli import main, write_plan
from cargo_optimizer.config import configure_logging


def write_json(path, data) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_write_plan_creates_parent_dirs(tmp_path) -> None:
    target = tmp_path / "nested" / "plan.json"

    write_plan({"b": 1, "a": 2}, str(target))

    assert json.loads(target.read_text(encoding="utf-8")) == {"a": 2, "b": 1}


def test_optimize_command(tmp_path, capsys) -> None:
    source = write_json(tmp_path / "in.json", {
        "container_quantities": {"20GP": 1},
        "cargo_items": [{
            "id": "large", "name": "Large Box", "length": 1200, "width": 1000, "height": 800,
            "weight": 250, "quantity": 15, "is_fragile": False, "packaging": "other",
        }],
    })
    target = tmp_path / "out.json"

    code = main(["optimize", "--input", source, "--output", str(target)])

    assert code == 0
    plan = json.loads(target.read_text(encoding="utf-8"))
    assert plan["metrics"]["units_loaded"] == 15
    assert "Units Loaded: 15" in capsys.readouterr().out


def test_bundle_command(tmp_path) -> None:
    source = write_json(tmp_path / "in.json", {
        "item": {"id": "w", "name": "W", "length": 100, "width": 100, "height": 100,
                 "weight": 1, "quantity": 4},
    })
    target = tmp_path / "out.json"

    assert main(["bundle", "--input", source, "--output", str(target)]) == 0

    configs = json.loads(target.read_text(encoding="utf-8"))
    assert [c["base_factors"] for c in configs] == [[1, 2, 2], [1, 1, 4]]


def test_filler_command(tmp_path) -> None:
    source = write_json(tmp_path / "in.json", {
        "container": {"id": "c", "length": 2000, "width": 1000, "height": 1000, "max_weight": 1000},
        "result": {
            "total_weight": 0,
            "remaining_spaces": [{"x": 0, "y": 0, "z": 0, "length": 2000, "width": 1000, "height": 1000}],
        },
        "catalog": [{"name": "crate", "length": 1000, "width": 1000, "height": 1000, "weight": 5}],
    })
    target = tmp_path / "out.json"

    assert main(["filler", "--input", source, "--output", str(target)]) == 0

    options = json.loads(target.read_text(encoding="utf-8"))
    assert options[0]["quantity"] == 2


def test_missing_containers_exits_with_error(tmp_path, capsys) -> None:
    source = write_json(tmp_path / "in.json", {"cargo_items": []})

    code = main(["optimize", "--input", source, "--output", str(tmp_path / "out.json")])

    assert code == 1
    assert "error:" in capsys.readouterr().err
    assert not (tmp_path / "out.json").exists()


def test_unwritable_output_exits_with_error(tmp_path, capsys) -> None:
    source = write_json(tmp_path / "in.json", {
        "item": {"id": "w", "name": "W", "length": 100, "width": 100, "height": 100,
                 "weight": 1, "quantity": 4},
    })
    # a regular file where the output folder should be
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    code = main(["bundle", "--input", source, "--output", str(blocker / "out.json")])

    assert code == 1
    assert "error:" in capsys.readouterr().err


def test_log_level_flag_is_case_insensitive(tmp_path) -> None:
    source = write_json(tmp_path / "in.json", {
        "item": {"id": "w", "name": "W", "length": 100, "width": 100, "height": 100,
                 "weight": 1, "quantity": 4},
    })
    root = logging.getLogger()
    previous = root.level
    try:
        code = main(["--log-level", "debug", "bundle", "--input", source,
                     "--output", str(tmp_path / "out.json")])

        assert code == 0
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)


def test_configure_logging_accepts_lowercase_level() -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("warning")

        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
