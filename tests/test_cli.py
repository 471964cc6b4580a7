import json

import pytest
from typer.testing import CliRunner

from cqlcatalog.cli.cli import app
from cqlcatalog.core.adapters.snapshot import dump_snapshot, load_snapshot
from cqlcatalog.core.types import DECLARED_TYPES

runner = CliRunner()


@pytest.fixture
def snapshot_file(tmp_path, shop_schema):
    path = tmp_path / "schema.json"
    dump_snapshot(shop_schema, path)
    return path


def _json(result) -> list[dict]:
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_types_json_lists_every_declared_type():
    records = _json(runner.invoke(app, ["types", "--format", "json"]))

    assert len(records) == len(DECLARED_TYPES)
    assert list(records[0])[:2] == ["TYPE_NAME", "DATA_TYPE"]


def test_udts_from_snapshot(snapshot_file):
    records = _json(
        runner.invoke(
            app,
            ["--snapshot", str(snapshot_file), "udts", "--name", "shop.Address", "-f", "json"],
        )
    )

    assert [(r["TYPE_SCHEM"], r["TYPE_NAME"]) for r in records] == [("shop", "address")]


def test_udts_category_filter(snapshot_file):
    records = _json(
        runner.invoke(
            app,
            ["-s", str(snapshot_file), "udts", "--category", "STRUCT", "-f", "json"],
        )
    )

    assert records == []


def test_udts_unknown_category_is_an_input_error(snapshot_file):
    result = runner.invoke(app, ["-s", str(snapshot_file), "udts", "--category", "BLOB"])

    assert result.exit_code == 2


def test_functions_from_snapshot(snapshot_file):
    records = _json(
        runner.invoke(
            app, ["-s", str(snapshot_file), "functions", "--schema", "%", "-f", "json"]
        )
    )

    assert [r["FUNCTION_SCHEM"] for r in records] == ["billing", "shop"]


def test_function_columns_table_output(snapshot_file):
    result = runner.invoke(
        app, ["-s", str(snapshot_file), "function-columns", "--function", "f"]
    )

    assert result.exit_code == 0, result.output
    assert "Rows: 3" in result.output


def test_function_columns_consistency_error_exits_1(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(
        json.dumps(
            {
                "catalog": None,
                "keyspaces": {
                    "ks": {
                        "functions": [
                            {
                                "name": "g",
                                "argument_names": ["a", "b"],
                                "argument_types": ["int"],
                                "return_type": "int",
                            }
                        ]
                    }
                },
            }
        )
    )

    result = runner.invoke(app, ["-s", str(path), "function-columns"])

    assert result.exit_code == 1


def test_missing_snapshot_exits_1(tmp_path):
    result = runner.invoke(app, ["-s", str(tmp_path / "nope.json"), "functions"])

    assert result.exit_code == 1


def test_snapshot_command_copies_schema(snapshot_file, tmp_path, shop_schema):
    target = tmp_path / "copy.json"

    result = runner.invoke(app, ["-s", str(snapshot_file), "snapshot", str(target)])

    assert result.exit_code == 0, result.output
    assert load_snapshot(target) == shop_schema
