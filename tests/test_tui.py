from types import SimpleNamespace

from cqlcatalog.cli import tui
from cqlcatalog.cli.tui import (
    _MAX_FUNCTION_NAME_WIDTH,
    _function_choice_title,
    _truncate,
    select_function,
)
from cqlcatalog.core.rows import FunctionRow


def _row(schema: str, name: str) -> FunctionRow:
    return FunctionRow(None, schema, name, "", 1, name)


def test_function_choice_title_aligns_keyspace_column():
    first = _function_choice_title(_row("shop", "f"), name_width=12)
    second = _function_choice_title(_row("billing", "total"), name_width=12)

    assert first.startswith("f")
    assert second.startswith("total")
    assert first.index("(keyspace: ") == second.index("(keyspace: ")


def test_function_choice_title_truncates_long_names():
    long_name = "x" * (_MAX_FUNCTION_NAME_WIDTH + 10)
    rendered = _function_choice_title(
        _row("shop", long_name), name_width=_MAX_FUNCTION_NAME_WIDTH
    )

    assert "..." in rendered
    assert "(keyspace: shop)" in rendered
    assert _truncate(long_name, _MAX_FUNCTION_NAME_WIDTH).endswith("...")


def test_select_function_offers_overloads_once(monkeypatch):
    seen = {}

    def _select_one(message, choices):
        seen["choices"] = choices
        return choices[0].value

    monkeypatch.setattr(tui, "out", SimpleNamespace(select_one=_select_one))

    picked = select_function([_row("ks", "add"), _row("ks", "add"), _row("ks", "sub")])

    assert len(seen["choices"]) == 2
    assert picked == _row("ks", "add")
