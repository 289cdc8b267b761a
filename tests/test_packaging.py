import ast
from pathlib import Path

SETUP_PY = Path(__file__).parent.parent / "setup.py"


def setup_keywords() -> dict[str, ast.expr]:
    tree = ast.parse(SETUP_PY.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.Call) and getattr(node.func, "id", None) == "setup":
            return {kw.arg: kw.value for kw in node.keywords if kw.arg}
    raise AssertionError("setup() call not found")


def test_requires_python_with_union_syntax() -> None:
    # Route and server signatures use "X | None" at runtime
    requires = setup_keywords()["python_requires"]
    assert isinstance(requires, ast.Constant)
    assert requires.value == ">=3.10"


def test_console_script_points_at_cli() -> None:
    scripts = ast.literal_eval(setup_keywords()["entry_points"])["console_scripts"]
    assert scripts == ["passe=passe.cli:cli"]
