"""Tests for PackageRepl."""

import io

from parampack import PackageRepl, ParamPackage


# ---------------------------------------------------------------------------
# Construction and state
# ---------------------------------------------------------------------------

def test_starts_empty():
    repl = PackageRepl()
    assert len(repl.pkg) == 0


def test_starts_from_serialized():
    repl = PackageRepl("engine:sdl,port:0")
    assert repl.pkg.get_int("port", -1) == 0


def test_load_replaces_package():
    repl = PackageRepl("a:1")
    repl.load("b:2")
    assert repl.pkg == ParamPackage("b:2")


def test_reset():
    repl = PackageRepl("a:1")
    repl.reset()
    assert repl.pkg.serialize() == "[empty]"


# ---------------------------------------------------------------------------
# run()
# ---------------------------------------------------------------------------

def test_run_set_and_show():
    repl = PackageRepl("engine:sdl,port:0")
    buf = io.StringIO()
    repl.run("set guid 0300", buf)
    repl.run(":show", buf)
    assert buf.getvalue() == "engine:sdl,guid:0300,port:0\n"


def test_run_set_value_with_spaces():
    repl = PackageRepl()
    repl.run("set name left stick", io.StringIO())
    assert repl.pkg.get_str("name") == "left stick"


def test_run_get():
    repl = PackageRepl("a:x$0y")
    buf = io.StringIO()
    repl.run("get a", buf)
    assert buf.getvalue() == "x:y\n"


def test_run_get_missing_prints_blank():
    repl = PackageRepl()
    buf = io.StringIO()
    repl.run("get nope", buf)
    assert buf.getvalue() == "\n"


def test_run_erase():
    repl = PackageRepl("a:1,b:2")
    repl.run("erase a", io.StringIO())
    assert repl.pkg.keys() == ["b"]


def test_run_quit():
    repl = PackageRepl()
    assert repl.run(":q", io.StringIO()) is False


def test_run_unknown_command(capsys):
    repl = PackageRepl()
    assert repl.run("bogus", io.StringIO()) is True
    assert "Unknown command: bogus" in capsys.readouterr().err


def test_run_defaults_to_stdout(capsys):
    repl = PackageRepl("a:1")
    repl.run(":show")
    assert capsys.readouterr().out == "a:1\n"
