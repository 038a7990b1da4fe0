"""PackageRepl — line shell for inspecting and editing one ParamPackage.

Also provides the ``parampack-repl`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

from . import getter
from .codec import classify
from .model import Empty, ValueKind
from .package import ParamPackage


# ---------------------------------------------------------------------------
# PackageRepl class (programmatic use)
# ---------------------------------------------------------------------------

class PackageRepl:
    """Stateful shell holding one package across commands.

    Usage::

        repl = PackageRepl("engine:sdl,port:0")
        repl.run("set guid 0300")
        repl.run("i(port)")
        repl.pkg.serialize()   # → "engine:sdl,guid:0300,port:0"
        repl.reset()           # empty the package
    """

    def __init__(self, serialized: str | None = None) -> None:
        self.pkg = ParamPackage(serialized)

    def load(self, serialized: str) -> None:
        self.pkg = ParamPackage(serialized)

    def reset(self) -> None:
        self.pkg = ParamPackage()

    def run(self, line: str, dest: IO[str] | None = None) -> bool:
        """Run one command line.  Returns False when the session should end."""
        return _process_line(self, line, dest if dest is not None else sys.stdout)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def _fmt_inline(raw: str) -> str:
    """Format a stored value for compact one-line display."""
    kind = classify(raw)
    if kind == ValueKind.Scalar:
        return f'"{raw}"'
    if kind == ValueKind.List:
        return "[" + ", ".join(f'"{v}"' for v in getter.decode_str_list(raw)) + "]"
    return raw


def _fmt_inspect(raw: str, indent: int = 0) -> str:
    """Pretty-print a stored value, expanding nested packages and lists."""
    pad = "  " * indent
    kind = classify(raw)

    if kind == ValueKind.Package:
        pkg = getter.decode_package(raw)
        if pkg is not Empty:
            return _fmt_package(pkg, indent)

    if kind == ValueKind.PackageList:
        packs = getter.decode_package_list(raw)
        if packs is not Empty:
            lines = ["ParamPackage list ["]
            for i, p in enumerate(packs, 1):
                lines.append(f"{pad}  {i}: {_fmt_package(p, indent + 1)}")
            lines.append(pad + "]")
            return "\n".join(lines)

    if kind in (ValueKind.List, ValueKind.Unit):
        lines = ["list ["]
        for i, v in enumerate(getter.decode_str_list(raw), 1):
            lines.append(f"{pad}  {i}: {_fmt_inline(v)}")
        lines.append(pad + "]")
        return "\n".join(lines)

    return _fmt_inline(raw)


def _fmt_package(pkg: ParamPackage, indent: int = 0) -> str:
    pad = "  " * indent
    if not len(pkg):
        return "ParamPackage {}"
    width = max(len(k) for k in pkg.keys())
    lines = ["ParamPackage {"]
    for k, v in pkg:
        lines.append(f"{pad}  {k:<{width}}: {_fmt_inspect(v, indent + 1)}")
    lines.append(pad + "}")
    return "\n".join(lines)


def _show_keys(repl: PackageRepl, dest: IO[str]) -> None:
    """Print every entry with its raw stored value."""
    if not len(repl.pkg):
        print("  (package is empty)", file=dest)
        return
    width = max(len(k) for k in repl.pkg.keys())
    for key, value in repl.pkg:
        print(f"  {key:<{width}} : {_fmt_inline(value)}", file=dest)


def _inspect_key(repl: PackageRepl, key: str, dest: IO[str]) -> None:
    if not repl.pkg.has(key):
        print(f"  (no key '{key}')", file=dest)
        return
    print(_fmt_inspect(repl.pkg.get_str(key)), file=dest)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _run_file(repl: PackageRepl, filepath: str, dest: IO[str]) -> None:
    try:
        with open(filepath, encoding="utf-8") as fh:
            for file_line in fh:
                _process_line(repl, file_line.rstrip("\n"), dest)
    except OSError as exc:
        print(f"Error reading '{filepath}': {exc}", file=sys.stderr)


def _process_line(repl: PackageRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line:
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    # ── Control commands ──────────────────────────────────────────────────
    if line == ":show":
        print(repl.pkg, file=dest)
        return True

    if line == ":keys":
        _show_keys(repl, dest)
        return True

    if line == ":reset":
        repl.reset()
        return True

    if line.startswith(":load "):
        repl.load(line[len(":load "):].strip())
        return True

    # ── inspect() / i() ───────────────────────────────────────────────────
    for prefix in ("inspect(", "i("):
        if line.startswith(prefix) and line.endswith(")"):
            _inspect_key(repl, line[len(prefix):-1].strip(), dest)
            return True

    # ── Batch file ────────────────────────────────────────────────────────
    if line.startswith("?<< "):
        _run_file(repl, line[4:].strip(), dest)
        return True

    # ── Entry commands ────────────────────────────────────────────────────
    command, _, rest = line.partition(" ")
    rest = rest.strip()

    if command == "get" and rest:
        print(repl.pkg.get_str(rest, ""), file=dest)
        return True

    if command == "set" and rest:
        key, _, value = rest.partition(" ")
        repl.pkg.set_str(key, value.strip())
        return True

    if command == "erase" and rest:
        repl.pkg.erase(rest)
        return True

    print(f"Unknown command: {line}", file=sys.stderr)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    """Interactive package shell (``parampack-repl`` / ``python -m parampack.repl``)."""
    args = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    repl = PackageRepl(args[0] if args else None)
    dest: IO[str] = sys.stdout
    _file: IO[str] | None = None

    print("ParamPackage REPL  (:q to quit  |  :show  :keys  :reset  :load <text>  |  "
          "get/set/erase <key>  inspect(<key>))")

    while True:
        try:
            line = input("PKG> ").strip()
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not line:
            continue

        # ── Output redirect: ?>> filepath  /  ?>> ─────────────────────────
        if line.startswith("?>> "):
            filepath = line[4:].strip()
            if _file:
                _file.close()
            try:
                _file = open(filepath, "w", encoding="utf-8")
                dest = _file
            except OSError as exc:
                print(f"Error opening '{filepath}': {exc}", file=sys.stderr)
            continue

        if line == "?>>":
            if _file:
                _file.close()
                _file = None
            dest = sys.stdout
            continue

        if not _process_line(repl, line, dest):
            break

    if _file:
        _file.close()


if __name__ == "__main__":
    main()
