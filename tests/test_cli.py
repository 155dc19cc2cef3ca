# tests/test_cli.py
import sys
import pytest
from unittest.mock import patch

import pyperclip

from dumpcode.cli import main


def _write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")

# --- End-to-end runs ---

def test_end_to_end_run(tmp_path, capsys):
    """
    a.py and b.txt at the top, node_modules/c.js below.
    Only Python is allowed and node_modules is excluded.
    """
    _write(tmp_path / "a.py", "# " + "a" * 47 + "\n")
    _write(tmp_path / "b.txt", "b" * 50)
    _write(tmp_path / "node_modules" / "c.js", "console.log('c')")

    test_args = ["dumpcode", str(tmp_path), "-x", "node_modules", "-e", "py"]
    with patch.object(sys, "argv", test_args):
        main()

    out = capsys.readouterr().out
    assert out == (
        "# project structure\n\n"
        f"{tmp_path.name}/\n"
        "└── a.py [0kb]\n\n"
        "# file: a.py\n\n"
        "```python\n"
        "# " + "a" * 47 + "\n"
        "```\n\n"
    )
    assert "node_modules" not in out
    assert "b.txt" not in out


def test_default_flags_golden(tmp_path, capsys):
    _write(tmp_path / "src" / "main.py", "print('hi')\n")
    _write(tmp_path / "README.md", "# Hi")
    _write(tmp_path / ".git" / "config", "[core]")
    _write(tmp_path / "logo.png", "not really a png")

    main([str(tmp_path)])

    assert capsys.readouterr().out == (
        "# project structure\n\n"
        f"{tmp_path.name}/\n"
        "├── README.md [0kb]\n"
        "└── src/\n"
        "    └── main.py [0kb]\n\n"
        "# file: README.md\n\n```markdown\n# Hi\n```\n\n"
        "# file: src/main.py\n\n```python\nprint('hi')\n```\n\n"
    )


def test_output_is_deterministic(tmp_path, capsys):
    for i in range(20):
        _write(tmp_path / f"pkg{i % 3}" / f"mod{i}.py", f"value = {i}\n")

    main([str(tmp_path), "-j", "4"])
    first = capsys.readouterr().out
    main([str(tmp_path), "-j", "1"])
    second = capsys.readouterr().out

    assert first == second
    assert first.index("# file: pkg0/mod0.py") < first.index("# file: pkg0/mod12.py")
    assert first.index("# file: pkg0/mod9.py") < first.index("# file: pkg1/mod1.py")


def test_binary_file_gets_marker(tmp_path, capsys):
    (tmp_path / "blob.py").write_bytes(b"\x00\x01\x02garbage")
    _write(tmp_path / "ok.py", "x = 1\n")

    main([str(tmp_path), "-e", "py"])
    out = capsys.readouterr().out

    assert "# file: blob.py\n\n> [binary file omitted]\n\n" in out
    assert "garbage" not in out
    assert "# file: ok.py" in out


def test_max_files_cap(tmp_path, capsys):
    for name in "abcde":
        _write(tmp_path / f"{name}.py", name)

    main([str(tmp_path), "--max-files", "3"])
    out = capsys.readouterr().out

    assert out.count("# file: ") == 3
    assert "# file: c.py" in out
    assert "# file: d.py" not in out
    assert "d.py [0kb] (omitted)" in out
    assert "e.py [0kb] (omitted)" in out


def test_all_extensions_wildcard(tmp_path, capsys):
    _write(tmp_path / "Makefile", "all:\n\techo hi\n")
    main([str(tmp_path), "-e", "*"])
    assert "# file: Makefile" in capsys.readouterr().out

# --- Clipboard ---

def test_clipboard_mode(tmp_path, capsys, monkeypatch):
    _write(tmp_path / "a.py", "x = 1\n")
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)

    main([str(tmp_path), "-c"])
    captured = capsys.readouterr()

    assert captured.out == ""
    assert "copied to clipboard" in captured.err
    assert len(copied) == 1
    assert "# file: a.py" in copied[0]


def test_clipboard_failure_exits_non_zero(tmp_path, capsys, monkeypatch):
    _write(tmp_path / "a.py", "x = 1\n")

    def broken(text):
        raise pyperclip.PyperclipException("no clipboard mechanism")

    monkeypatch.setattr(pyperclip, "copy", broken)

    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path), "-c"])
    assert exc.value.code == 1
    assert "clipboard" in capsys.readouterr().err

# --- Failures ---

def test_missing_root_exits_non_zero(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "does-not-exist")])

    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "does not exist" in captured.err


def test_root_is_a_file_exits_non_zero(tmp_path, capsys):
    _write(tmp_path / "a.py", "x")
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "a.py")])
    assert exc.value.code == 1
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("flags", [["-s", "abc"], ["--max-files", "-1"], ["-j", "0"]])
def test_malformed_flags_exit_before_scanning(tmp_path, capsys, flags):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path), *flags])
    assert exc.value.code == 2
    assert capsys.readouterr().out == ""


def test_bad_extension_list_exits_non_zero(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path), "-e", "py,."])
    assert exc.value.code == 1
    assert "Invalid extension" in capsys.readouterr().err
