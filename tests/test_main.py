import pytest

import main
from sketchlogic import envelope


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    # setup_logging writes its log file into the working directory
    monkeypatch.chdir(tmp_path)
    return tmp_path


def run(argv):
    with pytest.raises(SystemExit) as excinfo:
        main.main(argv)
    return excinfo.value.code


def test_show_plain_file(workdir, logic_text, capsys):
    path = workdir / "logic.txt"
    path.write_text(logic_text, encoding="utf-8")

    assert run(["show", str(path), "--plain"]) == 0

    out = capsys.readouterr().out
    assert "@MainActivity.java_onCreate_initializeLogic" in out
    assert "[ execute_shell %s.command ]: definedFunc (more_block)" in out
    assert "[ %m.textview setText %s ]: setText (view_func)" in out


def test_show_single_container(workdir, logic_text, capsys):
    path = workdir / "logic.txt"
    path.write_text(logic_text, encoding="utf-8")

    assert run(["show", str(path), "--plain", "--container", "MainActivity.java_execute_shell_moreBlock"]) == 0

    out = capsys.readouterr().out
    assert "@MainActivity.java_execute_shell_moreBlock" in out
    assert "@MainActivity.java_onCreate_initializeLogic" not in out


def test_roundtrip_encrypted(workdir, logic_text, capsys):
    source = workdir / "logic"
    output = workdir / "logic.out"
    envelope.encrypt_file(source, logic_text.encode("utf-8"))

    assert run(["roundtrip", str(source), str(output)]) == 0

    assert envelope.decrypt_file(output).decode("utf-8") == logic_text


def test_roundtrip_refuses_failed_containers(workdir, logic_text):
    source = workdir / "logic.txt"
    output = workdir / "logic.out"
    source.write_text(logic_text.replace('"nextBlock":13', '"nextBlock":99'), encoding="utf-8")

    assert run(["roundtrip", str(source), str(output), "--plain"]) == 1
    assert not output.exists()

    assert run(["roundtrip", str(source), str(output), "--plain", "--skip-failures"]) == 0
    assert output.exists()


def test_encrypt_then_decrypt(workdir, logic_text):
    plain = workdir / "logic.txt"
    plain.write_text(logic_text, encoding="utf-8")

    assert run(["encrypt", str(plain), str(workdir / "logic")]) == 0
    assert run(["decrypt", str(workdir / "logic"), str(workdir / "again.txt")]) == 0

    assert (workdir / "again.txt").read_text(encoding="utf-8") == logic_text


def test_missing_file_exits_with_error(workdir, capsys):
    assert run(["show", str(workdir / "missing"), "--plain"]) == 1
    assert "show failed" in capsys.readouterr().err


def test_command_is_required():
    with pytest.raises(SystemExit) as excinfo:
        main.parse_arguments([])
    assert excinfo.value.code == 2
