from PIL import Image

from qrlive.cli import main


def test_prints_to_terminal(capsys):
    assert main(["https://example.com"]) == 0
    out = capsys.readouterr().out
    assert "██" in out
    assert len(out.strip("\n").split("\n")) >= 25


def test_writes_png_from_extension(tmp_path):
    out = tmp_path / "nested" / "code.png"
    assert main(["https://example.com", "-o", str(out), "--size", "300"]) == 0
    assert out.exists()
    assert Image.open(out).size == (300, 300)


def test_explicit_format_overrides_extension(tmp_path):
    out = tmp_path / "code.bin"
    assert main(["hello", "-o", str(out), "--format", "vector"]) == 0
    assert out.read_text(encoding="utf-8").count("<svg") == 1


def test_forced_mask_and_level(tmp_path):
    out = tmp_path / "code.pdf"
    assert main(["hello", "-o", str(out), "-l", "H", "--mask", "5"]) == 0
    assert out.read_bytes().startswith(b"%PDF")


def test_errors_exit_with_status_1(tmp_path, capsys):
    assert main(["x" * 1300, "-l", "H"]) == 1
    assert "exceeds" in capsys.readouterr().err

    assert main(["hello", "-o", str(tmp_path / "code.gif")]) == 1
    assert "Unsupported export format" in capsys.readouterr().err
