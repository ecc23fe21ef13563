from PIL import Image
from typer.testing import CliRunner

from mean_filter.cli import app

runner = CliRunner()


def make_input(tmp_path):
    path = tmp_path / "input.png"
    Image.new("RGB", (6, 4), (10, 20, 30)).save(path)
    return path


def test_filter_writes_output(tmp_path):
    source = make_input(tmp_path)
    output = tmp_path / "filtered.png"

    result = runner.invoke(app, ["filter", str(source), "2", "-k", "3", "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert output.exists()
    with Image.open(output) as img:
        assert img.size == (6, 4)
        assert img.getpixel((0, 0)) == (10, 20, 30)


def test_invalid_worker_count_writes_nothing(tmp_path):
    source = make_input(tmp_path)
    output = tmp_path / "filtered.png"

    result = runner.invoke(app, ["filter", str(source), "0", "-o", str(output)])

    assert result.exit_code == 1
    assert not output.exists()


def test_too_many_workers_writes_nothing(tmp_path):
    source = make_input(tmp_path)
    output = tmp_path / "filtered.png"

    result = runner.invoke(app, ["filter", str(source), "5", "-o", str(output)])

    assert result.exit_code == 1
    assert not output.exists()


def test_missing_input(tmp_path):
    result = runner.invoke(app, ["filter", str(tmp_path / "missing.jpg"), "2"])

    assert result.exit_code == 1


def test_gui_is_exposed_as_a_command():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "gui" in result.output
