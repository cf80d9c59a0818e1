import numpy as np
from PIL import Image

from cannyedge.cli import main
from cannyedge.detector import canny_edge_detection
from cannyedge.imagefile import load_grayscale, to_uint8


def _square_image():
    pixels = np.zeros((24, 24), dtype=np.uint8)
    pixels[8:16, 8:16] = 200
    return pixels


def _write_input(path):
    Image.fromarray(_square_image(), mode="L").save(path)


def test_main_writes_edge_map(tmp_path, capsys):
    source = tmp_path / "in.png"
    target = tmp_path / "out.png"
    _write_input(source)

    assert main([str(source), str(target)]) == 0

    written = load_grayscale(target)
    expected = to_uint8(canny_edge_detection(load_grayscale(source)).edges)
    np.testing.assert_array_equal(written, expected.astype(np.float32))
    assert set(np.unique(written).tolist()) == {0.0, 255.0}

    out = capsys.readouterr().out
    assert "Step 1: Gaussian Blur" in out
    assert "Step 4: Edge Tracking" in out
    assert "Final :" in out


def test_main_with_approximate_exp(tmp_path):
    source = tmp_path / "in.png"
    target = tmp_path / "out.png"
    _write_input(source)

    assert main(["--approximate-exp", str(source), str(target)]) == 0

    written = load_grayscale(target)
    expected = to_uint8(
        canny_edge_detection(load_grayscale(source), approximate_exp=True).edges
    )
    np.testing.assert_array_equal(written, expected.astype(np.float32))


def test_main_reports_unreadable_input(tmp_path, capsys):
    target = tmp_path / "out.png"
    status = main([str(tmp_path / "missing.png"), str(target)])
    assert status != 0
    assert "can't read image" in capsys.readouterr().err
    assert not target.exists()


def test_main_uses_default_file_names(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Image.fromarray(_square_image(), mode="L").save(tmp_path / "input.jpg")

    assert main([]) == 0

    output = load_grayscale(tmp_path / "output.jpg")
    assert output.shape == _square_image().shape