import pytest

from misalignins.cli import main


def _sections(text):
    lines = text.strip().splitlines()
    dx_start = lines.index("Final error state dx:") + 1
    cov_start = lines.index("Final covariance P (diagonal):")
    bias_start = lines.index("Corrected accelerometer bias:")
    dx = [float(v) for v in lines[dx_start:cov_start]]
    cov = [float(v) for v in lines[cov_start + 1].split()]
    bias = [float(v) for v in lines[bias_start + 1 :]]
    return dx, cov, bias


def test_main_returns_zero_and_prints_sections(capsys):
    assert main([]) == 0
    dx, cov, bias = _sections(capsys.readouterr().out)
    assert len(dx) == 11
    assert len(cov) == 11
    assert len(bias) == 3


def test_north_offset_gives_positive_north_error(capsys):
    main([])
    dx, _, _ = _sections(capsys.readouterr().out)
    assert dx[0] > 0.0
    assert dx[0] < 0.5


def test_covariance_diagonal_positive(capsys):
    main([])
    _, cov, _ = _sections(capsys.readouterr().out)
    assert all(v > 0.0 for v in cov)


def test_corrected_bias_is_negated_error(capsys):
    main([])
    dx, _, bias = _sections(capsys.readouterr().out)
    assert bias == pytest.approx([-v for v in dx[5:8]], rel=1e-4, abs=1e-12)


def test_help_exits_cleanly():
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0