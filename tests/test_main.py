import pytest

import main


def test_rotation_fixtures_all_pass(capsys):
    passed, total = main.check_rotations()
    assert passed == total == 19
    out = capsys.readouterr().out
    assert "not OK" not in out
    assert out.strip().endswith("19 tests passed out of 19")


def test_rotations_command_exit_code(capsys):
    assert main.main(["rotations"]) == 0
    assert main.main([]) == 0


def test_complex_command_uses_format_options(capsys):
    assert main.main(["--symbol", "j", "--angle", "deg", "complex"]) == 0
    out = capsys.readouterr().out
    assert "Powers: -12 + 16j" in out
    assert "Polar form: (4.47,63.43°)" in out


def test_fft_command(capsys):
    assert main.main(["fft", "1", "0", "0", "0"]) == 0
    out = capsys.readouterr().out
    assert "fft:     (1,1,1,1)" in out


def test_bad_precision_is_reported():
    assert main.main(["--precision", "-1", "complex"]) == 2


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        main.main(["nonsense"])
