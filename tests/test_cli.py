import pytest
from meet_checker.cli import build_parser, main

FIRST_ENTRIES = "Name,Sex,Equipment,Division,Age,Place\nJohn Doe,M,Raw,Open,30,1\n"
SECOND_ENTRIES = "Name,Sex,Equipment,Division,Age,Place\nJohn Doe,M,Raw,Open,,1\n"

def run(meet_tree, *args):
    return main(["--data-root", str(meet_tree.root), "--workers", "1", *args])

def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.data_root == "meet-data"
    assert args.path is None
    assert args.age is None
    assert not args.interpolate

def test_clean_run(meet_tree, capsys):
    """Test a clean tree exits 0 with an empty summary."""
    meet_tree("1901", "2019-01-04", FIRST_ENTRIES)
    assert run(meet_tree) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "Summary: 0 errors, 0 warnings"

def test_errors_exit_1(meet_tree, capsys):
    """Test data errors are reported and fail the run."""
    meet_dir = meet_tree("1901", "2019-01-04", FIRST_ENTRIES, country="Germny")
    assert run(meet_tree) == 1
    out = capsys.readouterr().out
    assert f"{meet_dir / 'meet.csv'}\n Error: Unknown MeetCountry 'Germny'" in out
    assert out.splitlines()[-1] == "Summary: 1 error, 0 warnings"

def test_internal_error_counts_in_summary(meet_tree, capsys):
    meet_dir = meet_tree("1901", "2019-01-04", FIRST_ENTRIES)
    (meet_dir / "entries.csv").write_bytes(b"Name,Sex,Equipment,Place\n\xff,M,Raw,1\n")
    assert run(meet_tree) == 1
    captured = capsys.readouterr()
    assert "Internal Error" in captured.err
    assert captured.out.splitlines()[-1] == "Summary: 1 error, 0 warnings"

def test_configuration_failure(meet_tree, capsys):
    meet_tree("1901", "2019-01-04", FIRST_ENTRIES)
    (meet_tree.root / "testfed" / "CONFIG.yaml").write_text("divisons: []\n", encoding="utf-8")
    assert run(meet_tree) == 1
    assert capsys.readouterr().out.splitlines()[-1] == "Summary: 1 error, 0 warnings"

def test_missing_data_root(tmp_path, capsys):
    assert main(["--data-root", str(tmp_path / "nowhere")]) == 1
    assert "data root does not exist" in capsys.readouterr().out

def test_missing_path(meet_tree, capsys):
    assert run(meet_tree, str(meet_tree.root / "nowhere")) == 1
    assert "path does not exist" in capsys.readouterr().out

def test_path_restricts_check(meet_tree, capsys):
    good = meet_tree("1901", "2019-01-04", FIRST_ENTRIES)
    meet_tree("1902", "2019-01-04", FIRST_ENTRIES, country="Germny")
    assert run(meet_tree, str(good)) == 0

def test_age_debug(meet_tree, capsys):
    """Test --age narrates interpolation for one lifter."""
    meet_tree("1901", "2019-01-04", FIRST_ENTRIES)
    meet_tree("1902", "2020-01-04", SECOND_ENTRIES)
    assert run(meet_tree, "--age", "johndoe") == 0
    lines = capsys.readouterr().out.splitlines()
    assert any(line.startswith("Narrowed to [1988-01-05, 1989-01-04] by Age 30 in ") for line in lines)
    assert "Final range [1988-01-05, 1989-01-04]" in lines
    assert "Inferred Age 31 on 2020-01-04" in lines

def test_age_debug_unknown_username(meet_tree, capsys):
    meet_tree("1901", "2019-01-04", FIRST_ENTRIES)
    assert run(meet_tree, "--age", "nobody") == 0
    assert "Username 'nobody' not found" in capsys.readouterr().out

def test_interpolate(meet_tree, capsys):
    meet_tree("1901", "2019-01-04", FIRST_ENTRIES)
    meet_tree("1902", "2020-01-04", SECOND_ENTRIES)
    assert run(meet_tree, "--interpolate") == 0
    assert capsys.readouterr().out.splitlines()[-1] == "Interpolated ages for 1 of 1 lifters"

def test_interpolate_conflicting_lifter(meet_tree, capsys):
    """Test lifters whose facts conflict are not counted as interpolated."""
    entries = "Name,Sex,Equipment,Division,Age,Place\nJohn Doe,M,Raw,Open,{age},1\n"
    meet_tree("1901", "2019-01-04", entries.format(age=30))
    meet_tree("1902", "2019-06-01", entries.format(age=40))
    assert run(meet_tree, "--interpolate") == 0
    assert capsys.readouterr().out.splitlines()[-1] == "Interpolated ages for 0 of 1 lifters"
