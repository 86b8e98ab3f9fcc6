"""
Pytest fixtures shared by the top-level tests.
"""
import pytest

CONFIG = """\
divisions:
  - name: Open
    min: 0
    max: 999
"""

MEET_CSV = """\
Federation,Date,MeetCountry,MeetState,MeetTown,MeetName
TestFed,{date},{country},,,Test Meet
"""


@pytest.fixture
def meet_tree(tmp_path):
    """
    Build a data root with one federation and return a function adding meets to it.

    The returned function takes (name, date, entries, country="USA") and
    returns the meet directory. The data root is available as .root.
    """
    root = tmp_path / "meet-data"
    fed_dir = root / "testfed"
    fed_dir.mkdir(parents=True)
    (fed_dir / "CONFIG.yaml").write_text(CONFIG, encoding="utf-8")

    def _add_meet(name, date, entries, country="USA"):
        meet_dir = fed_dir / name
        meet_dir.mkdir()
        (meet_dir / "meet.csv").write_text(MEET_CSV.format(date=date, country=country), encoding="utf-8")
        (meet_dir / "entries.csv").write_text(entries, encoding="utf-8")
        return meet_dir

    _add_meet.root = root
    return _add_meet
