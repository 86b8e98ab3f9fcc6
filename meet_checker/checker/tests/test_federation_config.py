"""
Tests for checker.federation_config module.
"""
import pytest

from meet_checker.age import Age
from meet_checker.checker import ConfigReadError, Division, FederationConfig, check_config


def messages(report, severity):
    return [m.text for m in report.messages if m.severity == severity]


def test_valid_config(write_config):
    result = check_config(write_config())
    assert not result.report.has_messages()
    config = result.config
    assert config.combine_raw_and_wraps is True
    assert config.combine_single_and_multi is False
    assert set(config.divisions) == {"Open", "Juniors", "M30-34"}
    assert config.get_division("Juniors") == Division("Juniors", Age.exact(0), Age.approximate(17))
    assert config.get_division("M30-34").sex == "M"
    assert config.get_division("Masters") is None


def test_empty_file_is_empty_config(write_config):
    result = check_config(write_config(text=""))
    assert not result.report.has_messages()
    assert result.config.divisions == {}


def test_unknown_section_suggests(write_config):
    result = check_config(write_config(text="divisons:\n  - name: Open\n"))
    assert result.config is None
    assert messages(result.report, "error") == ["Unknown section 'divisons', did you mean 'divisions'?"]


def test_unknown_and_invalid_options(write_config):
    text = "options:\n  combine_raw_and_wrap: true\n  combine_single_and_multi: yes please\n"
    result = check_config(write_config(text=text))
    errors = messages(result.report, "error")
    assert errors[0] == "Unknown option 'combine_raw_and_wrap', did you mean 'combine_raw_and_wraps'?"
    assert errors[1].startswith("Option 'combine_single_and_multi' must be true or false")
    assert result.config is None


@pytest.mark.parametrize("divisions,expected", [
    ("  - min: 0\n", "Division 1 is missing a name"),
    ("  - name: Open\n  - name: Open\n", "Division 'Open' is declared more than once"),
    ("  - name: Open\n    min: 40\n    max: 35\n", "Division 'Open' has min age 40 above max age 35"),
    ("  - name: Open\n    min: abc\n", "Division 'Open': Invalid age 'abc'"),
    ("  - name: Open\n    min: 0\n    sex: X\n", "Division 'Open' has invalid sex 'X'"),
])
def test_division_errors(write_config, divisions, expected):
    result = check_config(write_config(text="divisions:\n" + divisions))
    assert expected in messages(result.report, "error")
    assert result.config is None


def test_division_without_bounds_is_a_warning(write_config):
    result = check_config(write_config(text="divisions:\n  - name: Open\n"))
    assert messages(result.report, "warning") == ["Division 'Open' declares no age bounds"]
    assert result.config is not None
    assert result.config.get_division("Open").min_age.is_unknown()


def test_unreadable_yaml_raises(write_config):
    with pytest.raises(ConfigReadError):
        check_config(write_config(text="divisions: [\n"))


def test_non_mapping_raises(write_config):
    with pytest.raises(ConfigReadError):
        check_config(write_config(text="- Open\n- Juniors\n"))


def test_invalid_utf8_raises(meet_data_root):
    config_path = meet_data_root / "CONFIG.yaml"
    config_path.write_bytes(b"divisions:\n  - name: \xff\xfe\n")
    with pytest.raises(ConfigReadError):
        check_config(config_path)


@pytest.mark.parametrize("raw_wraps,single_multi,equipment,expected", [
    (False, False, "Wraps", "Wraps"),
    (True, False, "Wraps", "Raw"),
    (True, False, "Raw", "Raw"),
    (False, True, "Multi-ply", "Single-ply"),
    (False, False, "Multi-ply", "Multi-ply"),
])
def test_equipment_group(raw_wraps, single_multi, equipment, expected):
    config = FederationConfig(combine_raw_and_wraps=raw_wraps, combine_single_and_multi=single_multi)
    assert config.equipment_group(equipment) == expected
