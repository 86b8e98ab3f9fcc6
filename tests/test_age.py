import pytest
from meet_checker.age import Age, AgeClass

@pytest.mark.parametrize("text,expected", [
    ("", Age.UNKNOWN),
    ("30", Age.exact(30)),
    ("30.5", Age.approximate(30)),
    (" 7 ", Age.exact(7)),
    ("0", Age.exact(0)),
])
def test_parse(text, expected):
    """Test parsing of the CSV age notation."""
    assert Age.parse(text) == expected

@pytest.mark.parametrize("text", ["abc", "30.4", "-1", "1000", "30.", "30.50"])
def test_parse_invalid(text):
    with pytest.raises(ValueError):
        Age.parse(text)

def test_str_round_trips_csv_notation():
    for text in ("", "30", "17.5"):
        assert str(Age.parse(text)) == text

def test_predicates():
    assert Age.exact(1).is_exact() and not Age.exact(1).is_approximate()
    assert Age.approximate(1).is_approximate()
    assert Age.UNKNOWN.is_unknown() and Age.UNKNOWN.years is None

@pytest.mark.parametrize("age,expected", [
    (Age.exact(30), AgeClass.CLASS_24_34),
    (Age.exact(4), AgeClass.NONE),
    (Age.exact(80), AgeClass.CLASS_80_999),
    (Age.approximate(30), AgeClass.CLASS_24_34),
    (Age.approximate(34), AgeClass.NONE),
    (Age.approximate(4), AgeClass.NONE),
    (Age.UNKNOWN, AgeClass.NONE),
])
def test_ageclass_from_age(age, expected):
    """Test an approximate age only maps when both possible values agree."""
    assert AgeClass.from_age(age) == expected

@pytest.mark.parametrize("min_age,max_age,expected", [
    (Age.exact(20), Age.exact(23), AgeClass.CLASS_20_23),
    (Age.exact(20), Age.exact(24), AgeClass.NONE),
    (Age.UNKNOWN, Age.exact(23), AgeClass.NONE),
    (Age.exact(40), Age.UNKNOWN, AgeClass.NONE),
])
def test_ageclass_from_range(min_age, max_age, expected):
    assert AgeClass.from_range(min_age, max_age) == expected

def test_ageclass_bounds():
    assert AgeClass.CLASS_5_12.bounds == (5, 12)
    assert AgeClass.NONE.bounds is None
    assert AgeClass.for_years(17) == AgeClass.CLASS_16_17
    assert AgeClass.for_years(1000) == AgeClass.NONE
