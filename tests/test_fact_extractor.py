import pytest

from medroute.context.fact_extractor import extract_personal_info, has_personal_info


@pytest.mark.parametrize(
    "text",
    [
        "my name is Alice",
        "My name is Alice.",
        "Hello! My name is Alice, nice to meet you",
        "my name is Alice!",
        "(my name is Alice)",
        "MY NAME IS Alice and I like tea",
    ],
)
def test_name_independent_of_punctuation(text):
    assert extract_personal_info(text)["name"] == "Alice"


def test_scenario_name_and_location():
    facts = extract_personal_info("Hi, my name is Sam and I live in Boston")
    assert facts == {"name": "Sam", "location": "Boston"}


def test_age_kept_as_string():
    assert extract_personal_info("I am 34 years old")["age"] == "34"


def test_interest_is_single_element_list():
    facts = extract_personal_info("I am interested in cycling.")
    assert facts["interests"] == ["cycling"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("I am a nurse", "nurse"),
        ("I am an engineer.", "engineer"),
        ("I work as teacher, mostly", "teacher"),
    ],
)
def test_profession(text, expected):
    assert extract_personal_info(text)["profession"] == expected


def test_multiple_rules_match_independently():
    facts = extract_personal_info("My name is Ana. I am 29 years old. I live in Lima.")
    assert facts["name"] == "Ana"
    assert facts["age"] == "29"
    assert facts["location"] == "Lima"


def test_no_match_returns_empty():
    assert extract_personal_info("What's the weather like?") == {}


def test_extraction_is_deterministic():
    text = "my name is Bo and I am 40 years old"
    assert extract_personal_info(text) == extract_personal_info(text)


def test_has_personal_info():
    assert has_personal_info("Call me Ishmael")
    assert has_personal_info("I'm from Spain")
    assert not has_personal_info("asdf qwer")
