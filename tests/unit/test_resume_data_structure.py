"""Unit tests for the resume record model and its YAML conversion."""

import io

import pytest

from resify.contexts.records import (
    DateParseError,
    InvalidYAMLStructureError,
    Resume,
    dump_resume,
    example_resume,
    generate_example_yaml,
    load_resume,
    resume_from_yaml,
)

RESUME_YAML = """\
me:
  ordered: [Ada, King, Lovelace]
  chosen: Ada Lovelace
  phone: "+15550100"
  email: ada@example.com
  pronouns: she/her
profiles:
  .order: [github]
  github:
    url: https://github.com/ada
    label: GitHub
    handle: ada
  mastodon:
    url: https://example.social/@ada
statement: Writes ((https://example.com/notes notes)) on engines.
work:
  - title: Analyst
    when:
      from: 1842-10
      to: 1843
    where:
      name: Analytical Engine Co.
      place: London
    desc: Translated and annotated the memoir.
    manager: Babbage
education:
  - where:
      name: Home
    when:
      from: 1830-01-02
    fields: [Mathematics]
"""


@pytest.mark.unit
def test_resume_from_yaml_fields():
    """Test that known keys map onto the model."""
    resume = resume_from_yaml(RESUME_YAML)

    assert resume.me.order == ["Ada", "King", "Lovelace"]
    assert resume.me.chosen == "Ada Lovelace"
    assert resume.me.phone == "+15550100"
    assert resume.employment[0].title == "Analyst"
    assert resume.employment[0].where.place == "London"
    assert resume.employment[0].description == "Translated and annotated the memoir."
    assert resume.education[0].fields == ["Mathematics"]
    assert resume.education[0].received == ""


@pytest.mark.unit
def test_resume_from_yaml_dates():
    """Test that dates are parsed at their written precision."""
    resume = resume_from_yaml(RESUME_YAML)

    assert resume.employment[0].when.format() == ("1842-10", "1843")
    assert resume.education[0].when.format() == ("1830-01-02", "")


@pytest.mark.unit
def test_resume_from_yaml_meta_passthrough():
    """Test that unknown keys are kept as meta at every level."""
    resume = resume_from_yaml(RESUME_YAML)

    assert resume.meta == {"statement": "Writes ((https://example.com/notes notes)) on engines."}
    assert resume.me.meta == {"pronouns": "she/her"}
    assert resume.employment[0].meta == {"manager": "Babbage"}
    assert resume.profiles.profile["github"].meta == {"handle": "ada"}


@pytest.mark.unit
def test_profiles_order():
    """Test that profiles keep their declared order and unlisted ones are left out of it."""
    profiles = resume_from_yaml(RESUME_YAML).profiles

    assert profiles.order == ["github"]
    assert set(profiles.profile) == {"github", "mastodon"}
    assert [p.label for p in profiles.ordered()] == ["GitHub"]


@pytest.mark.unit
def test_missing_when_is_empty_range():
    """Test that an absent or null date range is the empty range."""
    resume = resume_from_yaml("work:\n  - title: A\n  - title: B\n    when: null\n")

    assert resume.employment[0].when.is_empty
    assert resume.employment[1].when.is_empty


@pytest.mark.unit
def test_unparseable_dates_propagate():
    """Test that a date range whose dates both fail to parse fails the record."""
    with pytest.raises(DateParseError):
        resume_from_yaml("work:\n  - title: A\n    when:\n      from: whenever\n      to: someday\n")


@pytest.mark.unit
@pytest.mark.parametrize("when", ["{from: garbage}", "{to: garbage}", "{from: \"\", to: garbage}"])
def test_lone_unparseable_date_fails_record(when):
    """Test that a range whose only date does not parse fails the record."""
    with pytest.raises(DateParseError):
        resume_from_yaml(f"education:\n  - where: {{name: U}}\n    when: {when}\n")


@pytest.mark.unit
def test_empty_when_mapping_is_empty_range():
    """Test that an empty when: mapping gives the empty range."""
    resume = resume_from_yaml("work:\n  - title: A\n    when: {}\n")

    assert resume.employment[0].when.is_empty


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "me: [not, a, mapping]\n",
        "work: {title: not a list}\n",
        "work:\n  - when: 2012\n",
        "- just\n- a list\n",
        "me: {chosen: [unclosed\n",
    ],
)
def test_invalid_structure(text):
    """Test that badly shaped or invalid documents raise InvalidYAMLStructureError."""
    with pytest.raises(InvalidYAMLStructureError):
        resume_from_yaml(text)


@pytest.mark.unit
def test_empty_document_is_empty_resume():
    """Test that an empty document gives an empty resume."""
    assert resume_from_yaml("") == Resume()


@pytest.mark.unit
def test_dump_round_trip():
    """Test that dumping and reloading keeps data, dates and meta."""
    resume = resume_from_yaml(RESUME_YAML)
    reloaded = resume_from_yaml(dump_resume(resume))

    assert reloaded == resume
    assert "from: 1842-10" in dump_resume(resume)


@pytest.mark.unit
def test_dump_omits_empty_fields():
    """Test that empty optional fields are left out of the YAML."""
    text = dump_resume(resume_from_yaml("work:\n  - title: A\n"))

    assert "desc" not in text
    assert "education" not in text
    assert "when: null" in text


@pytest.mark.unit
def test_example_resume():
    """Test the example record used by the yaml command."""
    resume = example_resume()

    assert resume.me.chosen == "Chosen Name"
    assert resume.employment[0].when.format() == ("2010-08", "2015-12")
    assert resume.employment[0].meta == {"manager": "Damien V. Satansteeth"}
    assert resume_from_yaml(generate_example_yaml()) == resume


@pytest.mark.unit
def test_load_resume_from_file(tmp_path):
    """Test loading a resume from a path."""
    path = tmp_path / "me.yaml"
    path.write_text(RESUME_YAML, encoding="utf-8")

    assert load_resume(path).me.chosen == "Ada Lovelace"


@pytest.mark.unit
def test_load_resume_from_stdin(monkeypatch):
    """Test that "-" reads standard input."""
    monkeypatch.setattr("sys.stdin", io.StringIO(RESUME_YAML))
    assert load_resume("-").me.chosen == "Ada Lovelace"


@pytest.mark.unit
def test_load_resume_missing_file(tmp_path):
    """Test that unreadable files raise OSError."""
    with pytest.raises(OSError):
        load_resume(tmp_path / "missing.yaml")
