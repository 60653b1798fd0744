"""
Resume YAML Converter

Reads resume records from YAML and writes them back, and produces the
example record used as a starting point for new resumes.
"""

import sys
from pathlib import Path
from typing import Union

import yaml

from resify.contexts.records.date_range import DateRange
from resify.contexts.records.exceptions import InvalidYAMLStructureError
from resify.contexts.records.logger import _log_debug, _log_error
from resify.contexts.records.resume_data_structure import (
    Education,
    Employment,
    Me,
    Place,
    Profile,
    Profiles,
    Resume,
)

STDIN_PATH = "-"


class _RecordLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as the strings they were written as."""


_RecordLoader.add_constructor("tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_yaml_str)


def resume_from_yaml(text: str, source: str = "<string>") -> Resume:
    """
    Parse a resume from YAML text.

    Args:
        text: YAML document
        source: Name used in log and error messages

    Returns:
        Resume record

    Raises:
        InvalidYAMLStructureError: If the text is not YAML or has the wrong shape
        DateParseError: If a date range has dates but none that parse
    """
    try:
        data = yaml.load(text, Loader=_RecordLoader)
    except yaml.YAMLError as e:
        _log_error(f"Cannot parse {source} as YAML: {e}")
        raise InvalidYAMLStructureError(f"Cannot parse {source} as YAML: {e}") from e

    resume = Resume.from_dict(data)
    _log_debug(
        f"Loaded {source}: {len(resume.employment)} job(s), {len(resume.education)} school(s)"
    )
    return resume


def load_resume(path: Union[str, Path]) -> Resume:
    """
    Load a resume from a YAML file.

    Args:
        path: File path, or "-" (or "") for standard input

    Returns:
        Resume record

    Raises:
        OSError: If the file cannot be read
        InvalidYAMLStructureError: If the file is not a valid resume document
        DateParseError: If a date range has dates but none that parse
    """
    path = str(path)
    if path in (STDIN_PATH, ""):
        name = "stdin"
        text = sys.stdin.read()
    else:
        name = path
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            _log_error(f"Cannot read {name}: {e}")
            raise

    return resume_from_yaml(text, source=name)


def dump_resume(resume: Resume) -> str:
    """Serialize a resume to YAML, keeping dates at their original precision."""
    return yaml.safe_dump(
        resume.to_dict(), sort_keys=False, allow_unicode=True, default_flow_style=False
    )


def example_resume() -> Resume:
    """Example record to start a new resume from."""
    date = DateRange.parse("2010-08", "2015-12")

    return Resume(
        me=Me(
            order=["Chosen", "Ordered", "Name"],
            chosen="Chosen Name",
            phone="+12345678901",
            email="you@hostname.tld",
        ),
        profiles=Profiles(
            order=["github", "twitter"],
            profile={
                "github": Profile(url="https://github.com/username", label="GitHub"),
                "twitter": Profile(url="https://twitter.com/username", label="Twitter"),
            },
        ),
        employment=[
            Employment(
                title="Software Engineer",
                when=date,
                where=Place(name="Foobiz Studios", place="Deadtown, AL"),
                description=(
                    "Built distributed, high-throughput servers that accepted approx. "
                    "5 billion requests per day. Wrote about it at "
                    "((https://example.com/blog/throughput the company blog))."
                ),
                meta={"manager": "Damien V. Satansteeth"},
            ),
        ],
        education=[
            Education(
                where=Place(name="Some Fake University State", place="Deadtown, AL"),
                when=date,
                received="Degrees in History and Electrical Engineering",
                fields=["History", "Electrical Engineering"],
                description=(
                    "A description of achievements at this institution like maybe "
                    "you won an award who knows."
                ),
            ),
        ],
    )


def generate_example_yaml() -> str:
    """Example record as YAML."""
    return dump_resume(example_resume())
