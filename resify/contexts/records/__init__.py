"""
Records Context

Responsibilities:
- Defines the resume record model (person, profiles, jobs, schools)
- Parses and formats date ranges at their original precision
- Converts records to and from YAML

Owns: Resume data model, date ranges, YAML I/O
Never: Renders templates
"""

from resify.contexts.records.converter import (
    dump_resume,
    example_resume,
    generate_example_yaml,
    load_resume,
    resume_from_yaml,
)
from resify.contexts.records.date_range import (
    LAYOUTS,
    DateEndpoint,
    DateLayout,
    DateRange,
    parse_date,
)
from resify.contexts.records.exceptions import DateParseError, InvalidYAMLStructureError
from resify.contexts.records.resume_data_structure import (
    Education,
    Employment,
    Me,
    Place,
    Profile,
    Profiles,
    Resume,
)

__all__ = [
    # Date ranges
    "DateLayout",
    "DateEndpoint",
    "DateRange",
    "LAYOUTS",
    "parse_date",
    # Data structure classes
    "Resume",
    "Me",
    "Profiles",
    "Profile",
    "Employment",
    "Education",
    "Place",
    # YAML conversion
    "resume_from_yaml",
    "load_resume",
    "dump_resume",
    "example_resume",
    "generate_example_yaml",
    # Errors
    "DateParseError",
    "InvalidYAMLStructureError",
]
