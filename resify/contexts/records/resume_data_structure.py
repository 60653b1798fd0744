"""
Resume Data Structure

Defines the structured representation of a resume record as read from YAML.

Every record type keeps keys it does not know about in `meta`, and writes
them back out unchanged, so templates can use fields this model never
anticipated (a manager's name, a personal statement, ...).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from resify.contexts.records.date_range import DateRange
from resify.contexts.records.exceptions import InvalidYAMLStructureError


def _mapping(data: Any, where: str) -> Mapping:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise InvalidYAMLStructureError(
            f"'{where}' must be a mapping, got {type(data).__name__}"
        )
    return data


def _items(data: Any, where: str) -> List:
    if data is None:
        return []
    if not isinstance(data, list):
        raise InvalidYAMLStructureError(f"'{where}' must be a list, got {type(data).__name__}")
    return data


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _meta(data: Mapping, known: tuple) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if key not in known}


def _put(out: Dict[str, Any], key: str, value: Any) -> None:
    """Set key only when value is non-empty (YAML omitempty)."""
    if value:
        out[key] = value


@dataclass
class Place:
    """
    Where something happened.

    Attributes:
        name: Name of the employer or institution
        place: Location, e.g. "Deadtown, AL"
        meta: Unrecognized keys
    """

    name: str = ""
    place: str = ""
    meta: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("name", "place")

    @classmethod
    def from_dict(cls, data: Any, where: str = "where") -> "Place":
        data = _mapping(data, where)
        return cls(
            name=_text(data.get("name")),
            place=_text(data.get("place")),
            meta=_meta(data, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        _put(out, "name", self.name)
        _put(out, "place", self.place)
        out.update(self.meta)
        return out


@dataclass
class Profile:
    """An online profile (GitHub, Twitter, ...)."""

    url: str = ""
    label: str = ""
    meta: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("url", "label")

    @classmethod
    def from_dict(cls, data: Any, where: str = "profile") -> "Profile":
        data = _mapping(data, where)
        return cls(
            url=_text(data.get("url")),
            label=_text(data.get("label")),
            meta=_meta(data, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        _put(out, "url", self.url)
        _put(out, "label", self.label)
        out.update(self.meta)
        return out


@dataclass
class Profiles:
    """
    Named profiles plus the order to show them in.

    In YAML the order is the ".order" key and every other key is a profile.
    """

    order: List[str] = field(default_factory=list)
    profile: Dict[str, Profile] = field(default_factory=dict)

    ORDER_KEY = ".order"

    @classmethod
    def from_dict(cls, data: Any) -> "Profiles":
        data = _mapping(data, "profiles")
        return cls(
            order=[_text(name) for name in _items(data.get(cls.ORDER_KEY), "profiles.order")],
            profile={
                str(name): Profile.from_dict(value, f"profiles.{name}")
                for name, value in data.items()
                if name != cls.ORDER_KEY
            },
        )

    def ordered(self) -> List[Profile]:
        """Profiles in display order; unlisted profiles are left out."""
        return [self.profile[name] for name in self.order if name in self.profile]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {self.ORDER_KEY: list(self.order)}
        for name, profile in self.profile.items():
            out[name] = profile.to_dict()
        return out


@dataclass
class Me:
    """
    The person the resume is about.

    Attributes:
        order: Name parts in display order (YAML key "ordered")
        chosen: Preferred name
        phone: Phone number
        email: Email address
        meta: Unrecognized keys
    """

    order: List[str] = field(default_factory=list)
    chosen: str = ""
    phone: str = ""
    email: str = ""
    meta: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("ordered", "chosen", "phone", "email")

    @classmethod
    def from_dict(cls, data: Any) -> "Me":
        data = _mapping(data, "me")
        return cls(
            order=[_text(part) for part in _items(data.get("ordered"), "me.ordered")],
            chosen=_text(data.get("chosen")),
            phone=_text(data.get("phone")),
            email=_text(data.get("email")),
            meta=_meta(data, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "ordered": list(self.order),
            "chosen": self.chosen,
            "phone": self.phone,
            "email": self.email,
        }
        out.update(self.meta)
        return out


@dataclass
class Employment:
    """A job."""

    title: str = ""
    when: DateRange = field(default_factory=DateRange.empty)
    where: Place = field(default_factory=Place)
    description: str = ""
    meta: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("title", "when", "where", "desc")

    @classmethod
    def from_dict(cls, data: Any, where: str = "work") -> "Employment":
        data = _mapping(data, where)
        return cls(
            title=_text(data.get("title")),
            when=DateRange.from_dict(_optional_mapping(data.get("when"), f"{where}.when")),
            where=Place.from_dict(data.get("where"), f"{where}.where"),
            description=_text(data.get("desc")),
            meta=_meta(data, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "title": self.title,
            "when": self.when.to_dict(),
            "where": self.where.to_dict(),
        }
        _put(out, "desc", self.description)
        out.update(self.meta)
        return out


@dataclass
class Education:
    """A school attended."""

    where: Place = field(default_factory=Place)
    when: DateRange = field(default_factory=DateRange.empty)
    received: str = ""
    fields: List[str] = field(default_factory=list)
    description: str = ""
    meta: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("where", "when", "received", "fields", "desc")

    @classmethod
    def from_dict(cls, data: Any, where: str = "education") -> "Education":
        data = _mapping(data, where)
        return cls(
            where=Place.from_dict(data.get("where"), f"{where}.where"),
            when=DateRange.from_dict(_optional_mapping(data.get("when"), f"{where}.when")),
            received=_text(data.get("received")),
            fields=[_text(f) for f in _items(data.get("fields"), f"{where}.fields")],
            description=_text(data.get("desc")),
            meta=_meta(data, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "where": self.where.to_dict(),
            "when": self.when.to_dict(),
        }
        _put(out, "received", self.received)
        _put(out, "fields", list(self.fields))
        _put(out, "desc", self.description)
        out.update(self.meta)
        return out


@dataclass
class Resume:
    """
    A complete resume record.

    Attributes:
        me: The person
        profiles: Online profiles
        employment: Jobs (YAML key "work")
        education: Schools
        meta: Top-level keys not part of the model (e.g. "statement")
    """

    me: Me = field(default_factory=Me)
    profiles: Profiles = field(default_factory=Profiles)
    employment: List[Employment] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("me", "profiles", "work", "education")

    @classmethod
    def from_dict(cls, data: Any) -> "Resume":
        """
        Build a resume from parsed YAML.

        Raises:
            InvalidYAMLStructureError: If a section has the wrong shape
            DateParseError: If a date range has dates but none that parse
        """
        data = _mapping(data, "resume")
        return cls(
            me=Me.from_dict(data.get("me")),
            profiles=Profiles.from_dict(data.get("profiles")),
            employment=[
                Employment.from_dict(job, f"work[{i}]")
                for i, job in enumerate(_items(data.get("work"), "work"))
            ],
            education=[
                Education.from_dict(school, f"education[{i}]")
                for i, school in enumerate(_items(data.get("education"), "education"))
            ],
            meta=_meta(data, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "me": self.me.to_dict(),
            "profiles": self.profiles.to_dict(),
        }
        _put(out, "work", [job.to_dict() for job in self.employment])
        _put(out, "education", [school.to_dict() for school in self.education])
        out.update(self.meta)
        return out


def _optional_mapping(data: Any, where: str) -> Optional[Mapping]:
    if data is None:
        return None
    return _mapping(data, where)
