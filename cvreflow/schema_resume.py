"""
Canonical CV schema.

``CV_SCHEMA`` is the wire shape (camelCase keys) the extraction prompt asks
for and the cleaner projects responses onto. A list holding a single
template item means "any number of items shaped like this one".
"""
from __future__ import annotations
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# canonical schema (empty strings – never null)
CV_SCHEMA = {
    "personalInfo": {"name": "", "email": "", "phone": "", "linkedin": "", "location": ""},
    "summary": "",
    "experience": [
        {"company": "", "position": "", "startDate": "", "endDate": "", "responsibilities": ""}
    ],
    "education": [{"institution": "", "degree": "", "year": "", "gpa": ""}],
    "skills": [""],
    "certifications": [{"name": "", "year": ""}],
    "languages": "",
}


class _CvModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PersonalInfo(_CvModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    location: str = ""


class Experience(_CvModel):
    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: str = ""
    responsibilities: str = ""


class Education(_CvModel):
    institution: str = ""
    degree: str = ""
    year: str = ""
    gpa: str = ""


class Certification(_CvModel):
    name: str = ""
    year: str = ""


class CvRecord(_CvModel):
    """Structured, schema-complete content of one CV.

    Order of every list is display order; nothing is sorted or deduplicated.
    """
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    languages: str = ""

    def to_form(self) -> Dict[str, Any]:
        """Project the record onto the camelCase form / wire shape."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_form(cls, data: Any) -> "CvRecord":
        """Build a record from (possibly incomplete) form data."""
        from cvreflow.cleaner import normalise_record

        return cls.model_validate(normalise_record(data))
