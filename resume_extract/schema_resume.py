"""
Canonical résumé schema.

ResumeRecord validates the merged record; PartialResumeRecord is the plain
dict shape that flows between parsers before validation.  Every field also
accepts the Spanish key used by Spanish-language prompts and models, but
records are always serialised with the English keys below.
"""

from __future__ import annotations

from typing import Dict, List, Optional, TypedDict

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}$"


def _field(key: str, *aliases: str, **kw):
    return Field(
        default=None,
        validation_alias=AliasChoices(key, *aliases),
        serialization_alias=key,
        **kw,
    )


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class ExperienceEntry(_Frozen):
    company: Optional[str] = _field("company", "empresa")
    role: Optional[str] = _field("role", "rol")
    start: Optional[str] = _field("start", "inicio")
    end: Optional[str] = _field("end", "fin")
    tasks: Optional[List[str]] = _field("tasks", "tareas")


class EducationEntry(_Frozen):
    title: Optional[str] = _field("title", "titulo")
    institution: Optional[str] = _field("institution", "centro")
    start: Optional[str] = _field("start", "inicio")
    end: Optional[str] = _field("end", "fin")


class ResumeRecord(_Frozen):
    name: Optional[str] = _field("name", "nombre")
    email: Optional[str] = _field("email", pattern=EMAIL_PATTERN)
    phone: Optional[str] = _field("phone", "telefono")
    location: Optional[str] = _field("location", "ubicacion")
    birth_date: Optional[str] = _field("birthDate", "fecha_nacimiento", "birth_date")
    experience: Optional[List[ExperienceEntry]] = _field("experience", "experiencia")
    education: Optional[List[EducationEntry]] = _field("education", "formacion")
    languages: Optional[List[str]] = _field("languages", "idiomas")
    skills: Optional[List[str]] = _field("skills", "habilidades")
    other: Optional[List[str]] = _field("other", "otros")

    def to_dict(self) -> "PartialResumeRecord":
        """Canonical-key dict with absent fields left out."""
        return self.model_dump(by_alias=True, exclude_none=True)


class PartialResumeRecord(TypedDict, total=False):
    name: str
    email: str
    phone: str
    location: str
    birthDate: str
    experience: List[Dict[str, object]]
    education: List[Dict[str, str]]
    languages: List[str]
    skills: List[str]
    other: List[str]


# JSON shape shown to the model (empty values – no placeholders)
RESUME_SCHEMA = {
    "name": "",
    "email": "",
    "phone": "",
    "location": "",
    "birthDate": "",
    "experience": [
        {"company": "", "role": "", "start": "", "end": "", "tasks": [""]}
    ],
    "education": [{"title": "", "institution": "", "start": "", "end": ""}],
    "languages": ["<language> - <level>"],
    "skills": [],
    "other": [],
}
