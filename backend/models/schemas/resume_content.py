"""Structured résumé produced by the section parser."""

from pydantic import BaseModel, ConfigDict


class ContactInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None


class ExperienceEntry(BaseModel):
    """A single job: header fields plus its free text and bullet achievements."""
    model_config = ConfigDict(frozen=True)

    company: str = "Unknown"
    position: str = ""
    start_date: str = ""
    end_date: str = ""  # "Present" is kept verbatim
    description: str = ""
    achievements: list[str] = []

    @property
    def key(self) -> str:
        return f"{self.company} - {self.position}"


class EducationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    institution: str = ""
    degree: str = ""
    field: str = ""
    graduation_date: str | None = None


class ResumeSections(BaseModel):
    model_config = ConfigDict(frozen=True)

    contact_info: ContactInfo = ContactInfo()
    summary: str | None = None
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []
    skills: list[str] = []
    certifications: list[str] = []


class ResumeContent(BaseModel):
    """Parser output. Created once per analysis and never modified."""
    model_config = ConfigDict(frozen=True)

    raw_text: str = ""
    sections: ResumeSections = ResumeSections()


class ParsedSection(BaseModel):
    """One detected block of the résumé, in document order."""
    section_type: str  # contact, summary, experience, education, skills, certifications, projects, awards
    heading: str = ""
    lines: list[str] = []
    start_line: int = 0
