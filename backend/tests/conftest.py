"""Shared test fixtures."""

import pytest

from models.schemas.resume_content import ExperienceEntry, ResumeContent, ResumeSections

SAMPLE_RESUME = """Jane Smith
jane.smith@example.com | (555) 123-4567 | linkedin.com/in/janesmith

Summary
Backend engineer with six years of experience building reliable Python services.

Experience
Senior Software Engineer | Acme Corp | Jan 2021 - Present
• Increased API throughput by 40% by introducing response caching
• Led a team of 5 developers

Software Engineer | Startup Inc | 2018 - 2020
Worked on the payments platform.
- Built REST APIs with Django

Education
B.S. in Computer Science, State University, 2018

Skills
Languages: Python, JavaScript, SQL
Tools: Docker, AWS; Git
"""

SAMPLE_JD = """Senior Backend Engineer

Requirements:
- 5+ years of experience with Python and Django
- Experience with PostgreSQL and Docker

Nice to have:
- Kubernetes or AWS experience
- Familiarity with GraphQL

Salary: $120k - $150k plus health insurance and equity.
"""


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def sample_jd() -> str:
    return SAMPLE_JD


@pytest.fixture
def make_content():
    """Build a single-entry ResumeContent without going through the parser."""

    def _make(
        achievements=(),
        description="",
        raw_text=None,
        summary=None,
        skills=(),
        company="Acme Corp",
        position="Engineer",
    ) -> ResumeContent:
        entry = ExperienceEntry(
            company=company,
            position=position,
            description=description,
            achievements=list(achievements),
        )
        text = raw_text if raw_text is not None else "\n".join([description, *achievements])
        return ResumeContent(
            raw_text=text,
            sections=ResumeSections(summary=summary, experience=[entry], skills=list(skills)),
        )

    return _make
