import pytest

from services.errors import InputError
from services.section_parser import (
    detect_sections,
    looks_like_job_header,
    parse_education,
    parse_experience,
    parse_job_header,
    parse_resume,
    parse_skills,
)


def test_detect_sections_in_document_order(sample_resume):
    sections = detect_sections(sample_resume)
    assert [s.section_type for s in sections] == ["contact", "summary", "experience", "education", "skills"]
    assert sections[2].heading == "Experience"


def test_detect_sections_tolerates_heading_typos():
    sections = detect_sections("Jane Smith\n\nEducaton\nB.S. in Physics, MIT, 2015")
    assert [s.section_type for s in sections] == ["contact", "education"]


def test_detect_sections_drops_blank_lines():
    sections = detect_sections("Skills\n\n\nPython\n\nDocker")
    assert sections[0].lines == ["Python", "Docker"]


class TestParseResume:
    def test_contact_info(self, sample_resume):
        contact = parse_resume(sample_resume).sections.contact_info
        assert contact.name == "Jane Smith"
        assert contact.email == "jane.smith@example.com"
        assert contact.phone == "(555) 123-4567"
        assert contact.linkedin == "linkedin.com/in/janesmith"

    def test_summary(self, sample_resume):
        summary = parse_resume(sample_resume).sections.summary
        assert summary.startswith("Backend engineer with six years")

    def test_experience_entries(self, sample_resume):
        experience = parse_resume(sample_resume).sections.experience
        assert len(experience) == 2

        first, second = experience
        assert first.position == "Senior Software Engineer"
        assert first.company == "Acme Corp"
        assert first.start_date == "Jan 2021"
        assert first.end_date == "Present"
        assert first.achievements == [
            "Increased API throughput by 40% by introducing response caching",
            "Led a team of 5 developers",
        ]

        assert second.company == "Startup Inc"
        assert second.start_date == "2018"
        assert second.end_date == "2020"
        assert second.description == "Worked on the payments platform."
        assert second.achievements == ["Built REST APIs with Django"]

    def test_education(self, sample_resume):
        education = parse_resume(sample_resume).sections.education
        assert len(education) == 1
        assert education[0].degree == "B.S."
        assert education[0].field == "Computer Science"
        assert education[0].institution == "State University"
        assert education[0].graduation_date == "2018"

    def test_skills_strip_category_prefixes(self, sample_resume):
        skills = parse_resume(sample_resume).sections.skills
        assert skills == ["Python", "JavaScript", "SQL", "Docker", "AWS", "Git"]

    def test_skills_fall_back_to_known_terms(self):
        content = parse_resume("Jane Smith\nBuilt services in Python and Docker on AWS.")
        assert {"python", "docker", "aws"} <= set(content.sections.skills)

    def test_implicit_summary_without_heading(self):
        text = "Jane Smith\nPragmatic engineer who enjoys shipping small reliable services\n\nSkills\nPython"
        summary = parse_resume(text).sections.summary
        assert summary == "Pragmatic engineer who enjoys shipping small reliable services"

    def test_empty_text(self):
        content = parse_resume("   ")
        assert content.raw_text == "   "
        assert content.sections.experience == []
        assert content.sections.contact_info.name is None

    def test_non_string_rejected(self):
        with pytest.raises(InputError):
            parse_resume(None)

    def test_raw_text_is_preserved(self, sample_resume):
        assert parse_resume(sample_resume).raw_text == sample_resume


class TestExperience:
    def test_header_with_at_separator_and_single_year(self):
        header = parse_job_header("Data Analyst at Globex (Remote) 2019")
        assert header == {"position": "Data Analyst", "company": "Globex", "start_date": "2019", "end_date": ""}

    def test_header_without_company(self):
        assert parse_job_header("Freelance Consultant 2015 - 2017")["company"] == "Unknown"

    def test_prose_is_not_a_header(self):
        assert not looks_like_job_header("responsible for the migration in 2020 across regions")
        assert not looks_like_job_header("Improved the checkout flow in 2020 with the team.")
        assert looks_like_job_header("Senior Engineer, Initech")

    def test_date_line_fills_current_entry(self):
        entries = parse_experience(["Backend Developer | Initech", "Mar 2019 – Jun 2021", "• Shipped features"])
        assert len(entries) == 1
        assert entries[0].start_date == "Mar 2019"
        assert entries[0].end_date == "Jun 2021"
        assert entries[0].achievements == ["Shipped features"]

    def test_bullets_before_any_header_open_an_entry(self):
        entries = parse_experience(["• Automated nightly reports"])
        assert entries[0].company == "Unknown"
        assert entries[0].achievements == ["Automated nightly reports"]


def test_education_institution_on_following_line():
    entries = parse_education(["Master of Science in Data Science", "Stanford University 2020"])
    assert len(entries) == 1
    assert entries[0].degree == "Master of Science"
    assert entries[0].field == "Data Science"
    assert entries[0].institution == "Stanford University"
    assert entries[0].graduation_date == "2020"


def test_parse_skills_dedupes_case_insensitively():
    assert parse_skills(["Python, python | SQL", "• Go; SQL"]) == ["Python", "SQL", "Go"]
