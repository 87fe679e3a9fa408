"""
Shared fixtures for the talent matcher tests.
"""
import pytest
from unittest.mock import MagicMock

from talent_matcher.core.models import (
    Catalog,
    Opportunity,
    OpportunityStatus,
    ProjectAssignment,
    ProspectStatus,
    TalentProfile,
    TalentType,
)


def make_talent(**overrides) -> TalentProfile:
    """Build a talent with sensible defaults."""
    data = {
        "first_name": "Test",
        "last_name": "Talent",
        "role": "engineer",
        "years_experience": 3,
        "skills": (),
        "talent_type": TalentType.PROSPECT,
        "prospect_status": ProspectStatus.AVAILABLE,
    }
    data.update(overrides)
    return TalentProfile(**data)


def make_opportunity(**overrides) -> Opportunity:
    """Build an open opportunity with sensible defaults."""
    data = {
        "title": "Test Opportunity",
        "description": "",
        "required_role": "engineer",
        "location": "Remote",
        "status": OpportunityStatus.OPEN,
    }
    data.update(overrides)
    return Opportunity(**data)


@pytest.fixture
def fijula():
    return make_talent(
        id="t-fijula",
        first_name="Fijula",
        last_name="Rao",
        role="Frontend Engineer",
        years_experience=4,
        skills=("React", "TypeScript"),
        bio="Frontend engineer building accessible web interfaces",
        location="Austin, TX",
    )


@pytest.fixture
def marcus():
    return make_talent(
        id="t-marcus",
        first_name="Marcus",
        last_name="Chen",
        role="Backend Engineer",
        years_experience=7,
        skills=("Python", "Django", "PostgreSQL"),
        bio="Backend engineer focused on APIs",
        location="Remote",
        talent_type=TalentType.EXISTING,
        prospect_status=None,
        assignments=(ProjectAssignment("Billing", 50),),
    )


@pytest.fixture
def priya():
    """Fully utilized employee."""
    return make_talent(
        id="t-priya",
        first_name="Priya",
        last_name="Patel",
        role="Product Designer",
        years_experience=6,
        skills=("Figma",),
        talent_type=TalentType.EXISTING,
        prospect_status=None,
        assignments=(ProjectAssignment("Portal", 60), ProjectAssignment("Mobile", 60)),
    )


@pytest.fixture
def dana():
    """Prospect who is already interviewing elsewhere."""
    return make_talent(
        id="t-dana",
        first_name="Dana",
        last_name="Brooks",
        role="Data Analyst",
        years_experience=2,
        skills=("SQL", "Tableau"),
        prospect_status=ProspectStatus.INTERVIEWING,
    )


@pytest.fixture
def leo():
    """Prospect without a recorded status."""
    return make_talent(
        id="t-leo",
        first_name="Leo",
        last_name="Garcia",
        role="Mobile Developer",
        years_experience=5,
        skills=("Flutter", "Kotlin"),
        location="Denver, CO",
        prospect_status=None,
    )


@pytest.fixture
def backend_opportunity():
    return make_opportunity(
        id="o-backend",
        title="Senior Backend Engineer",
        description="Build Python APIs with Django and PostgreSQL",
        required_role="engineer",
        location="Remote",
    )


@pytest.fixture
def frontend_opportunity():
    return make_opportunity(
        id="o-frontend",
        title="React Frontend Developer",
        description="React and TypeScript web app development",
        required_role="developer",
        location="Austin, TX",
    )


@pytest.fixture
def mobile_opportunity():
    return make_opportunity(
        id="o-mobile",
        title="Mobile App Lead",
        description="Flutter mobile application for iOS and Android",
        required_role="developer",
        location="Denver, CO",
    )


@pytest.fixture
def filled_opportunity():
    return make_opportunity(
        id="o-data",
        title="Data Platform Engineer",
        description="Spark pipelines",
        required_role="engineer",
        status=OpportunityStatus.FILLED,
    )


@pytest.fixture
def talents(fijula, marcus, priya, dana, leo):
    return [fijula, marcus, priya, dana, leo]


@pytest.fixture
def opportunities(backend_opportunity, frontend_opportunity, mobile_opportunity, filled_opportunity):
    return [backend_opportunity, frontend_opportunity, mobile_opportunity, filled_opportunity]


@pytest.fixture
def catalog(talents, opportunities):
    """Catalog with three available talents and three open opportunities, none mentioning QA."""
    return Catalog.snapshot(talents, opportunities)


@pytest.fixture
def mock_client():
    """Language-model client double."""
    client = MagicMock()
    client.name = "Mock"
    return client
