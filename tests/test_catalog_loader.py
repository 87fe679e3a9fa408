"""Tests for loading catalogs from JSON."""

import json
from datetime import date

import pytest

from talent_matcher.core.models import OpportunityStatus, ProspectStatus, TalentType
from talent_matcher.utils.catalog_loader import load_catalog, save_catalog


@pytest.fixture
def catalog_file(tmp_path):
    data = {
        "talents": [
            {
                "id": "t1",
                "first_name": "Fijula",
                "last_name": "Rao",
                "talent_role": "Frontend Engineer",
                "years_experience": 4,
                "skills": ["React", None, "TypeScript"],
                "talent_type": "prospect",
                "prospect_status": "available",
            },
            {
                "id": "t2",
                "first_name": "Marcus",
                "last_name": "Chen",
                "role": "Backend Engineer",
                "talent_type": "existing",
                "employee_projects": [
                    {"project_name": "Billing", "utilization_percentage": 70},
                    {"project_name": "Search", "utilization_percentage": 40},
                ],
            },
        ],
        "opportunities": [
            {
                "id": "o1",
                "title": "Senior Backend Engineer",
                "required_role": "engineer",
                "status": "on_hold",
                "start_date": "2025-03-01T00:00:00Z",
            },
        ],
    }
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(data))
    return path


class TestLoadCatalog:
    def test_storage_column_names(self, catalog_file):
        catalog = load_catalog(catalog_file)

        fijula, marcus = catalog.talents
        assert fijula.role == "Frontend Engineer"
        assert fijula.skills == ("React", "TypeScript")
        assert fijula.prospect_status is ProspectStatus.AVAILABLE
        assert marcus.talent_type is TalentType.EXISTING
        assert marcus.total_utilization == 100

    def test_opportunity_fields(self, catalog_file):
        opportunity = load_catalog(str(catalog_file)).opportunities[0]

        assert opportunity.status is OpportunityStatus.ON_HOLD
        assert not opportunity.is_open
        assert opportunity.start_date == date(2025, 3, 1)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "nope.json")

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]")
        with pytest.raises(ValueError):
            load_catalog(path)

    def test_save_then_load(self, catalog_file, tmp_path):
        catalog = load_catalog(catalog_file)
        target = tmp_path / "out" / "catalog.json"

        save_catalog(catalog, target)

        reloaded = load_catalog(target)
        assert reloaded.talent_names == ["Fijula Rao", "Marcus Chen"]
        assert reloaded.talents[1].total_utilization == 100
