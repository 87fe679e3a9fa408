"""Tests for rule-based and AI-assisted match scoring."""

from unittest.mock import MagicMock

from talent_matcher.core.errors import ScoringError
from talent_matcher.core.matcher import MatchScorer, rank_results
from talent_matcher.core.models import (
    MatchResult,
    ProjectAssignment,
    ProspectStatus,
    ScoringMode,
    TalentType,
)

from conftest import make_opportunity, make_talent


def austin_engineer(**overrides):
    data = {
        "skills": ("React", "Node"),
        "role": "engineer",
        "years_experience": 5,
        "location": "Austin, TX",
        "prospect_status": None,
    }
    data.update(overrides)
    return make_talent(**data)


def react_node_opportunity(**overrides):
    data = {
        "required_role": "engineer",
        "description": "React and Node developer needed",
        "location": "Austin, TX",
    }
    data.update(overrides)
    return make_opportunity(**data)


class TestRuleBasedScore:
    """Weighted rule-based scoring."""

    def setup_method(self):
        self.scorer = MatchScorer()

    def test_full_profile_without_availability_bonus(self):
        result = self.scorer.rule_based_score(austin_engineer(), react_node_opportunity())

        # 50 skills + 25 role + 9.375 experience + 5 location
        assert result.score == 89
        assert "2/2 relevant skills matched" in result.explanation
        assert "Perfect role match" in result.explanation
        assert "5 years experience" in result.explanation
        assert "Location match" in result.explanation
        assert result.scored_by is ScoringMode.RULE_BASED

    def test_available_prospect_bonus(self):
        talent = austin_engineer(prospect_status=ProspectStatus.AVAILABLE)
        result = self.scorer.rule_based_score(talent, react_node_opportunity())

        assert result.score == 94
        assert "Available prospect" in result.explanation

    def test_existing_talent_adjustments(self):
        opportunity = react_node_opportunity()

        def employee(utilization):
            return austin_engineer(
                talent_type=TalentType.EXISTING,
                assignments=(ProjectAssignment("Work", utilization),),
            )

        assert self.scorer.rule_based_score(employee(20), opportunity).score == 92
        assert self.scorer.rule_based_score(employee(85), opportunity).score == 84
        fully = self.scorer.rule_based_score(employee(100), opportunity)
        assert fully.score == 69
        assert "Fully utilized" in fully.explanation

    def test_score_is_clamped(self):
        talent = make_talent(
            role="chef",
            years_experience=0,
            talent_type=TalentType.EXISTING,
            prospect_status=None,
            assignments=(ProjectAssignment("Kitchen", 100),),
        )
        opportunity = make_opportunity(
            required_role="engineer",
            description="Kubernetes and Terraform platform work",
        )
        assert self.scorer.rule_based_score(talent, opportunity).score == 0

    def test_no_keywords_in_description(self):
        result = self.scorer.rule_based_score(
            austin_engineer(),
            react_node_opportunity(description="Help our team"),
        )
        assert "No specific skills mentioned in opportunity" in result.explanation

    def test_partial_skill_coverage(self):
        talent = austin_engineer(skills=("React",))
        result = self.scorer.rule_based_score(talent, react_node_opportunity())
        # 25 skills + 25 role + 9.375 experience + 5 location
        assert result.score == 64
        assert "1/2 relevant skills matched" in result.explanation

    def test_experience_saturates(self):
        talent = austin_engineer(years_experience=20)
        result = self.scorer.rule_based_score(talent, react_node_opportunity())
        assert result.score == 95

    def test_location_skipped_when_missing(self):
        talent = austin_engineer(location="")
        result = self.scorer.rule_based_score(talent, react_node_opportunity())
        assert "Location" not in result.explanation

    def test_similar_location(self):
        talent = austin_engineer(location="Austin")
        result = self.scorer.rule_based_score(talent, react_node_opportunity())
        assert "Similar location" in result.explanation


class TestRoleMatch:
    def setup_method(self):
        self.scorer = MatchScorer()

    def role_points(self, talent_role, opp_role, title="", description=""):
        points, factor = self.scorer._calculate_role_match(
            make_talent(role=talent_role),
            make_opportunity(required_role=opp_role, title=title, description=description),
        )
        return points, factor

    def test_exact(self):
        assert self.role_points("engineer", "Engineer") == (25, "Perfect role match")

    def test_partial(self):
        assert self.role_points("backend engineer", "engineer") == (20, "Partial role match")

    def test_related(self):
        assert self.role_points("developer", "software engineer") == (10, "Related role match")
        assert self.role_points("qa", "tester") == (10, "Related role match")

    def test_found_in_text(self):
        assert self.role_points("designer", "manager", title="Designer wanted") == (
            15, "Role found in opportunity text"
        )

    def test_mismatch(self):
        assert self.role_points("chef", "engineer") == (-5, "Role mismatch")


class TestAIAssistedScore:
    """AI scores with per-pair fallback."""

    def test_uses_ai_scorer(self):
        ai_scorer = MagicMock()
        ai_result = MatchResult(score=77, explanation="AI says so", scored_by=ScoringMode.AI_ASSISTED)
        ai_scorer.score.return_value = ai_result
        scorer = MatchScorer(ai_scorer=ai_scorer)

        result = scorer.score(austin_engineer(), react_node_opportunity(), ScoringMode.AI_ASSISTED)

        assert result is ai_result

    def test_falls_back_on_scoring_error(self):
        ai_scorer = MagicMock()
        ai_scorer.score.side_effect = ScoringError("bad json")
        scorer = MatchScorer(ai_scorer=ai_scorer)

        result = scorer.score(austin_engineer(), react_node_opportunity(), ScoringMode.AI_ASSISTED)

        assert result.score == 89
        assert result.scored_by is ScoringMode.RULE_BASED

    def test_rule_mode_never_calls_ai(self):
        ai_scorer = MagicMock()
        scorer = MatchScorer(ai_scorer=ai_scorer)

        scorer.score(austin_engineer(), react_node_opportunity(), ScoringMode.RULE_BASED)

        ai_scorer.score.assert_not_called()


class TestRankResults:
    def test_descending_and_stable(self):
        results = [
            MatchResult(score=50, explanation="a"),
            MatchResult(score=90, explanation="b"),
            MatchResult(score=50, explanation="c"),
            MatchResult(score=90, explanation="d"),
        ]
        ranked = rank_results(results)
        assert [r.explanation for r in ranked] == ["b", "d", "a", "c"]

    def test_limit(self):
        results = [MatchResult(score=s) for s in range(20)]
        assert len(rank_results(results, limit=10)) == 10
        assert rank_results(results, limit=10)[0].score == 19
