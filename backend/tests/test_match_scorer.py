"""
Tests for the weighted job/seeker compatibility score
"""
import random
from dataclasses import replace

import pytest

from application.services.matching.match_scorer import (
    score,
    salary_matches,
    skills_match_pct,
)
from core.exceptions import ValidationException
from domain.entities import JobLocation
from domain.value_objects import GeoPoint, Salary, SalaryType
from conftest import BANGALORE, point_north_of

FAR_AWAY = GeoPoint(28.6139, 77.2090)  # New Delhi


class TestSkills:
    """Test skills component"""

    def test_full_overlap_contributes_thirty(self, make_job, make_seeker):
        """Job wants go+sql, seeker has go+sql+python"""
        result = score(make_job(skills={"go", "sql"}), make_seeker(skills={"go", "sql", "python"}))
        assert result.criteria.skills_match_pct == 100
        assert result.criteria.skills_match_pct * 0.3 == pytest.approx(30)

    def test_partial_overlap(self, make_job, make_seeker):
        """Job wants go+sql+rust, seeker only has go"""
        job = make_job(skills={"go", "sql", "rust"}, experience_level=10, location=FAR_AWAY)
        seeker = make_seeker(
            skills={"go"},
            experience_years=0,
            preferred_salary=Salary(amount=10_000_000, type=SalaryType.ANNUAL),
        )
        result = score(job, seeker)
        assert result.criteria.skills_match_pct == pytest.approx(100 / 3)
        assert result.score == pytest.approx(10)

    def test_job_without_skills_is_invalid(self, make_job, make_seeker):
        with pytest.raises(ValidationException):
            score(make_job(skills=()), make_seeker())

    def test_case_insensitive(self):
        assert skills_match_pct({"Go", "SQL"}, {"go", "sql "}) == 100


class TestExperience:
    """Test experience component"""

    def test_meets_required_level(self, make_job, make_seeker):
        assert score(make_job(experience_level=3), make_seeker(experience_years=3)).criteria.experience_match

    def test_below_required_level(self, make_job, make_seeker):
        assert not score(make_job(experience_level=4), make_seeker(experience_years=3)).criteria.experience_match


class TestLocation:
    """Test location component"""

    def test_binary_threshold(self, make_job, make_seeker):
        seeker = make_seeker(radius_km=10)
        inside = score(make_job(location=point_north_of(BANGALORE, 9.9)), seeker)
        just_outside = score(make_job(location=point_north_of(BANGALORE, 10.1)), seeker)
        far_outside = score(make_job(location=point_north_of(BANGALORE, 300)), seeker)

        assert inside.criteria.location_match
        assert not just_outside.criteria.location_match
        assert inside.score - just_outside.score == pytest.approx(25)
        # No further penalty once outside the radius
        assert far_outside.score == just_outside.score

    def test_uses_first_listed_location(self, make_job, make_seeker):
        job = replace(
            make_job(),
            locations=[JobLocation("HQ", FAR_AWAY), JobLocation("Branch", BANGALORE)],
        )
        assert not score(job, make_seeker()).criteria.location_match


class TestSalary:
    """Test salary component"""

    def test_negotiable_always_matches(self, make_job, make_seeker):
        job = make_job(salary=Salary(amount=0))
        seeker = make_seeker(preferred_salary=Salary(amount=10**9, is_negotiable=True))
        assert score(job, seeker).criteria.salary_match

    def test_ten_percent_tolerance(self):
        wanted = Salary(amount=100000, type=SalaryType.ANNUAL)
        assert salary_matches(Salary(amount=90000, type=SalaryType.ANNUAL), wanted)
        assert not salary_matches(Salary(amount=89999, type=SalaryType.ANNUAL), wanted)

    def test_monthly_is_annualised(self):
        wanted = Salary(amount=120000, type=SalaryType.ANNUAL)
        assert salary_matches(Salary(amount=9000, type=SalaryType.MONTHLY), wanted)
        assert not salary_matches(Salary(amount=8000, type=SalaryType.MONTHLY), wanted)


class TestTotal:
    """Test overall score"""

    def test_perfect_match_is_hundred(self, make_job, make_seeker):
        result = score(make_job(), make_seeker())
        assert result.score == pytest.approx(100)
        assert result.match_score.is_good_match()

    def test_deterministic(self, make_job, make_seeker):
        job, seeker = make_job(), make_seeker()
        assert score(job, seeker) == score(job, seeker)

    @pytest.mark.parametrize("seed", range(5))
    def test_score_within_bounds(self, seed, make_job, make_seeker):
        rng = random.Random(seed)
        pool = ["go", "sql", "rust", "python", "java", "k8s"]
        for _ in range(100):
            job = make_job(
                skills=rng.sample(pool, rng.randint(1, len(pool))),
                experience_level=rng.randint(0, 10),
                location=GeoPoint(rng.uniform(-60, 60), rng.uniform(-180, 180)),
                salary=Salary(amount=rng.uniform(0, 200000), type=rng.choice(list(SalaryType))),
            )
            seeker = make_seeker(
                skills=rng.sample(pool, rng.randint(0, len(pool))),
                experience_years=rng.randint(0, 10),
                location=GeoPoint(rng.uniform(-60, 60), rng.uniform(-180, 180)),
                radius_km=rng.uniform(1, 500),
                preferred_salary=Salary(
                    amount=rng.uniform(0, 200000),
                    type=rng.choice(list(SalaryType)),
                    is_negotiable=rng.random() < 0.3,
                ),
            )
            assert 0 <= score(job, seeker).score <= 100
