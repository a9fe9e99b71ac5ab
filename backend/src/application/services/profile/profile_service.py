"""
Profile Service
Job seeker profiles and their locations
"""
from typing import Any, Dict, List, Optional

from loguru import logger

from application.repositories import IDocumentStore, seeker_repository
from application.schemas.profile import ProfileCreate, ProfileUpdate
from application.services.matching.bounding_box_search import BoundingBoxSearch
from domain.entities import JobSeekerProfile
from domain.enums import Collection
from domain.value_objects import GeoPoint, Salary, SalaryType


class ProfileService:
    """Job seeker profile operations"""

    def __init__(
        self,
        store: IDocumentStore,
        search: Optional[BoundingBoxSearch] = None,
        default_radius_km: float = 50.0,
        default_currency: str = "INR",
        default_limit: int = 10
    ):
        self.seekers = seeker_repository(store)
        self.search = search or BoundingBoxSearch(store)
        self.default_radius_km = default_radius_km
        self.default_currency = default_currency
        self.default_limit = default_limit

    def _salary(self, data) -> Salary:
        if data is None:
            # New seekers are open to any offer until they say otherwise
            return Salary(amount=0, type=SalaryType.MONTHLY,
                          currency=self.default_currency, is_negotiable=True)
        return Salary(
            amount=data.amount,
            type=data.type,
            currency=data.currency or self.default_currency,
            is_negotiable=data.is_negotiable,
        )

    async def create_profile(self, data: ProfileCreate) -> JobSeekerProfile:
        profile = JobSeekerProfile(
            id=None,
            name=data.name,
            skills=frozenset(data.skills),
            experience_years=data.experience_years,
            current_location=GeoPoint(data.latitude, data.longitude),
            search_radius_km=data.search_radius_km or self.default_radius_km,
            preferred_salary=self._salary(data.preferred_salary),
        )
        created = await self.seekers.create(profile)
        logger.info(f"Job seeker profile {created.id} created")
        return created

    async def get_profile(self, profile_id: str) -> JobSeekerProfile:
        return await self.seekers.get(profile_id)

    async def update_profile(self, profile_id: str, data: ProfileUpdate) -> JobSeekerProfile:
        fields: Dict[str, Any] = {}
        if data.name is not None:
            fields["name"] = data.name
        if data.skills is not None:
            fields["skills"] = sorted(set(data.skills))
        if data.experience_years is not None:
            fields["experience"] = data.experience_years
        if data.search_radius_km is not None:
            fields["searchRadius"] = data.search_radius_km
        if data.preferred_salary is not None:
            fields["preferredSalary"] = self._salary(data.preferred_salary).to_dict()

        if not fields:
            return await self.seekers.get(profile_id)
        return await self.seekers.update(profile_id, fields)

    async def update_location(self, profile_id: str, location: GeoPoint) -> JobSeekerProfile:
        """Move the seeker; the geo-indexed ``location`` mirror moves with them"""
        point = location.to_dict()
        updated = await self.seekers.update(
            profile_id, {"currentLocation": point, "location": point}
        )
        logger.info(f"Job seeker {profile_id} moved to {location}")
        return updated

    async def find_nearby_seekers(
        self,
        center: GeoPoint,
        radius_km: float,
        limit: Optional[int] = None
    ) -> List[JobSeekerProfile]:
        """Seekers within ``radius_km`` of a point, nearest first"""
        records = await self.search.find_nearby_exact(
            Collection.JOB_SEEKERS.value, center, radius_km, limit or self.default_limit
        )
        return [self.seekers.from_document(record) for record in records]
