"""Repositories - document store contract and per-entity repositories"""

from domain.entities import JobPosting, JobSeekerProfile, Match
from domain.enums import Collection
from .interfaces import IDocumentStore, Conditions
from .repository import Repository
from .mappers import (
    job_to_document,
    job_from_document,
    seeker_to_document,
    seeker_from_document,
    match_to_document,
    match_from_document,
)


def job_repository(store: IDocumentStore) -> Repository[JobPosting]:
    return Repository(store, Collection.JOBS.value, job_to_document, job_from_document, "Job")


def seeker_repository(store: IDocumentStore) -> Repository[JobSeekerProfile]:
    return Repository(
        store, Collection.JOB_SEEKERS.value, seeker_to_document, seeker_from_document, "JobSeeker"
    )


def match_repository(store: IDocumentStore) -> Repository[Match]:
    return Repository(store, Collection.MATCHES.value, match_to_document, match_from_document, "Match")


__all__ = [
    "IDocumentStore",
    "Conditions",
    "Repository",
    "job_repository",
    "seeker_repository",
    "match_repository",
]
