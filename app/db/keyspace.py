"""
Fair-scoped keyspace.

Every per-fair copy lives under a path rooted at its fair:

    fairs/{fairId}/booths/{boothId}
    fairs/{fairId}/jobs/{jobId}
    fairs/{fairId}/enrollments/{companyId}

Global records stay in the top-level users/companies/booths/jobs collections.
"""

USERS = "users"
COMPANIES = "companies"
BOOTHS = "booths"
JOBS = "jobs"
FAIRS = "fairs"

ENROLLMENTS = "enrollments"

# Cascade order used when a fair is deleted
FAIR_SUBCOLLECTIONS = (BOOTHS, JOBS, ENROLLMENTS)


def fair_collection(fair_id: str, name: str) -> str:
    if name not in FAIR_SUBCOLLECTIONS:
        raise ValueError(f"Unknown fair sub-collection: {name}")
    return f"{FAIRS}/{fair_id}/{name}"


def fair_booths(fair_id: str) -> str:
    return fair_collection(fair_id, BOOTHS)


def fair_jobs(fair_id: str) -> str:
    return fair_collection(fair_id, JOBS)


def fair_enrollments(fair_id: str) -> str:
    return fair_collection(fair_id, ENROLLMENTS)
