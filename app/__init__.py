"""
Career Fair Platform
Fairs, company enrollment and per-fair booth/job snapshots.

Architecture:
- MongoDB: every collection, including the fair-scoped copies
  (fairs/{fairId}/booths|jobs|enrollments)
- FastAPI: HTTP surface under /api
"""

__version__ = "1.0.0"
