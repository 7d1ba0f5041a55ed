"""
Core constants — **Single Source of Truth** for project-wide magic numbers.

Any limit or business rule that references a numeric constant should
import it from here instead of hardcoding.  This avoids drift between
apps that use the same value.
"""

# ── Case image uploads ──────────────────────────────────────────────
# Reporters may attach one photo per case.  Anything larger than 5 MB or
# not a JPEG/PNG is rejected before it reaches storage.
CASE_IMAGE_MAX_BYTES: int = 5 * 1024 * 1024
CASE_IMAGE_EXTENSIONS: frozenset[str] = frozenset({"jpg", "jpeg", "png"})
CASE_IMAGE_CONTENT_TYPES: frozenset[str] = frozenset(
    {"image/jpeg", "image/jpg", "image/png"}
)
CASE_IMAGE_UPLOAD_DIR: str = "uploads"

# ── Aggregations ────────────────────────────────────────────────────
TOP_TIPPED_CASES_LIMIT: int = 5
RECENT_CASES_LIMIT: int = 3
HOMEPAGE_RECENT_CASES_LIMIT: int = 6

# Status value counted as "person found" on the homepage.
RESOLVED_STATUS: str = "Resolved"
