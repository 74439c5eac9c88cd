"""API package.

This exposes router modules to simplify test imports like:
	from duplicate_detector.api.routes.duplicates import router
"""

__all__ = [
	"routes",
	"endpoints",
]
