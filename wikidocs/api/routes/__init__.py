"""API routers."""

from wikidocs.api.routes import documents, folders, github, reviews, users

__all__ = ["documents", "folders", "github", "reviews", "users"]
