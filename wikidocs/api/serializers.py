"""Model serialization for API responses."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import inspect

from wikidocs.services.github.sync_service import PushResult, SyncResult

# SQLAlchemy reserves 'metadata', so models use 'meta' internally
_RENAMED = {"meta": "metadata"}


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


def serialize_model(obj: Any) -> dict[str, Any]:
    """
    Serialize a SQLAlchemy model to a camelCase dictionary.

    Args:
        obj: SQLAlchemy model instance

    Returns:
        Dictionary of the mapped column values
    """
    result = {}
    for attr in inspect(obj).mapper.column_attrs:
        key = attr.key
        value = getattr(obj, key)
        output_key = _RENAMED.get(key, _camel(key))
        if isinstance(value, datetime):
            # SQLite hands timestamps back without their UTC offset
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            result[output_key] = value.isoformat()
        else:
            result[output_key] = value
    return result


def serialize_folder_tree(node: dict[str, Any]) -> dict[str, Any]:
    """Serialize a folder tree node with nested children and documents."""
    result = serialize_model(node["folder"])
    result["children"] = [serialize_folder_tree(child) for child in node["children"]]
    result["documents"] = [serialize_model(doc) for doc in node["documents"]]
    return result


def serialize_sync_result(result: SyncResult) -> dict[str, Any]:
    return {
        "message": f"Successfully synced {result.synced_count} documents from GitHub",
        "syncedCount": result.synced_count,
        "documents": [
            {"action": synced.action.value, "document": serialize_model(synced.document)}
            for synced in result.documents
        ],
    }


def serialize_push_result(result: PushResult) -> dict[str, Any]:
    return {
        "message": "Pull request created successfully",
        "pullRequest": {
            "number": result.pull_request_number,
            "url": result.pull_request_url,
        },
        "branch": result.branch,
        "githubPath": result.github_path,
        "githubSha": result.github_sha,
    }
