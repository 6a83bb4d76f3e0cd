"""Folder tree operations."""

from typing import Any

from wikidocs.models.document import Document
from wikidocs.models.folder import Folder


class FolderTreeBuilder:
    """Builds the folder tree used for navigation.

    Documents are attached to the folder whose path equals the directory prefix
    of the document path. Documents without a matching folder are left out.
    """

    def build(self, folders: list[Folder], documents: list[Document]) -> list[dict[str, Any]]:
        """
        Build nested folder nodes.

        Args:
            folders: All folders
            documents: All documents

        Returns:
            Root folder nodes; each node has ``folder``, ``children`` and ``documents``
        """
        nodes: dict[str, dict[str, Any]] = {
            folder.path: {"folder": folder, "children": [], "documents": []}
            for folder in folders
        }

        for document in documents:
            folder_path = document.folder_path
            if folder_path in nodes:
                nodes[folder_path]["documents"].append(document)

        roots = []
        for folder in sorted(folders, key=lambda f: f.path):
            node = nodes[folder.path]
            parent = nodes.get(folder.parent_path) if folder.parent_path else None
            if parent is None:
                roots.append(node)
            else:
                parent["children"].append(node)
        return roots
