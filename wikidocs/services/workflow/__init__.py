"""Review workflow components: validation, status transitions and folder tree."""

from wikidocs.services.workflow.transitions import StatusMachine
from wikidocs.services.workflow.tree_operations import FolderTreeBuilder
from wikidocs.services.workflow.validation import DocumentValidator

__all__ = ["DocumentValidator", "StatusMachine", "FolderTreeBuilder"]
