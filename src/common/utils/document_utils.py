# File: common/utils/document_utils.py
from typing import Any, Dict, Optional


def to_public(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Rename the Mongo ``_id`` to ``id``; everything else is returned as stored."""
    if document is None:
        return None
    public = dict(document)
    if "_id" in public:
        public = {"id": str(public.pop("_id")), **public}
    return public
