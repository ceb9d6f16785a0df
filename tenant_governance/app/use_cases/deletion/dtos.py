"""
Deletion Use Case DTOs
"""

from typing import Dict

from pydantic import BaseModel


class DeletionSummary(BaseModel):
    """What a confirmed deletion removed"""

    status: str
    target_id: str
    target_name: str
    removed: Dict[str, int]
    audit_sequence: int
