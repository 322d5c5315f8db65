from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class StoredDocument:
    """Represents a row from the legal_documents table."""

    id: int
    original_name: str | None
    text: str
    structured_data: Any
    format: str
    created_at: datetime | None = None
