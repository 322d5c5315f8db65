from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from legalscan.analysis.models import StructuredAnalysis
from legalscan.analysis.serializers import OutputFormat, render
from legalscan.database.connection import get_connection
from legalscan.database.models import StoredDocument
from legalscan.processor.exceptions import DocumentNotFoundError

_COLUMNS = "id, original_name, text, structured_data, format, created_at"


def _structured_data(analysis: StructuredAnalysis, fmt: OutputFormat) -> Jsonb:
    """JSON records keep the structured object; XML records keep the rendered
    document as a JSON string."""
    if fmt is OutputFormat.JSON:
        return Jsonb(analysis.to_dict())
    return Jsonb(render(analysis, fmt))


def _to_record(row: dict[str, Any]) -> StoredDocument:
    return StoredDocument(
        id=row["id"],
        original_name=row["original_name"],
        text=row["text"],
        structured_data=row["structured_data"],
        format=row["format"],
        created_at=row["created_at"],
    )


class AnalysisRepository:
    """Database operations for the legal_documents table."""

    def save(
        self,
        analysis: StructuredAnalysis,
        original_name: str | None,
        fmt: OutputFormat = OutputFormat.JSON,
    ) -> int:
        """Insert one analysis and return the new record ID."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO legal_documents
                    (original_name, text, structured_data, format)
                    VALUES (%s, %s, %s, %s)
                    RETURNING id
                    """,
                    (
                        original_name,
                        analysis.text,
                        _structured_data(analysis, fmt),
                        fmt.value.upper(),
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT into legal_documents returned no id")
        return int(row[0])

    def find_by_id(self, record_id: int) -> StoredDocument:
        """Find a stored analysis by ID.

        Raises:
            DocumentNotFoundError: if no record with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM legal_documents WHERE id = %s",
                    (record_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {record_id} not found")
        return _to_record(row)

    def find_all(self) -> list[StoredDocument]:
        """Every stored analysis, oldest first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM legal_documents ORDER BY id")
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def update(
        self,
        record_id: int,
        analysis: StructuredAnalysis,
        fmt: OutputFormat = OutputFormat.JSON,
        original_name: str | None = None,
    ) -> StoredDocument:
        """Replace the stored analysis of one record and return the new row.

        The original name is kept unless a new one is given.

        Raises:
            DocumentNotFoundError: if no record with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE legal_documents
                    SET original_name = COALESCE(%s, original_name),
                        text = %s,
                        structured_data = %s,
                        format = %s
                    WHERE id = %s
                    RETURNING {_COLUMNS}
                    """,
                    (
                        original_name,
                        analysis.text,
                        _structured_data(analysis, fmt),
                        fmt.value.upper(),
                        record_id,
                    ),
                )
                row = cur.fetchone()
                if row is None:
                    raise DocumentNotFoundError(f"Document {record_id} not found")
            conn.commit()
        return _to_record(row)

    def delete(self, record_id: int) -> None:
        """Remove one stored analysis.

        Raises:
            DocumentNotFoundError: if no record with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM legal_documents WHERE id = %s", (record_id,))
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {record_id} not found")
            conn.commit()
