import mimetypes
from pathlib import Path

from legalscan.extraction.exceptions import ExtractionError, UnsupportedMediaTypeError
from legalscan.extraction.models import SourceDocument


class FileLoader:
    """Reads a source document from disk."""

    def load(self, path: Path | str, media_type: str | None = None) -> SourceDocument:
        """Read file bytes and attach the declared (or guessed) media type.

        Raises:
            ExtractionError: if the file does not exist or cannot be read.
            UnsupportedMediaTypeError: if no media type is declared and none
                can be guessed from the file name.
        """
        resolved = Path(path)
        if not resolved.is_file():
            raise ExtractionError(f"File not found: {resolved}")
        declared = media_type or self._guess_media_type(resolved)
        try:
            content = resolved.read_bytes()
        except OSError as exc:
            raise ExtractionError(f"Cannot read {resolved}: {exc}") from exc
        return SourceDocument(content=content, media_type=declared, name=resolved.name)

    @staticmethod
    def _guess_media_type(path: Path) -> str:
        guessed, _ = mimetypes.guess_type(path.name)
        if guessed is None:
            raise UnsupportedMediaTypeError(f"Cannot determine media type of {path.name}")
        return guessed
