import argparse
import sys
from collections.abc import Sequence

from legalscan.analysis.serializers import OutputFormat, render
from legalscan.config.settings import Settings
from legalscan.database.connection import close_pool, init_pool
from legalscan.database.repositories.analysis_repository import AnalysisRepository
from legalscan.extraction.exceptions import ExtractionError
from legalscan.extraction.file_loader import FileLoader
from legalscan.logging.logger import Log
from legalscan.processor.processor import build_processor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="legalscan",
        description="Extract text from a legal document, classify it and pull out case fields",
    )
    parser.add_argument("path", help="PDF or image file to analyse")
    parser.add_argument(
        "--media-type",
        default=None,
        help="Declared media type (default: guessed from the file name)",
    )
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=None,
        help="Output format (default: OUTPUT_FORMAT setting)",
    )
    parser.add_argument(
        "--persist",
        action="store_true",
        help="Store the analysis in the legal_documents table",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: load file -> build processor -> analyse -> print [-> persist]."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    if args.format is not None:
        settings = settings.model_copy(update={"output_format": args.format})
    Log.configure(settings.log_level)
    fmt = OutputFormat.parse(settings.output_format)

    if args.persist:
        init_pool(settings)
    try:
        processor = build_processor(
            settings,
            record_store=AnalysisRepository() if args.persist else None,
        )
        document = FileLoader().load(args.path, media_type=args.media_type)
        analysis = processor.process(document)
    except ExtractionError as exc:
        Log.error(f"Cannot analyse {args.path}: {exc}")
        return 1
    finally:
        if args.persist:
            close_pool()

    print(render(analysis, fmt))
    return 0


if __name__ == "__main__":
    sys.exit(main())
