class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a stored analysis cannot be found in the database."""


class IncompletePipelineError(ProcessorError):
    """Raised when the pipeline ends without producing an analysis."""
