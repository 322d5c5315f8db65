import json
from enum import Enum

from legalscan.analysis.models import StructuredAnalysis
from legalscan.analysis.xml_converter import XmlConverter


class OutputFormat(str, Enum):
    JSON = "json"
    XML = "xml"

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown output format '{value}'. Choose from: {[f.value for f in cls]}"
            ) from None


def to_json(analysis: StructuredAnalysis) -> str:
    return json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False)


def render(analysis: StructuredAnalysis, fmt: OutputFormat = OutputFormat.JSON) -> str:
    """Serialize an analysis in the requested wire format."""
    if fmt is OutputFormat.XML:
        return XmlConverter().to_xml(analysis)
    return to_json(analysis)
