"""
JSON export of a projection.

The document is the flat record from to_record(): every parameter, every
derived field and the error fields. load_export() reads it back to the
same ProjectionResult / ProjectionFailure.
"""

import json
from datetime import date
from typing import Optional

from .config import settings
from .results import Projection, projection_from_record


def export_json(projection: Projection) -> str:
    return json.dumps(projection.to_record(), indent=2, ensure_ascii=False)


def load_export(text: str) -> Projection:
    return projection_from_record(json.loads(text))


def export_filename(on: Optional[date] = None, extension: str = "json") -> str:
    """e.g. poha-manufacturing-analysis-2026-10-19.json"""
    day = (on or date.today()).isoformat()
    return f"{settings.EXPORT_FILENAME_PREFIX}-{day}.{extension}"
