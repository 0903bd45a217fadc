import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Sequence

from solar_soc.modules.serializers import (
    serialize_dark_web_threat,
    serialize_device,
    serialize_firewall_alert,
    serialize_incident,
    serialize_threat,
    to_iso,
)


class ExportScope(str, Enum):
    THREATS = "threats"
    DEVICES = "devices"
    FIREWALL = "firewall"
    DARKWEB = "darkweb"
    INCIDENTS = "incidents"
    ALL = "all"


# Document key -> record serializer. Key order is the order keys appear in the file.
_SERIALIZERS: Dict[ExportScope, Callable[[Any], Dict[str, Any]]] = {
    ExportScope.THREATS: serialize_threat,
    ExportScope.DEVICES: serialize_device,
    ExportScope.FIREWALL: serialize_firewall_alert,
    ExportScope.DARKWEB: serialize_dark_web_threat,
    ExportScope.INCIDENTS: serialize_incident,
}


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    document: Dict[str, Any]

    def to_json(self) -> str:
        return json.dumps(self.document, indent=2, ensure_ascii=False)


def export_filename(scope: ExportScope, exported_at: datetime) -> str:
    """
    security-data-<scope>-<YYYY-MM-DD>.json, date in UTC.
    """
    return f"security-data-{scope.value}-{to_iso(exported_at)[:10]}.json"


def build_export(
    scope: ExportScope,
    *,
    exported_at: datetime,
    **sources: Callable[[], Sequence[Any]],
) -> ExportArtifact:
    """
    Build the export document for `scope`.

    `sources` maps each collection key ("threats", "devices", ...) to a zero-arg
    snapshot reader. Readers for collections outside the scope are never called,
    and their keys are absent from the document (not empty).
    """
    document: Dict[str, Any] = {}

    for key, serialize in _SERIALIZERS.items():
        if scope is not ExportScope.ALL and scope is not key:
            continue
        records = sources[key.value]()
        document[key.value] = [serialize(r) for r in records]

    document["exportedAt"] = to_iso(exported_at)

    return ExportArtifact(filename=export_filename(scope, exported_at), document=document)
