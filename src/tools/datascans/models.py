"""Result objects returned by the data scan tools."""

from dataclasses import asdict, dataclass, field
from typing import List, Optional


@dataclass
class DataScanItem:
    """One data scan in a listing."""

    name: str
    create_time: Optional[str]  # ISO-8601, None when unset
    state: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DataScanList:
    parent: str
    data_scans: List[DataScanItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "parent": self.parent,
            "total": len(self.data_scans),
            "data_scans": [item.to_dict() for item in self.data_scans],
        }


@dataclass
class DataScanInfo:
    """Projection of a data scan fetched with the FULL view."""

    data_scan_name: str
    display_name: str
    data_source: str
    type: str
    state: str
    result: Optional[dict] = None  # data profile result, when present

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DataProfileScan:
    """A newly created data profile scan."""

    data_scan_name: str
    display_name: str
    data_source: str
    state: str
    sampling_percent: float
    job_name: Optional[str] = None  # set when the scan was started

    def to_dict(self) -> dict:
        return asdict(self)
