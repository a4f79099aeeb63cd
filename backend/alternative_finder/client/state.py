from dataclasses import dataclass, field
from enum import Enum
from typing import List

from alternative_finder.schemas.products import Product


class ScanPhase(str, Enum):
    IDLE = "idle"
    CAMERA_OPEN = "camera-open"
    SCANNING = "scanning"


@dataclass
class ScannerState:
    products: List[Product] = field(default_factory=list)
    savings: float = 0.0         # not incremented anywhere yet
    camera_open: bool = False
    scanning: bool = False

    @property
    def phase(self) -> ScanPhase:
        if self.scanning:
            return ScanPhase.SCANNING
        if self.camera_open:
            return ScanPhase.CAMERA_OPEN
        return ScanPhase.IDLE
