"""
Scanner workflow: idle -> camera-open -> scanning -> idle.

The controller owns the ScannerState and is the only thing that mutates it.
Catalog and detector are picked once (demo or live) and injected, so none of
the transitions below care which mode they run in.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from alternative_finder.client.catalog import CatalogSource, select_catalog
from alternative_finder.client.detector import Detector, select_detector
from alternative_finder.client.notify import Notifier
from alternative_finder.client.state import ScanPhase, ScannerState
from alternative_finder.core.config import Settings
from alternative_finder.schemas.products import Product, demo_products

logger = logging.getLogger(__name__)

MSG_DEMO_DATA = "Using demo data - Supabase credentials not configured"
MSG_FETCH_FAILED = "Failed to fetch products"
MSG_CAMERA_READY = "Camera ready!"
MSG_DEMO_DETECTION = "Demo Mode: Simulating product detection"
MSG_AMERICAN = "American product detected! Showing alternatives..."
MSG_NOT_AMERICAN = "No American product detected"
MSG_ANALYZE_FAILED = "Failed to analyze image"

BADGE_AMERICAN = "American Product"
BADGE_ALTERNATIVE = "Alternative"


@dataclass
class ProductCard:
    id: str
    image_url: Optional[str]
    name: str
    description: str
    price: str
    badge: str


@dataclass
class CatalogView:
    cards: List[ProductCard]
    savings: str


def format_money(amount: float) -> str:
    return f"${amount:.2f}"


class ScannerController:
    def __init__(
        self,
        catalog: CatalogSource,
        detector: Detector,
        notifier: Optional[Notifier] = None,
        state: Optional[ScannerState] = None,
    ):
        self.catalog = catalog
        self.detector = detector
        self.notifier = notifier or Notifier()
        self.state = state or ScannerState()

    @classmethod
    def from_settings(cls, cfg: Settings, notifier: Optional[Notifier] = None) -> "ScannerController":
        return cls(select_catalog(cfg), select_detector(cfg), notifier=notifier)

    @property
    def phase(self) -> ScanPhase:
        return self.state.phase

    async def load_catalog(self) -> List[Product]:
        if self.catalog.is_demo:
            self.state.products = await self.catalog.fetch_products()
            self.notifier.info(MSG_DEMO_DATA)
            return self.state.products

        try:
            self.state.products = await self.catalog.fetch_products()
        except Exception as e:
            logger.error("Error fetching products: %s", e)
            self.notifier.error(MSG_FETCH_FAILED)
            self.state.products = demo_products()
        return self.state.products

    def open_camera(self) -> None:
        self.state.camera_open = True

    def camera_ready(self) -> None:
        self.notifier.success(MSG_CAMERA_READY)

    def cancel(self) -> None:
        if self.state.scanning:
            return
        self.state.camera_open = False

    async def capture(self, image: Optional[str]) -> None:
        """
        Classify one captured frame and tell the user what came back.
        Whatever happens, the scan ends idle with the camera closed.
        """
        if not image:
            logger.debug("capture: no frame, ignoring")
            return
        if self.state.scanning:
            logger.debug("capture: scan already in flight, ignoring")
            return

        self.state.scanning = True
        try:
            result = await self.detector.detect(image)

            if result.demo:
                self.notifier.success(MSG_DEMO_DETECTION)
            elif result.is_american:
                # Suggesting an alternative / crediting savings is not wired up yet
                self.notifier.success(MSG_AMERICAN)
            else:
                self.notifier.info(MSG_NOT_AMERICAN)
        except Exception as e:
            logger.error("Error analyzing image: %s", e)
            self.notifier.error(MSG_ANALYZE_FAILED)
        finally:
            self.state.scanning = False
            self.state.camera_open = False

    def render(self) -> CatalogView:
        cards = [
            ProductCard(
                id=p.id,
                image_url=p.image_url,
                name=p.name,
                description=p.description,
                price=format_money(p.price),
                badge=BADGE_AMERICAN if p.is_american else BADGE_ALTERNATIVE,
            )
            for p in self.state.products
        ]
        return CatalogView(cards=cards, savings=f"Saved: {format_money(self.state.savings)}")
