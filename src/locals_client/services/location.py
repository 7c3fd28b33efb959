"""Last known location and selected delivery city."""

import json
import logging
from dataclasses import asdict, dataclass, field

from locals_client.adapters.local_storage import (
    LOCATION_KEY,
    SELECTED_CITY_KEY,
    KeyValueStorage,
)
from locals_client.domain.session import LocationData

_logger = logging.getLogger(__name__)


@dataclass
class LocationService:
    """Keeps location state in memory and mirrors it to storage.

    Storage failures are logged; the in-memory value still updates.
    """

    storage: KeyValueStorage
    current_location: LocationData | None = field(default=None, init=False)
    selected_city: str = field(default="", init=False)

    async def restore(self) -> None:
        """Load the stored location and city, if any."""
        try:
            raw_location = await self.storage.get_item(LOCATION_KEY)
            stored_city = await self.storage.get_item(SELECTED_CITY_KEY)
        except OSError:
            _logger.exception("Failed to read stored location")
            return
        if raw_location:
            try:
                self.current_location = LocationData(**json.loads(raw_location))
            except (TypeError, ValueError):
                _logger.warning("Ignoring unreadable stored location")
        if stored_city:
            self.selected_city = stored_city

    async def save_location(self, location: LocationData) -> None:
        """Adopt and persist a freshly resolved location."""
        self.current_location = location
        try:
            await self.storage.set_item(LOCATION_KEY, json.dumps(asdict(location)))
        except OSError:
            _logger.exception("Failed to save location")

    async def set_selected_city(self, city: str) -> None:
        """Adopt and persist the delivery city."""
        self.selected_city = city
        try:
            await self.storage.set_item(SELECTED_CITY_KEY, city)
        except OSError:
            _logger.exception("Failed to save selected city")
