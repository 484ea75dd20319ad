from abc import ABC, abstractmethod

from kyc_extractor.records.models import SavedKycRecord


class BaseNotifier(ABC):
    """Contract for relays that mirror saved records to an outside channel."""

    @abstractmethod
    def notify(self, saved: SavedKycRecord) -> None:
        """Send the record's images and a text summary.

        Implementations log delivery failures instead of raising.
        """
