"""DNS provider blueprint."""

from abc import ABC, abstractmethod

from zonesync.base.endpoint import Endpoint
from zonesync.base.plan import Changes


class ProviderBlueprint(ABC):
    """Abstract interface consumed by the reconciliation planner.

    A provider exposes the live records of the zones it manages and
    applies the planner's mutation batch to them.
    """

    @abstractmethod
    def records(self) -> list[Endpoint]:
        """Return every manageable record in the filtered zones.

        Raises:
            DNSError: If listing any zone or record set fails. No partial
                inventory is ever returned.
        """

    @abstractmethod
    def apply_changes(self, changes: Changes) -> None:
        """Apply a mutation batch.

        Args:
            changes: Creates, updates (new/old pairs) and deletes.

        Raises:
            DNSError: If a provider mutation fails.
        """
