"""Domain repository interfaces.

Abstractions are defined here with abc.ABC and @abstractmethod.  Concrete
implementations live in src/infrastructure/ and are wired at the
application boundary (the CLI).
"""

from .series import AssetSeriesRepository

__all__ = ["AssetSeriesRepository"]
