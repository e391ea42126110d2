from .fetchers import StubFetcher
from .metrics import counter_delta, histogram_observes

__all__ = ["StubFetcher", "counter_delta", "histogram_observes"]
