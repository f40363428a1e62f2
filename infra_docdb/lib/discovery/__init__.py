from .errors import DiscoveryError, AmbiguousLookupError, LookupFailedError
from .resource_discovery import ResourceDiscovery
from .types import ClusterRecord
