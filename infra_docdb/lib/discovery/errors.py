class DiscoveryError(Exception):
    """Base class for failed existence lookups"""


class AmbiguousLookupError(DiscoveryError):
    def __init__(self, kind: str, filters: list[dict], ids: list[str]):
        super().__init__(f"{len(ids)} {kind} resources match {filters}, expected at most one: {', '.join(ids)}")
        self.kind = kind
        self.ids = ids


class LookupFailedError(DiscoveryError):
    def __init__(self, kind: str, cause: Exception):
        super().__init__(f"could not look up {kind}: {cause}")
        self.kind = kind
