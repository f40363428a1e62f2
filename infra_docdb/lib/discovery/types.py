from dataclasses import dataclass
from typing import Optional


@dataclass
class ClusterRecord:
    id: str
    """Cluster identifier"""

    endpoint: Optional[str]
    """Writer endpoint, missing until the cluster has been provisioned"""

    reader_endpoint: Optional[str]
    """Load-balanced read-only endpoint"""

    port: Optional[int]
    """Port the cluster listens on"""

    status: Optional[str]
    """Cluster status (creating, available, ...)"""
