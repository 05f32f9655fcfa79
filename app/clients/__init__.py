from .electrs_client import ElectrsClient
from .mock_electrs_client import MockElectrsClient

__all__ = [
    "ElectrsClient",
    "MockElectrsClient"
]
