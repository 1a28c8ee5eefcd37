"""Map data loading: GeoJSON files in, WayfindingGraph out."""

from .loader import GeoJSONLoader, GraphBuilder, WayfindingDataManager

__all__ = ["GeoJSONLoader", "GraphBuilder", "WayfindingDataManager"]
