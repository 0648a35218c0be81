# core/region_map.py
from dataclasses import dataclass, field

from core.bounds import BoundsExtractor, ProjectionParameters
from core.config import MapSettings
from core.coordinate_manager import CoordinateManager
from core.geometry import GeometryBuilder, RegionPath


@dataclass
class RegionMap:
    """
    Resultado listo para una superficie de dibujo: el viewport
    (width x height) y un RegionPath por región, en el orden original.
    """
    width: float
    height: float
    params: ProjectionParameters
    regions: list[RegionPath] = field(default_factory=list)

    @property
    def view_box(self) -> str:
        return f"0 0 {self.width} {self.height}"

    def region_ids(self) -> list[str]:
        return [r.region_id for r in self.regions]

    def find(self, region_id: str) -> RegionPath | None:
        for region in self.regions:
            if region.region_id == region_id:
                return region
        return None


def build_region_map(mgr: CoordinateManager, settings: MapSettings | None = None) -> RegionMap:
    settings = settings or MapSettings()
    features = mgr.get_features()
    _, params = BoundsExtractor(settings.canvas_width, settings.padding).extract(features)
    regions = GeometryBuilder.paths_from_features(features, params)
    return RegionMap(params.canvas_width, params.canvas_height, params, regions)


def region_map_from_geojson(data: dict, settings: MapSettings | None = None) -> RegionMap:
    settings = settings or MapSettings()
    mgr = CoordinateManager.from_geojson(data, settings.skip_unsupported)
    return build_region_map(mgr, settings)
