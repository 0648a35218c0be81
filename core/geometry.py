# core/geometry.py
from dataclasses import dataclass

from core import constants
from core.bounds import ProjectionParameters
from core.coordinate_manager import RegionFeature, RegionGeometry, geometry_from_coordinates


@dataclass(frozen=True)
class RegionPath:
    """
    Lo que recibe la superficie de dibujo por cada región: su identidad,
    el path en formato SVG y los anillos ya proyectados.
    """
    region_id: str
    path_data: str
    rings: tuple


class GeometryProjector:
    """
    Proyecta coordenadas (lon, lat) al lienzo y genera los paths de cada
    geometría. No guarda estado más allá de los parámetros recibidos.
    """

    def __init__(self, params: ProjectionParameters):
        self.params = params

    def project_point(self, lon: float, lat: float) -> tuple[float, float]:
        p = self.params
        x = (lon - p.bounds.min_lon) * p.scale_x + p.padding
        # El eje Y del lienzo crece hacia abajo, la latitud hacia el norte
        y = (p.bounds.max_lat - lat) * p.scale_y + p.padding
        return x, y

    def project_ring(self, ring) -> tuple:
        return tuple(self.project_point(lon, lat) for lon, lat in ring)

    @staticmethod
    def _format(x: float, y: float) -> str:
        return f"{x:.{constants.PATH_PRECISION}f},{y:.{constants.PATH_PRECISION}f}"

    @classmethod
    def path_from_projected(cls, projected_ring) -> str:
        commands = [
            f"{'M' if i == 0 else 'L'} {cls._format(x, y)}"
            for i, (x, y) in enumerate(projected_ring)
        ]
        return " ".join(commands) + " Z"

    def ring_to_path(self, ring) -> str:
        return self.path_from_projected(self.project_ring(ring))

    def geometry_to_path(self, geometry: RegionGeometry) -> str:
        """
        Un anillo tras otro, en el orden original: los huecos van después
        de su anillo exterior.
        """
        return " ".join(self.ring_to_path(ring) for ring in geometry.rings())

    def coordinates_to_path(self, coordinates) -> str:
        """
        Igual que geometry_to_path pero a partir de coordenadas crudas de
        Polygon o MultiPolygon; la variante se deduce de su anidamiento.
        """
        return self.geometry_to_path(geometry_from_coordinates(coordinates))


class GeometryBuilder:
    """
    Construye los paths de dibujo a partir de la lista de features que
    devuelve CoordinateManager.
    """

    @staticmethod
    def paths_from_features(features: list[RegionFeature], params: ProjectionParameters) -> list[RegionPath]:
        projector = GeometryProjector(params)
        result = []
        for feat in features:
            rings = tuple(projector.project_ring(ring) for ring in feat.geometry.rings())
            path_data = " ".join(projector.path_from_projected(ring) for ring in rings)
            result.append(RegionPath(feat.region_id, path_data, rings))
        return result
