# core/bounds.py
import logging
import math
from dataclasses import dataclass
from numbers import Real

from core import constants
from core.errors import DegenerateExtent, MalformedGeometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundingBox:
    min_lon: float
    max_lon: float
    min_lat: float
    max_lat: float

    @property
    def lon_range(self) -> float:
        return self.max_lon - self.min_lon

    @property
    def lat_range(self) -> float:
        return self.max_lat - self.min_lat


@dataclass(frozen=True)
class ProjectionParameters:
    """
    Parámetros compartidos por todas las proyecciones de una colección.

    scale_x y scale_y se calculan por separado: la corrección de latitud solo
    fija la proporción del lienzo, no iguala las escalas de cada eje. Es una
    aproximación intencional, no una proyección equivalente ni conforme.
    """
    bounds: BoundingBox
    scale_x: float
    scale_y: float
    canvas_width: float
    canvas_height: float
    padding: float
    lat_correction: float
    aspect_ratio: float


def iter_points(node):
    """
    Recorre en profundidad un árbol de coordenadas y devuelve sus puntos.
    Un nodo es un punto cuando su primer elemento es un número.
    """
    if isinstance(node[0], Real):
        yield node
        return
    for child in node:
        yield from iter_points(child)


def compute_bounds(features) -> BoundingBox:
    """
    Caja envolvente sobre los puntos de *todos* los features (RegionFeature),
    de modo que todas las regiones comparten un mismo sistema de coordenadas.
    """
    min_lon = min_lat = math.inf
    max_lon = max_lat = -math.inf
    count = 0
    for feat in features:
        for lon, lat in iter_points(feat.geometry.polygons):
            min_lon = min(min_lon, lon)
            max_lon = max(max_lon, lon)
            min_lat = min(min_lat, lat)
            max_lat = max(max_lat, lat)
            count += 1

    if count == 0:
        raise MalformedGeometry("La colección no contiene puntos; no se puede calcular la extensión")
    return BoundingBox(min_lon, max_lon, min_lat, max_lat)


def projection_parameters(bounds: BoundingBox,
                          canvas_width: float = constants.DEFAULT_CANVAS_WIDTH,
                          padding: float = constants.DEFAULT_PADDING) -> ProjectionParameters:
    lon_range = bounds.lon_range
    lat_range = bounds.lat_range
    if lon_range == 0 or lat_range == 0:
        raise DegenerateExtent(
            f"Extensión degenerada: rango de longitud {lon_range}, rango de latitud {lat_range}"
        )

    # Un grado de longitud mide menos cuanto más lejos del ecuador
    avg_lat = (bounds.min_lat + bounds.max_lat) / 2
    lat_correction = math.cos(math.radians(avg_lat))
    corrected_lon_range = lon_range * lat_correction
    if corrected_lon_range <= 0:
        raise DegenerateExtent(f"Extensión degenerada: latitud media {avg_lat} sin ancho proyectable")

    aspect_ratio = corrected_lon_range / lat_range
    canvas_height = canvas_width / aspect_ratio
    if canvas_height - 2 * padding <= 0:
        raise DegenerateExtent(
            f"Extensión degenerada: el alto del lienzo {canvas_height:.4f} no deja área dibujable "
            f"con margen {padding}"
        )

    return ProjectionParameters(
        bounds=bounds,
        scale_x=(canvas_width - 2 * padding) / lon_range,
        scale_y=(canvas_height - 2 * padding) / lat_range,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        padding=padding,
        lat_correction=lat_correction,
        aspect_ratio=aspect_ratio,
    )


class BoundsExtractor:
    """
    Calcula una sola vez la caja envolvente y los parámetros de proyección
    de una colección de regiones.
    """

    def __init__(self, canvas_width: float = constants.DEFAULT_CANVAS_WIDTH,
                 padding: float = constants.DEFAULT_PADDING):
        self.canvas_width = canvas_width
        self.padding = padding

    def extract(self, features) -> tuple[BoundingBox, ProjectionParameters]:
        bounds = compute_bounds(features)
        params = projection_parameters(bounds, self.canvas_width, self.padding)
        logger.debug(
            f"Extensión lon [{bounds.min_lon}, {bounds.max_lon}] lat [{bounds.min_lat}, {bounds.max_lat}]; "
            f"lienzo {params.canvas_width:.2f}x{params.canvas_height:.2f}, "
            f"escala x={params.scale_x:.4f} y={params.scale_y:.4f}"
        )
        return bounds, params
