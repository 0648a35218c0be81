# core/coordinate_manager.py
import json
import logging
import math
from dataclasses import dataclass, field
from numbers import Real

from core import constants
from core.errors import MalformedGeometry, UnsupportedGeometry

logger = logging.getLogger(__name__)


class GeometryType:
    POLYGON = "Polygon"
    MULTIPOLYGON = "MultiPolygon"

    SUPPORTED = (POLYGON, MULTIPOLYGON)


@dataclass(frozen=True)
class RegionGeometry:
    """
    Geometría ya decodificada. polygons siempre es una secuencia de
    polígonos (un Polygon tiene exactamente uno), cada polígono una
    secuencia de anillos y cada anillo una secuencia de puntos (lon, lat).
    """
    geometry_type: str
    polygons: tuple

    def rings(self):
        for polygon in self.polygons:
            yield from polygon


@dataclass
class RegionFeature:
    index: int
    region_id: str
    geometry: RegionGeometry
    properties: dict = field(default_factory=dict)


def _is_number(value) -> bool:
    # bool es subclase de int, pero no es una coordenada
    return isinstance(value, Real) and not isinstance(value, bool)


def decode_coordinates(node, feature_index: int | None = None):
    """
    Convierte el árbol de coordenadas crudo en tuplas anidadas.
    Un nodo es un punto cuando su primer elemento es un número; se
    conservan solo lon y lat. Devuelve (árbol, profundidad), donde un
    punto tiene profundidad 0, un anillo 1, un polígono 2, etc.
    """
    if not isinstance(node, (list, tuple)):
        raise MalformedGeometry(f"Se esperaba una lista de coordenadas, se recibió {node!r}", feature_index)
    if not node:
        raise MalformedGeometry("Lista de coordenadas vacía", feature_index)

    if _is_number(node[0]):
        if len(node) < 2 or not _is_number(node[1]):
            raise MalformedGeometry(f"Coordenada inválida {node!r}: se esperaba [lon, lat]", feature_index)
        lon, lat = float(node[0]), float(node[1])
        # json.load acepta NaN e Infinity
        if not (math.isfinite(lon) and math.isfinite(lat)):
            raise MalformedGeometry(f"Coordenada no finita {node!r}", feature_index)
        return (lon, lat), 0

    children = []
    depth = None
    for child in node:
        decoded, child_depth = decode_coordinates(child, feature_index)
        if depth is None:
            depth = child_depth
        elif child_depth != depth:
            raise MalformedGeometry("Niveles de anidamiento inconsistentes en las coordenadas", feature_index)
        children.append(decoded)
    return tuple(children), depth + 1


def geometry_from_coordinates(coordinates, declared_type: str | None = None,
                              feature_index: int | None = None) -> RegionGeometry:
    """
    Decodifica las coordenadas y determina la variante por su estructura:
    es MultiPolygon cuando coords[0][0][0] es a su vez una lista.
    """
    if declared_type is not None and declared_type not in GeometryType.SUPPORTED:
        raise UnsupportedGeometry(f"Tipo de geometría '{declared_type}' no soportado", feature_index)
    if coordinates is None:
        raise MalformedGeometry("La geometría no tiene coordenadas", feature_index)

    tree, depth = decode_coordinates(coordinates, feature_index)
    if depth == 2:
        geometry_type = GeometryType.POLYGON
        polygons = (tree,)
    elif depth == 3:
        geometry_type = GeometryType.MULTIPOLYGON
        polygons = tree
    else:
        raise UnsupportedGeometry(
            f"Coordenadas con profundidad {depth} no corresponden a Polygon ni MultiPolygon",
            feature_index,
        )

    if declared_type is not None and declared_type != geometry_type:
        raise MalformedGeometry(
            f"Geometría declarada como '{declared_type}' pero sus coordenadas son de '{geometry_type}'",
            feature_index,
        )
    return RegionGeometry(geometry_type, polygons)


def resolve_region_id(properties: dict | None, index: int) -> str:
    name = (properties or {}).get("name")
    if name:
        return str(name)
    return constants.REGION_LABEL_TEMPLATE.format(number=index + 1)


def decode_feature(raw: dict, index: int) -> RegionFeature:
    if not isinstance(raw, dict):
        raise MalformedGeometry("El feature no es un objeto", index)
    geometry = raw.get("geometry")
    if not isinstance(geometry, dict):
        raise MalformedGeometry("El feature no tiene geometría", index)

    properties = raw.get("properties") or {}
    if not isinstance(properties, dict):
        properties = {}

    region_geometry = geometry_from_coordinates(
        geometry.get("coordinates"), geometry.get("type"), index
    )
    return RegionFeature(index, resolve_region_id(properties, index), region_geometry, properties)


def load_geojson(path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class CoordinateManager:
    """
    Colección de regiones decodificadas, en el orden original.
    """

    def __init__(self):
        self.features: list[RegionFeature] = []

    @classmethod
    def from_geojson(cls, data: dict, skip_unsupported: bool = False) -> "CoordinateManager":
        """
        Decodifica una FeatureCollection. Con skip_unsupported=True los
        features de tipo no soportado se descartan con una advertencia;
        en otro caso se propaga UnsupportedGeometry.
        """
        if not isinstance(data, dict) or not isinstance(data.get("features"), list):
            raise MalformedGeometry("Los datos no son una FeatureCollection de GeoJSON")

        mgr = cls()
        for index, raw in enumerate(data["features"]):
            try:
                mgr.add_feature(decode_feature(raw, index))
            except UnsupportedGeometry as e:
                if not skip_unsupported:
                    raise
                logger.warning(f"Se omitirá el feature: {e}")
        logger.debug(f"{len(mgr.features)} regiones decodificadas de {len(data['features'])} features")
        return mgr

    @classmethod
    def from_file(cls, path, skip_unsupported: bool = False) -> "CoordinateManager":
        return cls.from_geojson(load_geojson(path), skip_unsupported)

    def add_feature(self, feature: RegionFeature):
        self.features.append(feature)

    def clear(self):
        self.features.clear()

    def get_features(self):
        return self.features
