# core/errors.py


class MapDataError(ValueError):
    """
    Error base para datos de mapa que no se pueden dibujar.
    feature_index indica la posición del feature en la colección, si se conoce.
    """

    def __init__(self, message: str, feature_index: int | None = None):
        if feature_index is not None:
            message = f"Feature {feature_index}: {message}"
        super().__init__(message)
        self.feature_index = feature_index


class MalformedGeometry(MapDataError):
    """Coordenada que no es un par numérico, o colección sin puntos."""


class DegenerateExtent(MapDataError):
    """La extensión geográfica colapsa a ancho o alto cero."""


class UnsupportedGeometry(MapDataError):
    """Tipo de geometría distinto de Polygon / MultiPolygon."""
