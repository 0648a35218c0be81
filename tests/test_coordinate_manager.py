import json
import os
import tempfile
import unittest

from core.coordinate_manager import (
    CoordinateManager,
    GeometryType,
    decode_coordinates,
    geometry_from_coordinates,
    resolve_region_id,
)
from core.errors import MalformedGeometry, UnsupportedGeometry

RING = [[0, 0], [0, 2], [2, 2], [0, 0]]


def feature(geometry, properties=None):
    raw = {"type": "Feature", "geometry": geometry}
    if properties is not None:
        raw["properties"] = properties
    return raw


class TestDecodeCoordinates(unittest.TestCase):

    def test_point_leaf_keeps_lon_lat_only(self):
        tree, depth = decode_coordinates([[[10.5, 40.25, 1200.0]]])
        self.assertEqual(tree, (((10.5, 40.25),),))
        self.assertEqual(depth, 2)

    def test_short_leaf_is_malformed(self):
        with self.assertRaises(MalformedGeometry):
            decode_coordinates([[[10.5]]])

    def test_boolean_is_not_a_coordinate(self):
        with self.assertRaises(MalformedGeometry):
            decode_coordinates([[[True, 1.0]]])
        with self.assertRaises(MalformedGeometry):
            decode_coordinates([[[1.0, False]]])

    def test_non_finite_components_are_malformed(self):
        for value in (float("nan"), float("inf"), float("-inf")):
            with self.subTest(value=value):
                with self.assertRaises(MalformedGeometry):
                    decode_coordinates([[[0, 0], [value, 1], [2, 2], [0, 0]]])
                with self.assertRaises(MalformedGeometry):
                    decode_coordinates([[[0, 0], [1, value], [2, 2], [0, 0]]])

    def test_empty_ring_is_malformed(self):
        with self.assertRaises(MalformedGeometry):
            decode_coordinates([[]])

    def test_mixed_nesting_is_malformed(self):
        with self.assertRaises(MalformedGeometry):
            decode_coordinates([[[0, 0], [[1, 1]]]])

    def test_error_carries_feature_index(self):
        with self.assertRaises(MalformedGeometry) as ctx:
            decode_coordinates([["x"]], feature_index=4)
        self.assertEqual(ctx.exception.feature_index, 4)
        self.assertIn("Feature 4", str(ctx.exception))


class TestGeometryFromCoordinates(unittest.TestCase):

    def test_polygon_is_detected_structurally(self):
        geometry = geometry_from_coordinates([RING])
        self.assertEqual(geometry.geometry_type, GeometryType.POLYGON)
        self.assertEqual(len(geometry.polygons), 1)

    def test_multipolygon_is_detected_structurally(self):
        geometry = geometry_from_coordinates([[RING], [RING, RING]])
        self.assertEqual(geometry.geometry_type, GeometryType.MULTIPOLYGON)
        self.assertEqual(len(geometry.polygons), 2)
        self.assertEqual(len(list(geometry.rings())), 3)

    def test_declared_point_is_unsupported(self):
        with self.assertRaises(UnsupportedGeometry):
            geometry_from_coordinates([1.0, 2.0], "Point")

    def test_declared_geometry_collection_is_unsupported(self):
        with self.assertRaises(UnsupportedGeometry):
            geometry_from_coordinates(None, "GeometryCollection")

    def test_declared_type_must_match_structure(self):
        with self.assertRaises(MalformedGeometry):
            geometry_from_coordinates([RING], "MultiPolygon")

    def test_missing_coordinates_are_malformed(self):
        with self.assertRaises(MalformedGeometry):
            geometry_from_coordinates(None, "Polygon")


class TestResolveRegionId(unittest.TestCase):

    def test_name_property_is_used(self):
        self.assertEqual(resolve_region_id({"name": "Ankara"}, 0), "Ankara")

    def test_fallback_label_is_one_based(self):
        self.assertEqual(resolve_region_id({}, 2), "Region 3")
        self.assertEqual(resolve_region_id(None, 2), "Region 3")
        self.assertEqual(resolve_region_id({"name": ""}, 0), "Region 1")


class TestCoordinateManager(unittest.TestCase):

    def setUp(self):
        self.data = {"type": "FeatureCollection", "features": [
            feature({"type": "Polygon", "coordinates": [RING]}, {"name": "Adana"}),
            feature({"type": "MultiPolygon", "coordinates": [[RING]]}, {"name": "Izmir"}),
            feature({"type": "Polygon", "coordinates": [RING]}),
        ]}

    def test_from_geojson_keeps_order_and_ids(self):
        mgr = CoordinateManager.from_geojson(self.data)
        features = mgr.get_features()
        self.assertEqual([f.region_id for f in features], ["Adana", "Izmir", "Region 3"])
        self.assertEqual([f.index for f in features], [0, 1, 2])
        self.assertEqual(features[1].geometry.geometry_type, GeometryType.MULTIPOLYGON)

    def test_unsupported_feature_raises_by_default(self):
        self.data["features"].insert(1, feature({"type": "Point", "coordinates": [1, 1]}))
        with self.assertRaises(UnsupportedGeometry) as ctx:
            CoordinateManager.from_geojson(self.data)
        self.assertEqual(ctx.exception.feature_index, 1)

    def test_unsupported_feature_can_be_skipped(self):
        self.data["features"].insert(1, feature({"type": "LineString", "coordinates": [[1, 1], [2, 2]]}))
        with self.assertLogs("core.coordinate_manager", level="WARNING"):
            mgr = CoordinateManager.from_geojson(self.data, skip_unsupported=True)
        # Las posiciones originales se conservan para los nombres de respaldo
        self.assertEqual([f.region_id for f in mgr.get_features()], ["Adana", "Izmir", "Region 4"])

    def test_malformed_feature_is_never_skipped(self):
        self.data["features"].append(feature({"type": "Polygon", "coordinates": [[[0, "x"]]]}))
        with self.assertRaises(MalformedGeometry):
            CoordinateManager.from_geojson(self.data, skip_unsupported=True)

    def test_feature_without_geometry_is_malformed(self):
        self.data["features"].append({"type": "Feature", "geometry": None})
        with self.assertRaises(MalformedGeometry):
            CoordinateManager.from_geojson(self.data)

    def test_not_a_feature_collection(self):
        with self.assertRaises(MalformedGeometry):
            CoordinateManager.from_geojson({"type": "Feature"})

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "regions.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.data, f)
            mgr = CoordinateManager.from_file(path)
        self.assertEqual(len(mgr.get_features()), 3)

    def test_from_file_rejects_nan_literal(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "regions.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write('{"type": "FeatureCollection", "features": [{"type": "Feature", "geometry": '
                        '{"type": "Polygon", "coordinates": [[[0, 0], [NaN, 1], [2, 2], [0, 0]]]}}]}')
            with self.assertRaises(MalformedGeometry) as ctx:
                CoordinateManager.from_file(path)
        self.assertEqual(ctx.exception.feature_index, 0)

    def test_clear(self):
        mgr = CoordinateManager.from_geojson(self.data)
        mgr.clear()
        self.assertEqual(mgr.get_features(), [])


if __name__ == '__main__':
    unittest.main()
