import unittest

from core.config import MapSettings
from core.coordinate_manager import CoordinateManager
from core.errors import DegenerateExtent, UnsupportedGeometry
from core.region_map import build_region_map, region_map_from_geojson


def triangles(*extra):
    features = [
        {"type": "Feature", "properties": {"name": "Region A"},
         "geometry": {"type": "Polygon", "coordinates": [[[0, 0], [0, 2], [2, 2], [0, 0]]]}},
        {"type": "Feature", "properties": {"name": "Region B"},
         "geometry": {"type": "Polygon", "coordinates": [[[2, 0], [2, 2], [4, 2], [2, 0]]]}},
    ]
    features.extend(extra)
    return {"type": "FeatureCollection", "features": features}


class TestRegionMap(unittest.TestCase):

    def test_two_triangle_end_to_end(self):
        region_map = region_map_from_geojson(triangles(), MapSettings(canvas_width=100, padding=10))

        bounds = region_map.params.bounds
        self.assertEqual((bounds.min_lon, bounds.max_lon, bounds.min_lat, bounds.max_lat), (0, 4, 0, 2))
        self.assertEqual(region_map.region_ids(), ["Region A", "Region B"])
        self.assertEqual(region_map.width, 100)

        x, y = region_map.find("Region A").rings[0][0]
        self.assertAlmostEqual(x, 10)
        self.assertAlmostEqual(y, region_map.height - 10)
        expected_start = f"M 10.00,{region_map.height - 10:.2f} "
        self.assertTrue(region_map.find("Region A").path_data.startswith(expected_start))
        self.assertTrue(region_map.find("Region B").path_data.endswith(" Z"))

    def test_view_box(self):
        region_map = region_map_from_geojson(triangles(), MapSettings(canvas_width=100, padding=10))
        self.assertEqual(region_map.view_box, f"0 0 100 {region_map.height}")

    def test_find_unknown_region(self):
        region_map = region_map_from_geojson(triangles())
        self.assertIsNone(region_map.find("Region Z"))

    def test_fallback_names(self):
        unnamed = {"type": "Feature",
                   "geometry": {"type": "Polygon", "coordinates": [[[1, 1], [3, 1], [3, 2], [1, 1]]]}}
        region_map = region_map_from_geojson(triangles(unnamed))
        self.assertEqual(region_map.region_ids()[2], "Region 3")

    def test_default_settings(self):
        region_map = region_map_from_geojson(triangles())
        self.assertEqual(region_map.width, 1200)
        self.assertEqual(region_map.params.padding, 20)

    def test_unsupported_feature_follows_settings(self):
        point = {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 1]}}
        with self.assertRaises(UnsupportedGeometry):
            region_map_from_geojson(triangles(point))
        with self.assertLogs("core.coordinate_manager", level="WARNING"):
            region_map = region_map_from_geojson(triangles(point), MapSettings(skip_unsupported=True))
        self.assertEqual(len(region_map.regions), 2)

    def test_degenerate_collection(self):
        data = {"type": "FeatureCollection", "features": [
            {"type": "Feature",
             "geometry": {"type": "Polygon", "coordinates": [[[5, 0], [5, 1], [5, 2], [5, 0]]]}},
        ]}
        with self.assertRaises(DegenerateExtent):
            build_region_map(CoordinateManager.from_geojson(data))


if __name__ == '__main__':
    unittest.main()
