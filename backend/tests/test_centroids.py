"""
test_centroids.py — boundary centroids, static table and fallbacks.
"""

import pytest

import moodglobe.core.centroids as centroids
from moodglobe.core.centroids import CentroidResolver, feature_centroid, resolve_center
from moodglobe.core.countries import COUNTRY_CENTERS
from moodglobe.models import BoundaryFeature, Center, Submission


class TestFeatureCentroid:
    def test_square_returns_its_middle(self, square_feature):
        assert feature_centroid(square_feature) == Center(1.0, 1.0)

    def test_mean_spans_all_rings(self):
        feature = BoundaryFeature(
            name="Islands",
            codes=("IS",),
            rings=(((0.0, 0.0), (2.0, 0.0)), ((10.0, 4.0), (12.0, 4.0))),
        )
        center = feature_centroid(feature)
        assert center.lng == pytest.approx(6.0)
        assert center.lat == pytest.approx(2.0)

    def test_no_vertices(self):
        assert feature_centroid(BoundaryFeature(name="Empty", codes=("EM",))) is None


class TestResolveCenter:
    def test_boundary_match_is_case_insensitive(self, square_feature):
        assert resolve_center("sq", [square_feature]) == Center(1.0, 1.0)
        assert resolve_center("sqr", [square_feature]) == Center(1.0, 1.0)

    def test_boundary_wins_over_static_table(self):
        feature = BoundaryFeature(name="Fake US", codes=("US",), rings=(((10.0, 20.0),),))
        assert resolve_center("US", [feature]) == Center(20.0, 10.0)

    def test_static_table_when_no_boundary(self, square_feature):
        assert resolve_center("de", [square_feature]) == COUNTRY_CENTERS["DE"]

    def test_empty_boundary_falls_through_to_table(self):
        feature = BoundaryFeature(name="France", codes=("FR",))
        assert resolve_center("FR", [feature]) == COUNTRY_CENTERS["FR"]

    def test_submission_coordinates_on_miss(self):
        sub = Submission(country_code="XK", mood="😊", lat=42.6, lng=None)
        assert resolve_center("XK", [], sub) == Center(42.6, 0.0)

    def test_origin_when_nothing_known(self):
        assert resolve_center("XK", []) == Center(0.0, 0.0)


class TestCentroidResolverCache:
    def test_each_country_computed_once(self, square_feature, monkeypatch):
        calls = []
        original = centroids.feature_centroid

        def counting(feature):
            calls.append(feature.name)
            return original(feature)

        monkeypatch.setattr(centroids, "feature_centroid", counting)

        resolver = CentroidResolver([square_feature])
        first = resolver.resolve("SQ")
        second = resolver.resolve("sq")
        assert first == second
        assert calls == ["Squareland"]

    def test_miss_is_cached_with_first_submission(self):
        resolver = CentroidResolver()
        first = resolver.resolve("XK", Submission(country_code="XK", mood="😊", lat=1.0, lng=2.0))
        second = resolver.resolve("XK", Submission(country_code="XK", mood="😊", lat=9.0, lng=9.0))
        assert first == second == Center(1.0, 2.0)


class TestBoundaryFeatureFromGeojson:
    def test_polygon_with_iso_codes(self):
        feature = BoundaryFeature.from_geojson({
            "type": "Feature",
            "properties": {"ADMIN": "Squareland", "ISO_A2": "sq", "ISO_A3": "SQR"},
            "geometry": {"type": "Polygon", "coordinates": [[[0, 0], [2, 0], [2, 2], [0, 2]]]},
        })
        assert feature.name == "Squareland"
        assert feature.codes == ("SQ", "SQR")
        assert feature_centroid(feature) == Center(1.0, 1.0)

    def test_placeholder_code_is_skipped(self):
        feature = BoundaryFeature.from_geojson({
            "type": "Feature",
            "properties": {"ADMIN": "France", "ISO_A2": "-99", "ISO_A2_EH": "FR", "ISO_A3": "-99"},
            "geometry": {"type": "Polygon", "coordinates": [[[2, 46]]]},
        })
        assert feature.codes == ("FR",)
        assert resolve_center("fr", [feature]) == Center(46.0, 2.0)

    def test_multipolygon_and_feature_id(self):
        feature = BoundaryFeature.from_geojson({
            "type": "Feature",
            "id": "ISL",
            "properties": {"name": "Islands"},
            "geometry": {
                "type": "MultiPolygon",
                "coordinates": [[[[0, 0], [2, 0]]], [[[10, 4], [12, 4]]]],
            },
        })
        assert feature.codes == ("ISL",)
        assert len(feature.rings) == 2
        assert resolve_center("isl", [feature]) == Center(2.0, 6.0)

    def test_unsupported_geometry_has_no_rings(self):
        feature = BoundaryFeature.from_geojson({
            "properties": {"ISO_A2": "PT"},
            "geometry": {"type": "Point", "coordinates": [1, 2]},
        })
        assert feature.rings == ()

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            BoundaryFeature.from_geojson(["nope"])
