import numpy as np
import pytest

from coastfinder import Candidate, CoastlineFeature, count_intersections, edge_segments, view_extent
from coastfinder.candidates import view_size


def _candidate(config, center=(0.0, 0.0), zoom=5.0):
    return Candidate(center=center, zoom=zoom, rotation=0.0, view_extent=view_extent(center, zoom, config))


def _line(*points, feature_id=None):
    return CoastlineFeature(vertices=np.array(points, dtype=float), feature_id=feature_id)


def _flat(segment):
    (x0, y0), (x1, y1) = segment
    return x0, y0, x1, y1


def _inset_half_sizes(config, zoom=5.0):
    width, height = view_size(zoom, config)
    return width / 2 * (1 - config.inset_ratio), height / 2 * (1 - config.inset_ratio)


def test_edges_are_bottom_right_top_left_of_inset_frame(default_config):
    half_w, half_h = _inset_half_sizes(default_config)
    bottom, right, top, left = edge_segments((10.0, 20.0), 5.0, default_config)

    assert _flat(bottom) == pytest.approx((10 - half_w, 20 - half_h, 10 + half_w, 20 - half_h))
    assert _flat(right) == pytest.approx((10 + half_w, 20 - half_h, 10 + half_w, 20 + half_h))
    assert _flat(top) == pytest.approx((10 + half_w, 20 + half_h, 10 - half_w, 20 + half_h))
    assert _flat(left) == pytest.approx((10 - half_w, 20 + half_h, 10 - half_w, 20 - half_h))


def test_inset_frame_lies_inside_view_extent(default_config):
    candidate = _candidate(default_config)
    min_x, min_y, max_x, max_y = candidate.view_extent
    for start, end in edge_segments(candidate.center, candidate.zoom, default_config):
        for x, y in (start, end):
            assert min_x < x < max_x
            assert min_y < y < max_y


def test_line_through_frame_crosses_two_edges(default_config):
    features = [_line((0.0, -50.0), (0.0, 50.0))]
    assert count_intersections(_candidate(default_config), features, default_config) == 2


def test_repeated_crossings_of_one_edge_count_once(default_config):
    _, half_h = _inset_half_sizes(default_config)
    assert half_h < 15
    zigzag = _line((-6.0, -15.0), (-4.0, -5.0), (-2.0, -15.0), (0.0, -5.0))

    assert count_intersections(_candidate(default_config), [zigzag], default_config) == 1


def test_several_features_on_one_edge_count_once(default_config):
    features = [
        _line((-3.0, -20.0), (-3.0, 0.0)),
        _line((0.0, -20.0), (0.0, 0.0)),
        _line((3.0, -20.0), (3.0, 0.0)),
    ]
    assert count_intersections(_candidate(default_config), features, default_config) == 1


def test_corner_cut_crosses_two_edges(default_config):
    half_w, half_h = _inset_half_sizes(default_config)
    diagonal = _line((half_w - 5.0, -half_h - 1.0), (half_w + 1.0, -half_h + 5.0))
    assert count_intersections(_candidate(default_config), [diagonal], default_config) == 2


def test_coast_grazing_outer_border_is_not_counted(default_config):
    candidate = _candidate(default_config)
    _, _, _, max_y = candidate.view_extent
    _, half_h = _inset_half_sizes(default_config)
    y = (half_h + max_y) / 2
    assert half_h < y < max_y

    graze = _line((-5.0, y), (5.0, y))
    assert count_intersections(candidate, [graze], default_config) == 0


def test_feature_inside_frame_crosses_nothing(default_config):
    inner = _line((-1.0, -1.0), (1.0, 1.0), (2.0, -1.0))
    assert count_intersections(_candidate(default_config), [inner], default_config) == 0


def test_unusable_geometry_is_skipped(default_config):
    features = [
        CoastlineFeature.from_coordinates([[0, 0], [1]], feature_id="ragged"),
        _line((0.0, 0.0), (0.0, float("nan"))),
        _line((0.0, -50.0), (0.0, 50.0)),
    ]
    assert count_intersections(_candidate(default_config), features, default_config) == 2


def test_all_four_edges(default_config):
    features = [
        _line((0.0, -50.0), (0.0, 50.0)),
        _line((-50.0, 0.0), (50.0, 0.0)),
    ]
    assert count_intersections(_candidate(default_config), features, default_config) == 4


def test_no_features(default_config):
    assert count_intersections(_candidate(default_config), [], default_config) == 0


def test_single_vertex_feature_is_skipped(default_config):
    point = _line((0.0, 0.0), feature_id="point")
    assert np.isnan(point.bounds[0])
    assert not point.is_valid
    assert count_intersections(_candidate(default_config), [point], default_config) == 0
