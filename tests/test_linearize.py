# -*- coding: utf-8 -*-
"""Tests for the linearization engine."""

import pytest

from cave_converter.enums import Severity
from cave_converter.errors import DiagnosticLog
from cave_converter.errors import LinearizationError
from cave_converter.errors import MalformedStationReference
from cave_converter.processing.linearize import is_linearized
from cave_converter.processing.linearize import is_simple_chain
from cave_converter.processing.linearize import linearize
from cave_converter.survey.models import Series
from cave_converter.survey.models import Station
from cave_converter.survey.models import ToStationLRUD

from tests.conftest import build_leg
from tests.conftest import build_series
from tests.conftest import build_splay


def station_path(series: Series) -> list[str]:
    """Station names visited by the regular legs of a chain."""
    legs = [leg for leg in series.legs if not leg.splay]
    return [leg.from_station.name for leg in legs] + [legs[-1].to_station.name]


class TestIsSimpleChain:
    """Tests for chain detection."""

    def test_straight(self):
        """Test a straight run of legs."""
        assert is_simple_chain(build_series("s", [(1, 2), (2, 3), (3, 4)]))

    def test_ring(self):
        """Test a closed loop is still a chain."""
        assert is_simple_chain(build_series("s", [(1, 2), (2, 3), (3, 1)]))

    def test_gap(self):
        """Test legs that do not follow on."""
        assert not is_simple_chain(build_series("s", [(1, 2), (3, 4)]))

    def test_revisit(self):
        """Test a station visited twice in the middle."""
        assert not is_simple_chain(build_series("s", [(1, 2), (2, 3), (3, 2), (2, 4)]))

    def test_splays_ignored(self):
        """Test splays do not break a chain."""
        series = build_series("s", [(1, 2), (2, 3)])
        series.insert_leg(1, build_splay(2, 1.0, 90.0, 0.0))
        assert is_simple_chain(series)

    def test_empty(self):
        """Test an empty series is trivially a chain."""
        assert is_simple_chain(Series(name="s"))


class TestLinearize:
    """Tests for linearize()."""

    def test_figure_of_eight(self, figure_of_eight):
        """Test two loops sharing a station become two linked rings."""
        result = linearize(figure_of_eight)

        assert result.name == "fig8"
        assert result.legs == []
        assert result.inner_series_count() == 2
        first, second = result.inner_series
        assert first.name == "1-fig8-2"
        assert second.name == "2-fig8-5"
        assert station_path(first) == ["1", "2", "3", "4", "1"]
        assert station_path(second) == ["1", "5", "6", "7", "1"]

        assert len(result.links) == 1
        link = result.links[0]
        assert link.series1 == "1-fig8-2"
        assert link.series2 == "2-fig8-5"
        assert link.station1.name == "1"
        assert link.station2.name == "1"

    def test_t_shape(self, t_shape):
        """Test a branch becomes a second chain linked at the junction."""
        result = linearize(t_shape)

        assert [s.name for s in result.inner_series] == ["1-tee-2", "2-tee-6"]
        assert station_path(result.inner_series[0]) == ["1", "2", "3", "4", "5"]
        assert station_path(result.inner_series[1]) == ["3", "6", "7"]
        assert len(result.links) == 1
        link = result.links[0]
        assert link.series1 == "2-tee-6"
        assert link.series2 == "1-tee-2"
        assert link.station1.name == "3"

    def test_t_shape_scrambled(self, t_shape_scrambled):
        """Test legs out of order are still joined into chains."""
        result = linearize(t_shape_scrambled)

        assert result.inner_series_count() == 2
        assert station_path(result.inner_series[0]) == ["1", "2", "3", "6", "7"]
        assert station_path(result.inner_series[1]) == ["3", "4", "5"]
        assert len(result.links) == 1
        assert result.links[0].station1.name == "3"

    def test_every_chain_is_simple(self, figure_of_eight, t_shape_scrambled):
        """Test the output is accepted as linearized."""
        for series in (figure_of_eight, t_shape_scrambled):
            result = linearize(series)
            assert is_linearized(result)
            for inner in result.inner_series:
                assert is_simple_chain(inner)

    def test_legs_conserved(self, t_shape_scrambled):
        """Test every leg appears exactly once."""
        result = linearize(t_shape_scrambled)
        pairs = sorted(
            (leg.from_station.name, leg.to_station.name)
            for inner in result.inner_series
            for leg in inner.legs
        )
        original = sorted(
            (leg.from_station.name, leg.to_station.name)
            for leg in t_shape_scrambled.legs
        )
        assert pairs == original

    def test_input_untouched(self, t_shape):
        """Test the input keeps its legs and the output holds copies."""
        result = linearize(t_shape)
        assert t_shape.leg_count() == 6
        assert t_shape.inner_series_count() == 0
        assert result.inner_series[0].legs[0] is not t_shape.legs[0]

    def test_legs_not_reversed(self, make_leg):
        """Test legs surveyed backwards keep their direction."""
        series = Series(name="s")
        series.add_leg(make_leg(1, 2, compass=10.0))
        series.add_leg(make_leg(3, 2, compass=200.0))
        result = linearize(series)
        legs = [leg for inner in result.inner_series for leg in inner.legs]
        backwards = next(leg for leg in legs if leg.from_station.name == "3")
        assert backwards.to_station.name == "2"
        assert backwards.compass == pytest.approx(200.0)

    def test_idempotent(self, figure_of_eight):
        """Test linearized output is returned unchanged."""
        result = linearize(figure_of_eight)
        assert linearize(result) is result

    def test_empty(self):
        """Test an empty series is returned unchanged."""
        series = Series(name="empty")
        assert linearize(series) is series

    def test_ring(self):
        """Test a single loop is one closed chain with no links."""
        result = linearize(build_series("loop", [(1, 2), (2, 3), (3, 1)]))
        assert result.inner_series_count() == 1
        assert station_path(result.inner_series[0]) == ["1", "2", "3", "1"]
        assert result.links == []

    def test_chain_name_from_station_path(self):
        """Test chain names use the series part of dotted station names."""
        series = Series(name="s")
        series.add_leg(build_leg(1, "upper.2"))
        series.add_leg(build_leg(1, 3))
        result = linearize(series)
        assert result.inner_series[0].name == "1-upper"

    def test_disconnected_sections(self):
        """Test separate sections become unlinked chains with a warning."""
        series = build_series("split", [(1, 2), (2, 3), (10, 11)])
        log = DiagnosticLog()
        result = linearize(series, diagnostics=log)
        assert result.inner_series_count() == 2
        assert result.links == []
        assert len(log.warnings) == 1
        assert log.warnings[0].severity == Severity.WARNING
        assert "2 unconnected sections" in log.warnings[0].message

    def test_lasso_links_follow_input_order(self):
        """Test a loop hanging off a line is linked according to leg order."""
        in_order = linearize(build_series("lasso", [(1, 2), (2, 3), (3, 4), (4, 2)]))
        assert [station_path(s) for s in in_order.inner_series] == [
            ["1", "2", "3", "4"],
            ["4", "2"],
        ]
        assert sorted(link.station1.name for link in in_order.links) == ["2", "4"]

        loop_first = linearize(build_series("lasso", [(4, 2), (1, 2), (2, 3), (3, 4)]))
        assert [station_path(s) for s in loop_first.inner_series] == [
            ["4", "2", "3", "4"],
            ["1", "2"],
        ]
        assert [link.station1.name for link in loop_first.links] == ["2"]

    def test_splays_follow_station(self):
        """Test splays are placed before the next leg from their station."""
        series = build_series("s", [(1, 2), (2, 3), (2, 4)])
        series.add_leg(build_splay(2, 1.5, 90.0, 0.0))
        series.add_leg(build_splay(3, 0.5, 270.0, 0.0))
        result = linearize(series)
        legs = result.inner_series[0].legs
        assert [str(leg) for leg in legs] == ["1 - 2", "2", "2 - 3", "3"]
        assert legs[1].splay
        assert legs[3].splay

    def test_unconnected_splay(self):
        """Test a splay from a station with no legs is rejected."""
        series = build_series("s", [(1, 2)])
        series.add_leg(build_splay(99, 1.0, 0.0, 0.0))
        with pytest.raises(MalformedStationReference):
            linearize(series)

    def test_leg_without_to_station(self, make_leg):
        """Test a regular leg must have a to-station."""
        series = build_series("s", [(1, 2)])
        leg = make_leg(2, 3)
        leg.to_station = None
        series.add_leg(leg)
        with pytest.raises(MalformedStationReference):
            linearize(series)

    def test_nested_input(self):
        """Test nested series that are not chains are rejected."""
        parent = Series(name="parent")
        parent.add_series(build_series("tee", [(1, 2), (2, 3), (2, 4)]))
        with pytest.raises(LinearizationError):
            linearize(parent)

    def test_mixed_input(self):
        """Test a series with both legs and inner series is rejected."""
        parent = build_series("parent", [(1, 2)])
        parent.add_series(build_series("chain", [(5, 6)]))
        with pytest.raises(LinearizationError):
            linearize(parent)

    def test_calibration_and_lruds_carried(self, t_shape):
        """Test calibration is copied and station LRUDs go to their chain."""
        t_shape.declination = 2.5
        t_shape.to_station_lruds.append(ToStationLRUD(station=Station(name="7"), left=1.0))
        result = linearize(t_shape)
        assert result.declination == pytest.approx(2.5)
        assert all(inner.declination == pytest.approx(2.5) for inner in result.inner_series)
        assert result.inner_series[0].to_station_lruds == []
        assert result.inner_series[1].to_station_lruds[0].left == pytest.approx(1.0)


class TestOpenChainPassThrough:
    """Tests for leaf series that already run as one line."""

    def test_forward_chain_unchanged(self):
        """Test a straight forward survey is returned as is."""
        series = build_series("line", [(1, 2), (2, 3), (3, 4)])
        series.add_leg(build_splay(2, 1.0, 90.0, 0.0))
        result = linearize(series)
        assert result is series
        assert result.inner_series_count() == 0
        assert result.leg_count() == 4

    def test_single_leg_unchanged(self):
        """Test a one-leg series needs no wrapping."""
        series = build_series("one", [(1, 2)])
        assert linearize(series) is series

    def test_backward_legs_not_a_chain(self, make_leg):
        """Test legs that do not follow on are still split into chains."""
        series = Series(name="s")
        series.add_leg(make_leg(2, 1))
        series.add_leg(make_leg(3, 2))
        result = linearize(series)
        assert result is not series
        assert is_linearized(result)

    def test_ring_still_wrapped(self):
        """Test a closed loop is wrapped rather than passed through."""
        series = build_series("loop", [(1, 2), (2, 3), (3, 1)])
        result = linearize(series)
        assert result is not series
        assert result.inner_series_count() == 1

    def test_stray_splay_on_chain(self):
        """Test a splay away from the line is rejected before pass-through."""
        series = build_series("line", [(1, 2), (2, 3)])
        series.add_leg(build_splay(7, 1.0, 0.0, 0.0))
        with pytest.raises(MalformedStationReference):
            linearize(series)
