"""
tests/test_view_transform.py

Fit-to-box and zoom math on ViewState values.
"""

from __future__ import annotations

import pytest

from preview.view_transform import Box, ViewState, fit_content, fit_to_box, zoom_about


class TestViewState:
    def test_round_trip(self):
        s = ViewState(2.0, 10.0, -5.0)
        assert s.to_screen(3, 4) == (16.0, 3.0)
        assert s.to_local(16, 3) == (3.0, 4.0)

    def test_box_to_local(self):
        s = ViewState(2.0, 10.0, 0.0)
        assert s.box_to_local(Box(30, 20, 40, 10)) == Box(10, 10, 20, 5)


class TestFitToBox:
    def test_noop_without_room(self):
        s = ViewState(1.5, 3.0, 4.0)
        box = Box(0, 0, 10, 10)
        assert fit_to_box(s, box, 80, 600, padding=40) is s
        assert fit_to_box(s, box, 600, 50, padding=40) is s
        assert fit_to_box(s, box, 0, 0) is s
        assert fit_to_box(s, box, -10, 300) is s

    def test_noop_for_empty_box(self):
        s = ViewState()
        assert fit_to_box(s, Box(5, 5, 0, 0), 800, 600) is s

    def test_scale_and_center(self):
        state = fit_to_box(ViewState(), Box(0, 0, 100, 50), 840, 480, padding=40)
        # Width: 760 / 100, height: 400 / 50 -> width limits
        assert state.scale == pytest.approx(7.6)
        assert state.to_screen(50, 25) == pytest.approx((420, 240))

    def test_scale_is_capped(self):
        state = fit_to_box(ViewState(), Box(10, 10, 1, 1), 800, 600)
        assert state.scale == 10
        assert state.to_screen(10.5, 10.5) == pytest.approx((400, 300))

    def test_custom_cap(self):
        state = fit_to_box(ViewState(), Box(0, 0, 1, 1), 800, 600, max_scale=4)
        assert state.scale == 4

    def test_screen_box_is_taken_back_to_local(self):
        current = ViewState(2.0, 100.0, 50.0)
        local = Box(10, 10, 20, 20)
        x, y = current.to_screen(local.x, local.y)
        screen = Box(x, y, local.width * 2, local.height * 2)
        state = fit_to_box(current, screen, 600, 600, padding=50)
        assert state.scale == pytest.approx(10)
        assert state.to_screen(*local.center) == pytest.approx((300, 300))

    def test_zero_width_line_uses_height_only(self):
        state = fit_to_box(ViewState(), Box(5, 0, 0, 100), 800, 600, padding=50)
        assert state.scale == pytest.approx(5)
        assert state.to_screen(5, 50) == pytest.approx((400, 300))

    def test_fit_content(self):
        state = fit_content(Box(0, 0, 400, 400), 880, 480, padding=40)
        assert state.scale == pytest.approx(1)
        assert state.to_screen(200, 200) == pytest.approx((440, 240))


class TestZoomAbout:
    def test_anchor_stays_fixed(self):
        s = ViewState(1.5, 20.0, -10.0)
        anchor = (300.0, 200.0)
        local = s.to_local(*anchor)
        z = zoom_about(s, 2.0, *anchor)
        assert z.scale == pytest.approx(3.0)
        assert z.to_screen(*local) == pytest.approx(anchor)

    def test_clamped(self):
        assert zoom_about(ViewState(60.0), 2.0, 0, 0).scale == 64.0
        assert zoom_about(ViewState(0.06), 0.5, 0, 0).scale == 0.05

    def test_noop_at_limit(self):
        s = ViewState(64.0, 1.0, 1.0)
        assert zoom_about(s, 2.0, 10, 10) is s
