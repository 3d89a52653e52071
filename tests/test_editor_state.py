"""Tests for EditorState - validation, selection rules and notifications."""

import pytest
from PySide6.QtGui import QColor, QImage

from tilesmith.core.editor_state import (
    MAX_DIMENSION,
    EditorState,
    MapDimensions,
    SelectedTile,
    TileSize,
    parse_dimension,
)
from tilesmith.core.image_loader import DecodedImage


def _decoded(width: int, height: int) -> DecodedImage:
    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(QColor("#00ff00"))
    return DecodedImage(image=image, width=width, height=height, source="test.png")


class _ChangeCounter:
    def __init__(self, state: EditorState):
        self.count = 0
        state.changed.connect(self._on_changed)

    def _on_changed(self):
        self.count += 1


class TestParseDimension:
    """Test raw input parsing."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (32, 32),
            ("32", 32),
            ("  48", 48),
            ("12px", 12),
            ("3.7", 3),
            ("+5", 5),
            (7.9, 7),
        ],
    )
    def test_accepts_positive(self, raw, expected):
        """Test positive input is read by its leading integer."""
        assert parse_dimension(raw) == expected

    @pytest.mark.parametrize(
        "raw", ["-5", "0", "", "abc", "px12", 0, -1, None, True, float("nan"), float("inf")]
    )
    def test_rejects_invalid(self, raw):
        """Test non-numeric and non-positive input is rejected."""
        assert parse_dimension(raw) is None

    @pytest.mark.parametrize("raw", ["32768", "3000000000", 2**31, 10**20])
    def test_rejects_oversized(self, raw):
        """Test values past the largest surface extent are rejected."""
        assert parse_dimension(raw) is None

    def test_accepts_largest(self):
        """Test the largest extent itself is accepted."""
        assert parse_dimension(str(MAX_DIMENSION)) == MAX_DIMENSION


class TestDefaults:
    """Test initial state."""

    def test_defaults(self, state: EditorState):
        """Test startup values."""
        assert state.tile_size == TileSize(32, 32)
        assert state.map_dimensions == MapDimensions(320, 320)
        assert state.show_grid is False
        assert state.selected_tile is None
        assert state.tile_sheet is None
        assert state.tile_sheet_surface is None
        assert state.tile_map_surface is None


class TestTileSize:
    """Test tile size setters."""

    def test_set_tile_width(self, state: EditorState):
        """Test valid width is applied."""
        assert state.set_tile_width("16")
        assert state.tile_size == TileSize(16, 32)

    def test_set_tile_height(self, state: EditorState):
        """Test valid height is applied."""
        assert state.set_tile_height(8)
        assert state.tile_size == TileSize(32, 8)

    def test_negative_width_rejected(self, state: EditorState):
        """Test typing -5 leaves the width at 32 and notifies nobody."""
        counter = _ChangeCounter(state)
        assert not state.set_tile_width("-5")
        assert state.tile_width == 32
        assert counter.count == 0

    @pytest.mark.parametrize("raw", ["0", "abc", "", -3])
    def test_invalid_input_is_idempotent(self, state: EditorState, raw):
        """Test rejected input leaves tile size unchanged, repeatedly."""
        state.set_tile_size(24, 40)
        for _ in range(2):
            assert not state.set_tile_width(raw)
            assert not state.set_tile_height(raw)
            assert state.tile_size == TileSize(24, 40)

    def test_width_change_clears_selection(self, state: EditorState):
        """Test changing width clears the selection."""
        state.select_tile_at(45, 70)
        assert state.selected_tile is not None
        state.set_tile_width(16)
        assert state.selected_tile is None

    def test_height_change_clears_selection(self, state: EditorState):
        """Test changing height clears the selection."""
        state.select_tile_at(45, 70)
        state.set_tile_height(16)
        assert state.selected_tile is None

    def test_same_value_still_clears_selection(self, state: EditorState):
        """Test re-entering the current width still clears the selection."""
        state.select_tile_at(45, 70)
        state.set_tile_width(32)
        assert state.selected_tile is None

    def test_rejected_change_keeps_selection(self, state: EditorState):
        """Test rejected input does not clear the selection."""
        state.select_tile_at(45, 70)
        state.set_tile_width("-5")
        assert state.selected_tile == SelectedTile(32, 64)

    def test_set_tile_size_requires_both(self, state: EditorState):
        """Test set_tile_size rejects if either extent is invalid."""
        assert not state.set_tile_size(16, 0)
        assert state.tile_size == TileSize(32, 32)
        assert state.set_tile_size(16, 24)
        assert state.tile_size == TileSize(16, 24)

    def test_single_notification(self, state: EditorState):
        """Test a tile size change notifies exactly once."""
        state.select_tile_at(1, 1)
        counter = _ChangeCounter(state)
        state.set_tile_width(64)
        assert counter.count == 1


class TestMapDimensions:
    """Test map dimension setters."""

    def test_set_map_size(self, state: EditorState):
        """Test valid map dimensions are applied."""
        assert state.set_map_width("640")
        assert state.set_map_height(480)
        assert state.map_dimensions == MapDimensions(640, 480)

    def test_invalid_map_size_rejected(self, state: EditorState):
        """Test invalid input keeps the previous value."""
        counter = _ChangeCounter(state)
        assert not state.set_map_width("0")
        assert not state.set_map_height("nope")
        assert state.map_dimensions == MapDimensions(320, 320)
        assert counter.count == 0

    def test_map_change_keeps_selection(self, state: EditorState):
        """Test map changes never clear the selection."""
        state.select_tile_at(45, 70)
        state.set_map_width(100)
        state.set_show_grid(True)
        assert state.selected_tile == SelectedTile(32, 64)

    def test_map_change_resizes_surface(self, wired_state: EditorState, map_surface):
        """Test the map surface follows the map dimensions."""
        wired_state.set_map_width(200)
        wired_state.set_map_height(150)
        assert map_surface.size() == (200, 150)

    def test_attaching_map_surface_sizes_it(self, state: EditorState, map_surface):
        """Test the map surface is sized to the map on attach."""
        state.set_map_width(64)
        state.set_tile_map_surface(map_surface)
        assert map_surface.size() == (64, 320)


class TestSelection:
    """Test tile selection."""

    def test_select_tile_at(self, state: EditorState):
        """Test click offset snaps to the tile origin."""
        tile = state.select_tile_at(45, 70)
        assert tile == SelectedTile(32, 64)
        assert state.selected_tile == SelectedTile(32, 64)

    def test_select_uses_current_tile_size(self, state: EditorState):
        """Test snapping uses the current tile size."""
        state.set_tile_size(10, 20)
        assert state.select_tile_at(45, 70) == SelectedTile(40, 60)

    def test_select_beyond_image(self, wired_state: EditorState):
        """Test selections past the surface are kept unclipped."""
        assert wired_state.select_tile_at(5000, 5000) == SelectedTile(4992, 4992)

    def test_clear_selection(self, state: EditorState):
        """Test clearing the selection."""
        state.select_tile_at(45, 70)
        state.clear_selection()
        assert state.selected_tile is None


class TestNotifications:
    """Test that every applied mutation notifies."""

    def test_unconditional_setters_notify(self, state: EditorState, sheet_surface, map_surface):
        """Test each unconditional setter emits once."""
        counter = _ChangeCounter(state)
        state.set_show_grid(True)
        state.set_show_grid(True)
        state.set_selected_tile(SelectedTile(0, 0))
        state.clear_selection()
        state.set_tile_sheet_surface(sheet_surface)
        state.set_tile_map_surface(map_surface)
        assert counter.count == 6


class TestLoadTileSheet:
    """Test adopting a decoded tile sheet."""

    def test_resizes_sheet_surface(self, wired_state: EditorState, sheet_surface):
        """Test the sheet surface takes the image's natural size."""
        assert wired_state.load_tile_sheet(_decoded(96, 64))
        assert sheet_surface.size() == (96, 64)
        assert wired_state.tile_sheet.width == 96

    def test_map_untouched(self, wired_state: EditorState, map_surface):
        """Test loading an image leaves the map dimensions alone."""
        wired_state.set_map_width(200)
        wired_state.load_tile_sheet(_decoded(500, 400))
        assert wired_state.map_dimensions == MapDimensions(200, 320)
        assert map_surface.size() == (200, 320)

    def test_keeps_selection(self, wired_state: EditorState):
        """Test loading an image does not touch the selection."""
        wired_state.select_tile_at(45, 70)
        wired_state.load_tile_sheet(_decoded(64, 64))
        assert wired_state.selected_tile == SelectedTile(32, 64)

    def test_last_loaded_wins(self, wired_state: EditorState, sheet_surface):
        """Test a later image replaces an earlier one."""
        wired_state.load_tile_sheet(_decoded(64, 64))
        wired_state.load_tile_sheet(_decoded(128, 32))
        assert wired_state.tile_sheet.width == 128
        assert sheet_surface.size() == (128, 32)

    def test_without_surface(self, state: EditorState):
        """Test the image is dropped when no sheet surface exists."""
        counter = _ChangeCounter(state)
        assert not state.load_tile_sheet(_decoded(64, 64))
        assert state.tile_sheet is None
        assert counter.count == 0


class TestOversizedInput:
    """Test dimensions Qt cannot hold are rejected without side effects."""

    def test_huge_map_width_rejected(self, wired_state: EditorState, map_surface):
        """Test a 3000000000px map width is a no-op."""
        counter = _ChangeCounter(wired_state)
        assert not wired_state.set_map_width("3000000000")
        assert wired_state.map_dimensions == MapDimensions(320, 320)
        assert map_surface.size() == (320, 320)
        assert counter.count == 0

    def test_huge_map_height_rejected(self, wired_state: EditorState, map_surface):
        """Test an oversized map height is a no-op."""
        assert not wired_state.set_map_height(MAX_DIMENSION + 1)
        assert wired_state.map_dimensions == MapDimensions(320, 320)
        assert map_surface.size() == (320, 320)

    def test_huge_tile_size_rejected(self, wired_state: EditorState):
        """Test oversized tile extents keep the tile size and selection."""
        wired_state.select_tile_at(45, 70)
        assert not wired_state.set_tile_width("3000000000")
        assert not wired_state.set_tile_height(2**40)
        assert wired_state.tile_size == TileSize(32, 32)
        assert wired_state.selected_tile == SelectedTile(32, 64)
