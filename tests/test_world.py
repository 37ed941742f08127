"""Tests for growfield.world.world and growfield.world.cell."""

import pytest

from growfield.plants.growth import PlantFactory
from growfield.world.cell import Cell, TileKind
from growfield.world.world import World


class TestCell:
    """Tests for the Cell dataclass."""

    def test_default_values(self) -> None:
        cell = Cell(x=0, y=0)
        assert cell.kind is TileKind.FIELD
        assert cell.plant is None
        assert cell.is_empty_field
        assert not cell.has_ripe_plant

    def test_station_is_never_empty_field(self) -> None:
        cell = Cell(x=0, y=0, kind=TileKind.SEEDER_REST)
        assert not cell.is_empty_field

    def test_ripe_plant(self, fixed_factory: PlantFactory) -> None:
        cell = Cell(x=1, y=1, plant=fixed_factory())
        assert not cell.has_ripe_plant
        cell.plant.stage = 2
        assert cell.has_ripe_plant
        assert not cell.is_empty_field


class TestWorld:
    """Tests for the World grid."""

    def test_dimensions(self, small_world: World) -> None:
        assert small_world.width == 8
        assert small_world.height == 8
        assert len(small_world.cells) == 8
        assert len(small_world.cells[0]) == 8

    def test_cell_at_valid(self, small_world: World) -> None:
        cell = small_world.cell_at(3, 5)
        assert cell.x == 3
        assert cell.y == 5

    def test_cell_at_out_of_bounds(self, small_world: World) -> None:
        with pytest.raises(IndexError):
            small_world.cell_at(8, 0)

    def test_get_out_of_bounds_returns_none(self, small_world: World) -> None:
        assert small_world.get(-1, 0) is None
        assert small_world.get(2, 2) is small_world.cells[2][2]

    def test_stations_marked(self, small_world: World) -> None:
        assert small_world.cell_at(0, 0).kind is TileKind.SEEDER_REST
        assert small_world.cell_at(7, 7).kind is TileKind.STORAGE
        kinds = [c.kind for c in small_world.iter_cells()]
        assert kinds.count(TileKind.SEEDER_REST) == 1
        assert kinds.count(TileKind.STORAGE) == 1

    def test_station_out_of_bounds_rejected(self) -> None:
        with pytest.raises(IndexError):
            World(width=4, height=4, seeder_rest=(4, 0), storage=(1, 1))

    def test_shared_station_cell_rejected(self) -> None:
        with pytest.raises(ValueError, match="distinct"):
            World(width=4, height=4, seeder_rest=(1, 1), storage=(1, 1))

    def test_iter_cells_row_major(self, small_world: World) -> None:
        coords = [(c.x, c.y) for c in small_world.iter_cells()]
        assert len(coords) == 64
        assert coords[:3] == [(0, 0), (1, 0), (2, 0)]
        assert coords[8] == (0, 1)

    def test_neighbours_corner(self, small_world: World) -> None:
        assert len(small_world.neighbours(0, 0)) == 2

    def test_neighbours_cardinal_order(self, small_world: World) -> None:
        coords = [(c.x, c.y) for c in small_world.neighbours(3, 3)]
        assert coords == [(4, 3), (2, 3), (3, 4), (3, 2)]

    def test_neighbours_with_diagonals(self) -> None:
        world = World(
            width=8,
            height=8,
            seeder_rest=(0, 0),
            storage=(7, 7),
            allow_diagonals=True,
        )
        assert len(world.neighbours(3, 3)) == 8
        assert len(world.neighbours(0, 0)) == 3


class TestNearestCell:
    """Tests for breadth-first nearest-cell search."""

    def test_origin_matches_itself(self, small_world: World) -> None:
        origin = small_world.cell_at(3, 3)
        assert small_world.nearest_cell(origin, lambda c: c.is_empty_field) is origin

    def test_none_when_nothing_matches(self, small_world: World) -> None:
        origin = small_world.cell_at(3, 3)
        assert small_world.nearest_cell(origin, lambda c: False) is None

    def test_finds_station(self, small_world: World) -> None:
        origin = small_world.cell_at(1, 1)
        found = small_world.nearest_cell(
            origin,
            lambda c: c.kind is TileKind.STORAGE,
        )
        assert (found.x, found.y) == (7, 7)

    def test_tie_break_follows_neighbour_order(self, small_world: World) -> None:
        # All four cardinal neighbours match; +x is enumerated first.
        origin = small_world.cell_at(3, 3)
        found = small_world.nearest_cell(origin, lambda c: c is not origin)
        assert (found.x, found.y) == (4, 3)

    def test_prefers_closer_cell(self, small_world: World) -> None:
        origin = small_world.cell_at(3, 3)
        targets = {(3, 6), (3, 1)}
        found = small_world.nearest_cell(origin, lambda c: (c.x, c.y) in targets)
        assert (found.x, found.y) == (3, 1)

    def test_diagonal_shortens_distance(self) -> None:
        world = World(
            width=8,
            height=8,
            seeder_rest=(0, 0),
            storage=(7, 7),
            allow_diagonals=True,
        )
        origin = world.cell_at(3, 3)
        targets = {(5, 5), (3, 6)}
        found = world.nearest_cell(origin, lambda c: (c.x, c.y) in targets)
        assert (found.x, found.y) == (5, 5)

    def test_deterministic_across_calls(self, small_world: World) -> None:
        origin = small_world.cell_at(2, 5)

        def pred(c: Cell) -> bool:
            return c.x == 6

        first = small_world.nearest_cell(origin, pred)
        for _ in range(5):
            assert small_world.nearest_cell(origin, pred) is first

    def test_visits_each_cell_once(self, small_world: World) -> None:
        seen: list[tuple[int, int]] = []

        def pred(c: Cell) -> bool:
            seen.append((c.x, c.y))
            return False

        small_world.nearest_cell(small_world.cell_at(4, 4), pred)
        assert len(seen) == 64
        assert len(set(seen)) == 64
