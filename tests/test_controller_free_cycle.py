from takuzu_master import engine
from takuzu_master.game_controller import GameController, click_cell, new_session
from takuzu_master.hints import StaticHintProvider
from takuzu_master.types import ClickPolicy, Effect, GamePhase, Session, TileValue


def make_controller(**kwargs) -> GameController:
    return GameController(hint_provider=StaticHintProvider("ok"), quiet=True, **kwargs)


def test_click_cycles_through_all_values():
    ctrl = make_controller()
    seen = []
    for _ in range(4):
        ctrl.handle_cell_click(1, 1)
        seen.append(ctrl.grid[1][1].value)
    assert seen == [TileValue.WHITE, TileValue.BLACK, TileValue.EMPTY, TileValue.WHITE]


def test_free_cycle_places_illegal_values():
    session = Session(grid=engine.grid_from_rows(["WW....", "......", "......", "......", "......", "......"]), phase=GamePhase.PLAYING)
    result = click_cell(session, 0, 2, ClickPolicy.FREE_CYCLE)
    assert result.session.grid[0][2].value is TileValue.WHITE
    assert not result.rejected
    assert Effect.VIOLATION_ALARM not in result.effects


def test_fixed_cells_locked_only_during_play():
    ctrl = make_controller()
    ctrl.load_preset("EASY")
    assert ctrl.grid[0][0].is_fixed
    ctrl.handle_cell_click(0, 0)
    assert ctrl.grid[0][0].value is TileValue.BLACK

    ctrl.load_preset("EASY")
    ctrl.start_game()
    assert ctrl.phase is GamePhase.PLAYING
    before = ctrl.grid
    ctrl.handle_cell_click(0, 0)
    assert ctrl.grid is before


def test_clicks_ignored_after_win():
    session = Session(grid=engine.create_empty_grid(), phase=GamePhase.WON)
    result = click_cell(session, 0, 0)
    assert result.session is session
    assert result.effects == ()


def test_click_keeps_previous_snapshot_intact():
    session = new_session()
    result = click_cell(session, 3, 3)
    assert session.grid[3][3].value is TileValue.EMPTY
    assert result.session.grid[3][3].value is TileValue.WHITE


def test_click_clears_hint_and_notifies_listeners():
    ctrl = make_controller()
    events = []
    ctrl.add_listener(lambda effect, session: events.append(effect))
    ctrl.last_hint = "old"
    ctrl.handle_cell_click(0, 0)
    assert ctrl.last_hint is None
    assert events == [Effect.HINT_CLEARED]
