from worldview.engine import TrackingEngine
from worldview.orbits import positions_at, CATALOG
from worldview.tui import (
    draw_map_frame, marker_for, parse_colours, screen_to_cell, status_line, telemetry_lines,
)


def test_screen_to_cell_corners():
    assert screen_to_cell(0, 0, rows=10, cols=20) == (0, 0)
    assert screen_to_cell(100, 100, rows=10, cols=20) == (9, 19)
    assert screen_to_cell(50, 50, rows=11, cols=21) == (5, 10)


def test_parse_colours():
    assert parse_colours("a [red]b[/red] c") == ["a ", ("red", "b"), " c"]


def test_heading_markers(make_flight):
    assert marker_for(make_flight(heading=0)) == "[green]↑[/green]"
    assert marker_for(make_flight(heading=90)) == "[green]→[/green]"
    assert marker_for(make_flight(heading=350)) == "[green]↑[/green]"
    assert marker_for(positions_at(CATALOG, 0)[0]) == "[cyan]*[/cyan]"


def test_map_frame_and_status(recording_pipeline):
    engine = TrackingEngine(pipeline=recording_pipeline, background=False)
    view = engine.view()
    assert "AWAITING SIGNAL" in status_line(view)

    engine.refresh()
    view = engine.view()
    frame = draw_map_frame(view, rows=5, cols=9)
    assert len(frame.splitlines()) == 5
    assert "[green]" in frame
    assert "PRIMARY" in status_line(view)
    assert "1 shown / 1 tracked" in status_line(view)

    engine.lock_nearest()
    view = engine.view()
    assert "[red]@[/red]" in draw_map_frame(view)
    assert "LOCK UAL123" in status_line(view)
    assert telemetry_lines(view.locked_entity)[1].startswith("FL361")


def test_telemetry_without_lock():
    assert "No lock" in telemetry_lines(None)[0]
