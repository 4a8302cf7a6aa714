"""Tests for playing-time reports."""

import csv
import io

import pytest

from rotation_engine.models import TimeReport
from rotation_engine.services import build_time_report, pause, time_report_csv
from builders import T0, individual6_state


def test_report_includes_live_stints_and_fairness():
    state = individual6_state()

    report = build_time_report(state, T0 + 300_000)

    assert report.period_number == 1
    assert report.formation_type == "individual_6"
    assert [item.player_id for item in report.players] == ["e", "a", "b", "c", "d", "g"]

    players = {item.player_id: item for item in report.players}
    assert players["a"].time_on_field_seconds == 300
    assert players["a"].time_as_defender_seconds == 300
    assert players["a"].active_stint_seconds == 300
    assert players["a"].delta_seconds == 60
    assert players["a"].fairness == "ok"
    assert players["e"].time_as_substitute_seconds == 300
    assert players["e"].delta_seconds == -240
    assert players["e"].fairness == "under"
    assert players["g"].time_as_goalie_seconds == 300
    assert players["g"].fairness == "n/a"

    assert report.average_field_seconds == pytest.approx(240)
    assert report.median_field_seconds == 300
    assert report.min_field_seconds == 0
    assert report.max_field_seconds == 300
    assert report.fairness_counts == {"under": 1, "ok": 4, "over": 0}


def test_report_does_not_change_state():
    state = individual6_state()

    build_time_report(state, T0 + 300_000)

    assert state.player("a").stats.time_on_field_seconds == 0
    assert state.player("a").stats.stint_start_ms == T0


def test_paused_report_stops_at_pause():
    state = pause(individual6_state(), T0 + 60_000)

    report = build_time_report(state, T0 + 600_000)
    players = {item.player_id: item for item in report.players}

    assert report.is_paused
    assert players["a"].time_on_field_seconds == 60
    assert players["a"].active_stint_seconds == 0


def test_csv_export_lists_every_player():
    report = build_time_report(individual6_state(), T0 + 120_000)

    rows = list(csv.reader(io.StringIO(time_report_csv(report))))

    assert rows[0] == ["Sideline Rotation Engine Report"]
    header_index = rows.index([]) + 1
    assert rows[header_index][0] == "Id"
    body = rows[header_index + 1:]
    assert {row[0] for row in body} == {"a", "b", "c", "d", "e", "g"}
    by_id = {row[0]: row for row in body}
    assert by_id["a"][7] == "120"


def test_csv_export_requires_players():
    empty = TimeReport(generated_ms=T0, period_number=1, formation_type="pairs_7", is_paused=False)

    with pytest.raises(ValueError):
        time_report_csv(empty)
