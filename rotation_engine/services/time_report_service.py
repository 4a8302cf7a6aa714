"""Playing-time reports for the Sideline Rotation Engine."""

from __future__ import annotations

import csv
import io
import statistics
from collections import Counter
from typing import List

from ..models import GameState, PlayerStatus, PlayerTimeBreakdown, TimeReport
from ..utils.constants import APP_TITLE, FAIRNESS_THRESHOLD_SECONDS
from .time_accounting import accrue, current_stint_seconds

FAIRNESS_ORDER = {"under": 0, "ok": 1, "over": 2}


def _classify_fairness(delta_seconds: int) -> str:
    if delta_seconds <= -FAIRNESS_THRESHOLD_SECONDS:
        return "under"
    if delta_seconds >= FAIRNESS_THRESHOLD_SECONDS:
        return "over"
    return "ok"


def build_time_report(state: GameState, now_ms: int) -> TimeReport:
    """
    Build a :class:`TimeReport` snapshot for the current period.

    The running stint of every player is included as if it were credited at
    ``now_ms``; the state itself is not changed. Fairness compares each
    active outfield player's field seconds with the average over those
    players; the goalie and inactive players are reported as ``"n/a"``.
    """
    breakdowns: List[PlayerTimeBreakdown] = []
    for player in state.players:
        stint_seconds = 0 if state.is_paused else current_stint_seconds(player, now_ms)
        live = accrue(player, now_ms, state.is_paused).stats
        breakdowns.append(
            PlayerTimeBreakdown(
                player_id=player.id,
                name=player.name,
                number=player.number,
                role=live.role.value,
                status=live.status.value,
                slot=live.slot,
                is_inactive=live.is_inactive,
                time_on_field_seconds=live.time_on_field_seconds,
                time_as_defender_seconds=live.time_as_defender_seconds,
                time_as_midfielder_seconds=live.time_as_midfielder_seconds,
                time_as_attacker_seconds=live.time_as_attacker_seconds,
                time_as_goalie_seconds=live.time_as_goalie_seconds,
                time_as_substitute_seconds=live.time_as_substitute_seconds,
                active_stint_seconds=stint_seconds,
            )
        )

    rotating = [
        item for item in breakdowns
        if item.status != PlayerStatus.GOALIE.value and not item.is_inactive
    ]
    rotating_ids = {item.player_id for item in rotating}
    totals = [item.time_on_field_seconds for item in rotating]
    average_seconds = statistics.mean(totals) if totals else 0.0

    for item in breakdowns:
        if item.player_id in rotating_ids:
            item.delta_seconds = int(round(item.time_on_field_seconds - average_seconds))
            item.fairness = _classify_fairness(item.delta_seconds)
        else:
            item.fairness = "n/a"

    breakdowns.sort(
        key=lambda item: (
            FAIRNESS_ORDER.get(item.fairness, 3),
            item.delta_seconds,
            item.name,
        )
    )
    fairness_counter = Counter(item.fairness for item in rotating)

    return TimeReport(
        generated_ms=now_ms,
        period_number=state.period_number,
        formation_type=state.formation_type.value,
        is_paused=state.is_paused,
        players=breakdowns,
        average_field_seconds=average_seconds,
        median_field_seconds=statistics.median(totals) if totals else 0.0,
        min_field_seconds=min(totals) if totals else 0,
        max_field_seconds=max(totals) if totals else 0,
        fairness_counts={
            "under": fairness_counter.get("under", 0),
            "ok": fairness_counter.get("ok", 0),
            "over": fairness_counter.get("over", 0),
        },
    )


def time_report_csv(report: TimeReport) -> str:
    """
    Return a CSV document describing a playing time report.

    Raises:
        ValueError: If the report has no players.
    """
    if not report.players:
        raise ValueError("Cannot export a report without any players")

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow([f"{APP_TITLE} Report"])
    writer.writerow(["Period", report.period_number])
    writer.writerow(["Formation", report.formation_type])
    writer.writerow(["Average Field Seconds", round(report.average_field_seconds, 2)])
    writer.writerow(["Median Field Seconds", round(report.median_field_seconds, 2)])
    writer.writerow(["Minimum Field Seconds", report.min_field_seconds])
    writer.writerow(["Maximum Field Seconds", report.max_field_seconds])
    writer.writerow(["Players Under Average", report.fairness_counts.get("under", 0)])
    writer.writerow(["Players Near Average", report.fairness_counts.get("ok", 0)])
    writer.writerow(["Players Over Average", report.fairness_counts.get("over", 0)])
    writer.writerow([])

    writer.writerow([
        "Id", "Name", "Number", "Status", "Role", "Slot", "Inactive",
        "Field Seconds", "Defender Seconds", "Midfielder Seconds",
        "Attacker Seconds", "Goalie Seconds", "Substitute Seconds",
        "Active Stint Seconds", "Delta Seconds", "Fairness",
    ])
    for item in report.players:
        writer.writerow([
            item.player_id,
            item.name,
            item.number or "",
            item.status,
            item.role,
            item.slot or "",
            "yes" if item.is_inactive else "no",
            item.time_on_field_seconds,
            item.time_as_defender_seconds,
            item.time_as_midfielder_seconds,
            item.time_as_attacker_seconds,
            item.time_as_goalie_seconds,
            item.time_as_substitute_seconds,
            item.active_stint_seconds,
            item.delta_seconds,
            item.fairness,
        ])

    csv_text = buffer.getvalue()
    buffer.close()
    return csv_text
