"""
Tests for trade candidate generation and rebalancing.

Profiles are built by hand so the surplus/deficit labels are explicit.
"""

import logging

from sleeper_trade_finder.models import (
    Position,
    PositionStatus,
    SeasonPlayer,
    TeamProfile,
    TradeGive,
    TradeType,
)
from sleeper_trade_finder.services.candidates import (
    CandidateGenerator,
    TradeProposal,
    meets_package_ratio,
    pick_players,
)
from sleeper_trade_finder.services.profiler import group_by_position
from sleeper_trade_finder.services.valuation import adjusted_value

SURPLUS, BALANCED, DEFICIT = PositionStatus.SURPLUS, PositionStatus.BALANCED, PositionStatus.DEFICIT


def player(pid: str, position: str, ppg: float) -> SeasonPlayer:
    return SeasonPlayer(
        player_id=pid,
        full_name=pid,
        position=Position(position),
        fantasy_points_per_game=ppg,
    )


def profile(name: str, roster_id: int, status: dict, players: list) -> TeamProfile:
    return TeamProfile(
        team_name=name,
        roster_id=roster_id,
        position_strength={pos: 0.0 for pos in Position},
        position_status={pos: status.get(pos.value, BALANCED) for pos in Position},
        players_by_position=group_by_position(players),
    )


def give(p: SeasonPlayer) -> TradeGive:
    return TradeGive(player=p, position=p.position, adjusted_value=adjusted_value(p))


def alpha() -> TeamProfile:
    return profile(
        "Alpha", 1, {"QB": SURPLUS, "WR": DEFICIT},
        [player("a_qb1", "QB", 28.0), player("a_qb2", "QB", 26.0)]
        + [player(f"a_rb{i}", "RB", 12.0) for i in range(3)]
        + [player(f"a_wr{i}", "WR", 8.0) for i in range(4)]
        + [player("a_te1", "TE", 8.0)],
    )


def beta() -> TeamProfile:
    return profile(
        "Beta", 2, {"QB": DEFICIT, "WR": SURPLUS},
        [player("b_qb1", "QB", 12.0)]
        + [player(f"b_rb{i}", "RB", 12.0) for i in range(3)]
        + [player("b_wr1", "WR", 18.5), player("b_wr2", "WR", 16.0),
           player("b_wr3", "WR", 15.0), player("b_wr4", "WR", 14.0),
           player("b_wr5", "WR", 13.0)]
        + [player("b_te1", "TE", 8.0)],
    )


def ids(gives) -> set[str]:
    return {g.player.player_id for g in gives}


def test_generate_includes_qb_for_wr_swap():
    proposals = CandidateGenerator().generate([alpha(), beta()], "Alpha")

    swaps = [
        p for p in proposals
        if p.trade_type == TradeType.ONE_FOR_ONE
        and ids(p.team1_gives) == {"a_qb1"}
        and ids(p.team2_gives) == {"b_wr1"}
    ]
    assert len(swaps) == 1


def test_generate_user_is_always_team1():
    proposals = CandidateGenerator().generate([alpha(), beta()], "Alpha")

    assert proposals
    assert all(p.team1.team_name == "Alpha" and p.team2.team_name == "Beta" for p in proposals)


def test_generate_never_puts_player_on_both_sides():
    for p in CandidateGenerator().generate([alpha(), beta()], "Alpha"):
        assert not ids(p.team1_gives) & ids(p.team2_gives)
        assert len(p.player_ids) == len(p.team1_gives) + len(p.team2_gives)


def test_generate_proposal_keys_are_unique():
    proposals = CandidateGenerator().generate([alpha(), beta()], "Alpha")
    keys = [p.key for p in proposals]
    assert len(keys) == len(set(keys))


def test_generate_deduplicates_repeated_teams():
    once = CandidateGenerator().generate([alpha(), beta()], "Alpha")
    twice = CandidateGenerator().generate([alpha(), beta(), beta()], "Alpha")
    assert [p.key for p in once] == [p.key for p in twice]


def test_generate_unknown_user_team_returns_nothing():
    assert CandidateGenerator().generate([alpha(), beta()], "Nobody") == []


def test_generate_skips_same_roster():
    clone = alpha().model_copy(update={"team_name": "Alpha Clone"})
    assert CandidateGenerator().generate([alpha(), clone], "Alpha") == []


def test_uneven_one_for_one_is_rebalanced_with_weaker_side_spare():
    # QB 32 * 0.625 = 20.0 against WR 18 * 0.95 = 17.1: gap 2.9 needs rebalancing
    user = profile("Alpha", 1, {"QB": SURPLUS}, [player("a_qb1", "QB", 32.0)])
    other = profile(
        "Beta", 2, {"TE": SURPLUS},
        [player("b_wr1", "WR", 18.0), player("b_te1", "TE", 3.0)],
    )

    proposals = CandidateGenerator().generate([user, other], "Alpha")

    assert len(proposals) == 1
    rebalanced = proposals[0]
    assert rebalanced.trade_type == TradeType.TWO_FOR_ONE
    assert ids(rebalanced.team1_gives) == {"a_qb1"}
    assert ids(rebalanced.team2_gives) == {"b_wr1", "b_te1"}
    assert all(other.is_surplus(g.position) for g in rebalanced.team2_gives[1:])
    assert rebalanced.raw_gap < 1.0


def test_rebalance_escalates_to_three_for_two():
    # Beta's cheapest surplus RB (0.5) leaves a 2.4 gap, so both sides add players
    user = profile(
        "Alpha", 1, {"QB": SURPLUS},
        [player("a_qb1", "QB", 32.0), player("a_qb2", "QB", 3.2)],
    )
    other = profile(
        "Beta", 2, {"RB": SURPLUS},
        [player("b_wr1", "WR", 18.0), player("b_rb1", "RB", 0.5), player("b_rb2", "RB", 4.0)],
    )

    proposals = CandidateGenerator().generate([user, other], "Alpha")

    assert len(proposals) == 1
    escalated = proposals[0]
    assert escalated.trade_type == TradeType.THREE_FOR_TWO
    assert ids(escalated.team1_gives) == {"a_qb1", "a_qb2"}
    assert ids(escalated.team2_gives) == {"b_wr1", "b_rb1", "b_rb2"}
    assert all(other.is_surplus(g.position) for g in escalated.team2_gives[1:])
    assert all(user.is_surplus(g.position) for g in escalated.team1_gives)


def test_rebalance_without_spares_drops_proposal():
    user = profile("Alpha", 1, {"QB": SURPLUS}, [player("a_qb1", "QB", 32.0)])
    other = profile("Beta", 2, {}, [player("b_wr1", "WR", 18.0)])

    assert CandidateGenerator().generate([user, other], "Alpha") == []


def test_rebalance_never_adds_players_from_balanced_positions():
    # Beta's TE would close the gap but Beta isn't in surplus there
    user = profile("Alpha", 1, {"QB": SURPLUS}, [player("a_qb1", "QB", 32.0)])
    other = profile(
        "Beta", 2, {},
        [player("b_wr1", "WR", 18.0), player("b_te1", "TE", 3.0)],
    )

    assert CandidateGenerator().generate([user, other], "Alpha") == []


def test_spares_skip_players_without_points():
    user = profile("Alpha", 1, {"QB": SURPLUS}, [player("a_qb1", "QB", 32.0)])
    other = profile(
        "Beta", 2, {"RB": SURPLUS},
        [player("b_wr1", "WR", 18.0), player("b_rb1", "RB", 3.0), player("b_rb0", "RB", 0.0)],
    )

    proposals = CandidateGenerator().generate([user, other], "Alpha")

    assert len(proposals) == 1
    assert ids(proposals[0].team2_gives) == {"b_wr1", "b_rb1"}
    assert all(other.is_surplus(g.position) for g in proposals[0].team2_gives[1:])


def test_candidate_cap_limits_examined_shapes(caplog):
    generator = CandidateGenerator(max_examined=1)

    with caplog.at_level(logging.WARNING, logger="sleeper_trade_finder.services.candidates"):
        first = generator.generate([alpha(), beta()], "Alpha")
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(first) <= 1
    assert len(warnings) == 1
    assert "Candidate cap of 1 reached" in warnings[0].getMessage()

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="sleeper_trade_finder.services.candidates"):
        second = generator.generate([alpha(), beta()], "Alpha")
    # the count restarts, so the second run sees the same shapes and warns again
    assert [p.key for p in second] == [p.key for p in first]
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 1



def test_package_ratio_rejects_seventy_percent_return():
    package = [player("r1", "RB", 10.0), player("r2", "RB", 10.0)]
    proposal = TradeProposal(
        trade_type=TradeType.TWO_FOR_ONE,
        team1=alpha(),
        team2=beta(),
        team1_gives=[give(p) for p in package],
        team2_gives=[give(player("r3", "RB", 14.0))],
    )
    assert not meets_package_ratio(proposal)

    proposal = proposal.model_copy(update={"team2_gives": [give(player("r3", "RB", 17.0))]})
    assert meets_package_ratio(proposal)


def test_package_ratio_ignores_one_for_one():
    proposal = TradeProposal(
        trade_type=TradeType.ONE_FOR_ONE,
        team1=alpha(),
        team2=beta(),
        team1_gives=[give(player("r1", "RB", 30.0))],
        team2_gives=[give(player("r2", "RB", 1.0))],
    )
    assert meets_package_ratio(proposal)


def test_pick_players_takes_next_best_for_repeated_position():
    picked = pick_players(beta(), [Position.WR, Position.WR, Position.QB])
    assert [p.player_id for p in picked] == ["b_wr1", "b_wr2", "b_qb1"]
    assert pick_players(beta(), [Position.QB, Position.QB]) is None
