"""Integration tests for the draft_event CLI workflow."""

import json
import logging
import sys

import pytest

import draft_event
from partydraft.config import clear_config_cache
from partydraft.json_io import load_raffle_state, load_teams
from partydraft.validators import validate_matchups, validate_teams


@pytest.fixture
def event_dir(tmp_path):
    """Create a roster and a two-team config in a temp directory."""
    (tmp_path / 'roster.csv').write_text('Al, M\nBea, F\nCy, M\nDi, F, 0\nEd, M, H\n')
    (tmp_path / 'config.json').write_text(
        json.dumps({'event_name': 'Test Night', 'team_colors': ['Red', 'Blue']})
    )
    clear_config_cache()
    yield tmp_path
    clear_config_cache()
    logging.getLogger('partydraft').handlers = []


def run_cli(monkeypatch, event_dir, *args):
    argv = ['draft_event.py', '--config', str(event_dir / 'config.json'), *args]
    monkeypatch.setattr(sys, 'argv', argv)
    with pytest.raises(SystemExit) as exc:
        draft_event.main()
    return exc.value.code


class TestWorkflow:
    """Roster text -> teams -> playing order -> raffle."""

    def test_draft_order_raffle(self, monkeypatch, event_dir, capsys):
        results = event_dir / 'results.json'
        session = event_dir / 'session.json'
        state = event_dir / 'raffle.json'

        assert run_cli(monkeypatch, event_dir, 'draft', str(event_dir / 'roster.csv'), '-o', str(results)) == 0
        teams, _ = load_teams(results)
        assert [t.color for t in teams] == ['Red', 'Blue']
        assert sorted(m.name for t in teams for m in t.members) == ['Al', 'Bea', 'Cy', 'Di', 'Ed']
        assert validate_teams(teams) == []

        code = run_cli(
            monkeypatch, event_dir,
            'order', str(results), '-o', str(session), '--xlsx', str(event_dir / 'order.xlsx'),
        )
        assert code == 0
        teams, matchups = load_teams(session)
        assert matchups
        assert validate_matchups(matchups, ['Red', 'Blue'], teams) == []
        assert (event_dir / 'order.xlsx').exists()

        for _ in range(2):
            assert run_cli(monkeypatch, event_dir, 'raffle', str(session), '--state', str(state), '--remove') == 0
        assert len(set(load_raffle_state(state).excluded_ids)) == 2

        assert run_cli(monkeypatch, event_dir, 'raffle', str(session), '--state', str(state), '--reset') == 0
        assert load_raffle_state(state).excluded_ids == []

        out = capsys.readouterr().out
        assert 'Test Night: Red, Blue' in out
        assert 'Winner:' in out

    def test_raffle_exhausted(self, monkeypatch, event_dir):
        results = event_dir / 'results.json'
        state = event_dir / 'raffle.json'
        run_cli(monkeypatch, event_dir, 'draft', str(event_dir / 'roster.csv'), '-o', str(results))
        for _ in range(5):
            run_cli(monkeypatch, event_dir, 'raffle', str(results), '--state', str(state), '--remove')
        assert run_cli(monkeypatch, event_dir, 'raffle', str(results), '--state', str(state)) == 1

    def test_bad_config(self, monkeypatch, event_dir):
        (event_dir / 'config.json').write_text(json.dumps({'event_name': 'X', 'team_colors': ['Teal']}))
        assert run_cli(monkeypatch, event_dir, 'draft', str(event_dir / 'roster.csv')) == 1

    def test_missing_results(self, monkeypatch, event_dir):
        assert run_cli(monkeypatch, event_dir, 'order', str(event_dir / 'absent.json')) == 1

    def test_order_rejects_roster_file(self, monkeypatch, event_dir, capsys):
        roster = event_dir / 'roster.json'
        roster.write_text(json.dumps([{'id': '1', 'name': 'Al', 'gender': 'M'}]))
        assert run_cli(monkeypatch, event_dir, 'order', str(roster)) == 1
        assert 'not a results or session file' in capsys.readouterr().out

    def test_order_rejects_malformed_json(self, monkeypatch, event_dir):
        broken = event_dir / 'results.json'
        broken.write_text('{not json')
        assert run_cli(monkeypatch, event_dir, 'order', str(broken)) == 1
