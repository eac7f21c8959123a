"""Shared fixtures: deterministic random sources and player factories."""

import random

import pytest

from partydraft.constants import FEMALE, MALE, NON_BINARY
from partydraft.models import Player, Team


class NoShuffle(random.Random):
    """Random source whose shuffle keeps the original order."""

    def shuffle(self, x):
        pass


class ReverseShuffle(random.Random):
    """Random source whose shuffle reverses in place."""

    def shuffle(self, x):
        x.reverse()


def make_player(pid, gender=MALE, name=None, flexible=False, helper=False, score=0):
    return Player(
        id=pid,
        name=name or pid,
        gender=gender,
        score=score,
        no_gender_restriction=flexible,
        is_helper=helper,
    )


def male(pid, **kwargs):
    return make_player(pid, MALE, **kwargs)


def female(pid, **kwargs):
    return make_player(pid, FEMALE, **kwargs)


def nonbinary(pid, **kwargs):
    return make_player(pid, NON_BINARY, **kwargs)


def team(color, *members, score=0):
    return Team(color=color, members=list(members), score=score)


def random_roster(rng, size):
    """Roster with a random gender mix and a sprinkling of flexible/helper players."""
    players = []
    for i in range(size):
        gender = rng.choice([MALE, MALE, FEMALE, FEMALE, NON_BINARY])
        players.append(
            make_player(
                f'p{i}',
                gender,
                name=rng.choice(['Ann', 'bob', 'Cy', 'Zed', 'zara', 'Mo', 'Lu']) + str(i),
                flexible=rng.random() < 0.2,
                helper=rng.random() < 0.3,
            )
        )
    return players


@pytest.fixture
def no_shuffle():
    return NoShuffle()


@pytest.fixture
def reverse_shuffle():
    return ReverseShuffle()
