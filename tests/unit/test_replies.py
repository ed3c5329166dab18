"""Unit tests for canned replies."""

import random

import pytest

from personachat.replies import CANNED_RESPONSES, DEFAULT_CHARACTER_NAME, canned_reply, responses_for


@pytest.mark.parametrize("name", sorted(CANNED_RESPONSES))
def test_reply_belongs_to_character_set(name):
    rng = random.Random(0)
    for _ in range(50):
        assert canned_reply(name, rng) in CANNED_RESPONSES[name]


def test_each_set_has_four_replies():
    assert set(CANNED_RESPONSES) == {"Maya", "Professor Sage", "Echo", "Zara"}
    assert all(len(replies) == 4 for replies in CANNED_RESPONSES.values())


@pytest.mark.parametrize("name", [None, "", "Unknown Persona"])
def test_unknown_name_uses_default_set(name):
    assert responses_for(name) == CANNED_RESPONSES[DEFAULT_CHARACTER_NAME]
    assert canned_reply(name, random.Random(1)) in CANNED_RESPONSES["Maya"]


def test_seeded_rng_is_reproducible():
    first = [canned_reply("Zara", random.Random(42)) for _ in range(3)]
    assert len(set(first)) == 1
    assert first[0] == random.Random(42).choice(CANNED_RESPONSES["Zara"])


def test_all_replies_eventually_drawn():
    rng = random.Random(3)
    drawn = {canned_reply("Echo", rng) for _ in range(200)}
    assert drawn == set(CANNED_RESPONSES["Echo"])
