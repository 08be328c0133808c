"""Tests for the client matcher."""

import pytest
from datetime import datetime, UTC

from basbook.domain.client_matcher import ClientMatcher
from basbook.domain.csv_types import MatchType
from basbook.domain.entities import Client


def make_client(client_id: int, name: str) -> Client:
    """Build a client entity for matching."""
    return Client(
        id=client_id,
        name=name,
        abn=None,
        is_psi_eligible=False,
        created_at=datetime.now(UTC),
    )


@pytest.fixture
def matcher():
    """Create a ClientMatcher."""
    return ClientMatcher()


@pytest.fixture
def cached(matcher):
    """Prepared client list."""
    return matcher.prepare_clients_for_matching(
        [
            make_client(1, "Aida Tomescu"),
            make_client(2, "Acme Widgets Pty Ltd"),
            make_client(3, "AB"),
        ]
    )


def test_prepare_clients_normalizes_names(cached):
    """Normalized names are computed once."""
    assert [c.normalized_name for c in cached] == ["aida tomescu", "acme widgets", "ab"]
    assert cached[1].name == "Acme Widgets Pty Ltd"


def test_empty_inputs_return_none(matcher, cached):
    """Empty names or an empty client list never match."""
    assert matcher.find_best_match("", cached) is None
    assert matcher.find_best_match("Acme", []) is None


def test_exact_match(matcher, cached):
    """Case and punctuation differences still match exactly."""
    match = matcher.find_best_match("AIDA TOMESCU.", cached)
    assert match.client_id == 1
    assert match.client_name == "Aida Tomescu"
    assert match.match_type == MatchType.EXACT
    assert match.score == 1.0


def test_partial_match_score(matcher, cached):
    """Containment scores by length ratio, capped at 0.95."""
    match = matcher.find_best_match("Acme Widgets Sydney", cached)
    assert match.client_id == 2
    assert match.match_type == MatchType.PARTIAL
    assert match.score == pytest.approx(0.8 + 0.15 * len("acme widgets") / len("acme widgets sydney"))


def test_partial_match_either_direction(matcher, cached):
    """The CSV name may be the shorter one."""
    match = matcher.find_best_match("Acme", cached)
    assert match.client_id == 2
    assert match.match_type == MatchType.PARTIAL


def test_short_names_do_not_partial_match(matcher, cached):
    """Names under three characters never take part in containment."""
    assert matcher.find_best_match("AB Xyz", cached) is None


def test_fuzzy_match(matcher, cached):
    """Typos match fuzzily."""
    match = matcher.find_best_match("Aida Tomesku", cached)
    assert match.client_id == 1
    assert match.match_type == MatchType.FUZZY
    assert match.score == pytest.approx(1 - 1 / 12)


def test_fuzzy_respects_threshold(matcher, cached):
    """Fuzzy candidates below the threshold are rejected."""
    assert matcher.find_best_match("Aida Tomesku", cached, threshold=0.95) is None
