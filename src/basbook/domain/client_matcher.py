"""Fuzzy matching of CSV client text against known clients.

Client names may be encrypted at rest, so matching is never pushed down into
SQL. The import loads every client once and matches in memory; the client
list of a freelancer is small enough for that.
"""

from typing import Iterable, Optional, Sequence

from basbook.domain.csv_types import (
    DEFAULT_MATCH_THRESHOLD,
    CachedClient,
    ClientMatch,
    MatchType,
)
from basbook.domain.entities import Client
from basbook.utils.fuzzy import normalize_client_name, similarity

# Shortest normalized name allowed to take part in a substring match
MIN_PARTIAL_LENGTH = 3


class ClientMatcher:
    """Matches free-text client names with exact, partial and fuzzy tiers."""

    def prepare_clients_for_matching(self, clients: Iterable[Client]) -> list[CachedClient]:
        """Pre-compute normalized names once per import."""
        return [
            CachedClient(id=client.id, name=client.name, normalized_name=self.normalize(client.name))
            for client in clients
        ]

    def find_best_match(
        self,
        client_name: str,
        cached_clients: Sequence[CachedClient],
        threshold: float = DEFAULT_MATCH_THRESHOLD,
    ) -> Optional[ClientMatch]:
        """Find the best matching client.

        Args:
            client_name: Client text from the CSV
            cached_clients: Output of ``prepare_clients_for_matching``
            threshold: Minimum fuzzy similarity (0-1)

        Returns:
            Best match, or None if nothing clears the threshold
        """
        normalized_input = self.normalize(client_name)
        if not normalized_input or not cached_clients:
            return None

        for client in cached_clients:
            if client.normalized_name == normalized_input:
                return ClientMatch(
                    client_id=client.id,
                    client_name=client.name,
                    score=1.0,
                    match_type=MatchType.EXACT,
                )

        for client in cached_clients:
            if self._is_partial_match(normalized_input, client.normalized_name):
                shorter = min(len(normalized_input), len(client.normalized_name))
                longer = max(len(normalized_input), len(client.normalized_name))
                return ClientMatch(
                    client_id=client.id,
                    client_name=client.name,
                    score=min(0.95, 0.8 + 0.15 * shorter / longer),
                    match_type=MatchType.PARTIAL,
                )

        best_match: Optional[ClientMatch] = None
        best_score = 0.0
        for client in cached_clients:
            score = similarity(normalized_input, client.normalized_name)
            if score > best_score and score >= threshold:
                best_score = score
                best_match = ClientMatch(
                    client_id=client.id,
                    client_name=client.name,
                    score=score,
                    match_type=MatchType.FUZZY,
                )

        return best_match

    @staticmethod
    def _is_partial_match(normalized_input: str, normalized_client: str) -> bool:
        if len(normalized_input) < MIN_PARTIAL_LENGTH or len(normalized_client) < MIN_PARTIAL_LENGTH:
            return False
        return normalized_client in normalized_input or normalized_input in normalized_client

    def normalize(self, value: str) -> str:
        """Normalize a client name for comparison."""
        return normalize_client_name(value)
