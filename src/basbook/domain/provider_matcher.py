"""Fuzzy matching of CSV vendor text against known provider names."""

import re
from typing import Optional, Sequence

from basbook.domain.csv_types import DEFAULT_MATCH_THRESHOLD, MatchType, ProviderMatch
from basbook.utils.fuzzy import normalize_provider_name, similarity

# Normalized alias phrase -> canonical provider name
PROVIDER_ALIASES: dict[str, str] = {
    # Internet providers
    "telstra": "Telstra",
    "iinet": "iiNet",
    "ii net": "iiNet",
    "optus": "Optus",
    "tpg": "TPG",
    "aussie": "Aussie Broadband",
    "aussie broadband": "Aussie Broadband",
    # Cloud/Tech
    "google": "Google",
    "google cloud": "Google Cloud",
    "google ads": "Google Ads",
    "aws": "AWS",
    "amazon": "Amazon",
    "amazon web services": "AWS",
    "azure": "Microsoft Azure",
    "microsoft": "Microsoft",
    "github": "GitHub",
    "gitlab": "GitLab",
    "digitalocean": "DigitalOcean",
    "digital ocean": "DigitalOcean",
    "netlify": "Netlify",
    "vercel": "Vercel",
    "heroku": "Heroku",
    "cloudflare": "Cloudflare",
    # Software/Subscriptions
    "adobe": "Adobe",
    "zoom": "Zoom",
    "slack": "Slack",
    "notion": "Notion",
    "dropbox": "Dropbox",
    "figma": "Figma",
    "canva": "Canva",
    "netflix": "Netflix",
    "spotify": "Spotify",
    "jetbrains": "JetBrains",
    # Office
    "officeworks": "Officeworks",
    "bunnings": "Bunnings",
    "ikea": "IKEA",
    # Fuel
    "bp": "BP",
    "shell": "Shell",
    "caltex": "Caltex",
    "ampol": "Ampol",
    "7eleven": "7-Eleven",
}

# (pattern on lowercase raw text, keywords it contributes)
KEYWORD_RULES: tuple[tuple[re.Pattern[str], tuple[str, ...]], ...] = (
    (re.compile(r"cloud|aws|azure|hosting|server"), ("hosting", "cloud")),
    (re.compile(r"software|app|subscription|saas"), ("software",)),
    (re.compile(r"internet|broadband|nbn|wifi"), ("internet",)),
    (re.compile(r"phone|mobile|telstra|optus"), ("phone",)),
    (re.compile(r"office|stationery|supplies"), ("office",)),
    (re.compile(r"furniture|desk|chair"), ("furniture",)),
    (re.compile(r"fuel|petrol|diesel|bp|shell|caltex"), ("fuel", "vehicle")),
    (re.compile(r"car|vehicle|rego|insurance"), ("vehicle",)),
    (re.compile(r"accountant|bookkeep|tax"), ("accounting",)),
    (re.compile(r"legal|lawyer|solicitor"), ("legal",)),
)


class ProviderMatcher:
    """Matches free-text vendor names to known providers.

    Tiers are tried in order and the first hit wins: alias, exact, contains,
    starts-with, fuzzy. Any input that starts with a provider name also
    contains it, so the starts-with tier only fires if contains did not; it
    is kept because callers may key on the ``startsWith`` label.
    """

    def find_best_match(
        self,
        item_name: str,
        known_providers: Sequence[str],
        threshold: float = DEFAULT_MATCH_THRESHOLD,
    ) -> Optional[ProviderMatch]:
        """Find the best matching provider.

        Args:
            item_name: Item/vendor text from the CSV
            known_providers: Provider names from the database
            threshold: Minimum fuzzy similarity (0-1)

        Returns:
            Best match, or None if nothing clears the threshold
        """
        normalized_item = self.normalize(item_name)
        if not normalized_item or not known_providers:
            return None

        normalized_providers = [(name, self.normalize(name)) for name in known_providers]

        alias_target = PROVIDER_ALIASES.get(normalized_item)
        if alias_target is not None:
            normalized_target = self.normalize(alias_target)
            for name, normalized in normalized_providers:
                if normalized == normalized_target:
                    return ProviderMatch(provider_name=name, score=1.0, match_type=MatchType.ALIAS)

        for name, normalized in normalized_providers:
            if normalized == normalized_item:
                return ProviderMatch(provider_name=name, score=1.0, match_type=MatchType.EXACT)

        # Empty normalized names (e.g. a provider literally named "Pty Ltd")
        # would be a substring of everything.
        for name, normalized in normalized_providers:
            if normalized and normalized in normalized_item:
                return ProviderMatch(provider_name=name, score=0.9, match_type=MatchType.CONTAINS)

        for name, normalized in normalized_providers:
            if normalized and normalized_item.startswith(normalized):
                return ProviderMatch(
                    provider_name=name, score=0.85, match_type=MatchType.STARTS_WITH
                )

        best_match: Optional[ProviderMatch] = None
        best_score = 0.0
        for name, normalized in normalized_providers:
            score = similarity(normalized_item, normalized)
            if score > best_score and score >= threshold:
                best_score = score
                best_match = ProviderMatch(provider_name=name, score=score, match_type=MatchType.FUZZY)

        return best_match

    def normalize(self, value: str) -> str:
        """Normalize a vendor name for comparison."""
        return normalize_provider_name(value)

    def extract_keywords(self, item_name: str) -> list[str]:
        """Extract category keywords from raw item text.

        Used as a category fallback, never for provider identity.

        Returns:
            Deduplicated keywords in rule order
        """
        text = item_name.lower()
        keywords: list[str] = []
        for pattern, bucket in KEYWORD_RULES:
            if pattern.search(text):
                for keyword in bucket:
                    if keyword not in keywords:
                        keywords.append(keyword)
        return keywords
