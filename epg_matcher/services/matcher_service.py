"""
Fuzzy Matching Service

Pairs playlist channels with EPG channels by display-name similarity.
"""
import logging
from collections.abc import Callable, Sequence

from epg_matcher.services.channel_types import (
    EpgChannel,
    MatchOutcome,
    MatchResult,
    PlaylistChannel,
)
from epg_matcher.services.similarity_service import score_similarity


logger = logging.getLogger(__name__)

DEFAULT_MATCH_THRESHOLD = 0.6

Scorer = Callable[[str, str], float]


def find_best_match(
    name: str,
    epg_channels: Sequence[EpgChannel],
    *,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
    scorer: Scorer = score_similarity
) -> tuple[EpgChannel | None, float]:
    """
    Find the best EPG candidate for a single playlist name

    A candidate must score strictly above the threshold. On equal scores the
    candidate seen first in catalog order is kept.

    Args:
        name: Playlist display name
        epg_channels: Candidate pool in catalog order
        threshold: Acceptance threshold (exclusive)
        scorer: Similarity function

    Returns:
        Tuple of (best channel or None, its score or 0.0)
    """
    best_channel: EpgChannel | None = None
    best_score = 0.0

    for candidate in epg_channels:
        score = scorer(name, candidate.display_name)
        if score > best_score and score > threshold:
            best_score = score
            best_channel = candidate

    return best_channel, best_score


def match_channels(
    playlist_channels: Sequence[PlaylistChannel],
    epg_channels: Sequence[EpgChannel],
    *,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
    scorer: Scorer = score_similarity
) -> MatchOutcome:
    """
    Match every playlist channel against the EPG catalog

    Args:
        playlist_channels: Parsed playlist entries
        epg_channels: Parsed catalog channels
        threshold: Acceptance threshold (exclusive)
        scorer: Similarity function

    Returns:
        MatchOutcome with matches and unmatched channels, both in playlist order
    """
    logger.debug(
        f"Matching {len(playlist_channels)} playlist channels against "
        f"{len(epg_channels)} EPG channels (threshold {threshold})"
    )

    outcome = MatchOutcome()

    for channel in playlist_channels:
        best_channel, best_score = find_best_match(
            channel.name,
            epg_channels,
            threshold=threshold,
            scorer=scorer
        )

        if best_channel is None:
            logger.debug(f"No EPG match for '{channel.name}'")
            outcome.unmatched.append(channel)
            continue

        logger.debug(f"Matched '{channel.name}' -> '{best_channel.display_name}' ({best_score:.3f})")
        outcome.matches.append(MatchResult(
            playlist_name=channel.name,
            playlist_tvg_id=channel.tvg_id,
            epg_id=best_channel.id,
            epg_name=best_channel.display_name,
            score=best_score,
            stream_url=channel.stream_url,
            attributes=channel.attributes
        ))

    logger.info(f"Matching complete: {len(outcome.matches)} matched, {len(outcome.unmatched)} unmatched")

    return outcome


class FuzzyResolver:
    """Resolves a playlist channel to the id of its best EPG candidate."""

    def __init__(
        self,
        epg_channels: Sequence[EpgChannel],
        threshold: float = DEFAULT_MATCH_THRESHOLD,
        scorer: Scorer = score_similarity
    ) -> None:
        self.epg_channels = list(epg_channels)
        self.threshold = threshold
        self.scorer = scorer

    def resolve(self, channel: PlaylistChannel) -> str | None:
        best_channel, _ = find_best_match(
            channel.name,
            self.epg_channels,
            threshold=self.threshold,
            scorer=self.scorer
        )
        return best_channel.id if best_channel else None
