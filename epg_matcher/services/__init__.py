"""
Services package for the EPG playlist matcher

This package contains the matching, override and rendering logic.
"""
from epg_matcher.services.matcher_service import FuzzyResolver, match_channels
from epg_matcher.services.override_service import OverrideResolver, clean_channel_name, resolve_channels
from epg_matcher.services.reconcile_service import CleanPipeline, MatchPipeline
from epg_matcher.services.similarity_service import normalize_name, score_similarity

__all__ = [
    'FuzzyResolver',
    'match_channels',
    'OverrideResolver',
    'clean_channel_name',
    'resolve_channels',
    'CleanPipeline',
    'MatchPipeline',
    'normalize_name',
    'score_similarity',
]
