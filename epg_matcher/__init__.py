"""Reconcile IPTV playlists with XMLTV channel ids."""

__version__ = "0.1.0"
