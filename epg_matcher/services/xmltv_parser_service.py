import logging

from lxml import etree # type: ignore

from epg_matcher.exceptions import CatalogParseError
from epg_matcher.services.channel_types import EpgChannel

logger = logging.getLogger(__name__)


def parse_xmltv_channels(content: bytes) -> list[EpgChannel]:
    """
    Parse XMLTV content and return its channel records

    Args:
        content: Raw XMLTV document

    Returns:
        List of EpgChannel in document order

    Raises:
        CatalogParseError: If XML is malformed
    """
    logger.debug(f"Parsing XMLTV document ({len(content)} bytes)")

    if not content.strip():
        logger.error("  XML parsing error: document is empty")
        raise CatalogParseError("Malformed XMLTV document: document is empty")

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        logger.debug("  Loading XML document...")
        root = etree.fromstring(content, parser=parser)
        logger.debug(f"  XML document loaded (root tag: {root.tag})")
    except etree.XMLSyntaxError as e:
        logger.error(f"  XML parsing error: {e}")
        raise CatalogParseError(f"Malformed XMLTV document: {e}") from e

    channels = _parse_channels(root)

    if not channels:
        logger.warning("No channels found in XMLTV document")

    logger.info(f"XMLTV parsing complete: {len(channels)} channels")

    return channels


def _parse_channels(root: etree._Element) -> list[EpgChannel]:
    """Extract channels from XMLTV root element"""
    channels = []

    for channel in root.findall('channel'):
        xmltv_id = channel.get('id')
        if not xmltv_id:
            logger.debug("Skipping channel with missing ID attribute")
            continue

        channels.append(EpgChannel(
            id=xmltv_id,
            display_name=_get_text(channel, 'display-name', default='')
        ))

    return channels


def _get_text(element: etree._Element, tag: str, default: str = '') -> str:
    """Text of the first matching child, as written in the document"""
    child = element.find(tag)
    if child is None or not child.text:
        return default
    return child.text
