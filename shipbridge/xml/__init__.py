"""XML request construction."""

from shipbridge.xml.builder import XmlNode, to_text

__all__ = ["XmlNode", "to_text"]
