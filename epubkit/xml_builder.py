"""
Small helper for building namespaced XML documents with lxml

Knows nothing about EPUB: callers are responsible for producing a valid
document.
"""

import re
from typing import Dict, Optional

from lxml import etree

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

# anything outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def strip_invalid_xml_chars(text: str) -> str:
    """Drop control characters and other code points XML cannot carry"""
    return _INVALID_XML_CHARS.sub("", text)


class XmlDocument:
    """An XML document whose elements default to a single namespace"""

    def __init__(self, namespace: str, root_name: str, nsmap: Optional[Dict[str, str]] = None):
        self.namespace = namespace
        self._prefixes = {"xml": XML_NAMESPACE}

        root_nsmap = {None: namespace}
        if nsmap:
            root_nsmap.update(nsmap)
            self._prefixes.update(nsmap)

        self.root = etree.Element(self._qualify(root_name), nsmap=root_nsmap)
        self.tree = etree.ElementTree(self.root)

    def create_and_append_child(self, parent, name: str, text: Optional[str] = None,
                                nsmap: Optional[Dict[str, str]] = None):
        """Create element `name` under `parent`, optionally holding `text`, and return it.

        `name` may be prefixed (``dc:title``) with any prefix declared on the
        document so far; `nsmap` declares extra prefixes on the new element.
        """
        if nsmap:
            self._prefixes.update(nsmap)
            # default namespace first, so lxml does not pick a prefix for the tag itself
            nsmap = {None: self.namespace, **nsmap}
        child = etree.SubElement(parent, self._qualify(name), nsmap=nsmap)
        if text is not None:
            child.text = strip_invalid_xml_chars(text)
        return child

    def set_attribute(self, element, name: str, value) -> None:
        """Set an attribute, resolving ``prefix:name`` through the declared prefixes"""
        if ":" in name:
            name = self._qualify(name)
        element.set(name, strip_invalid_xml_chars(str(value)))

    def _qualify(self, name: str) -> str:
        if ":" not in name:
            return f"{{{self.namespace}}}{name}"

        prefix, local_name = name.split(":", 1)
        if prefix not in self._prefixes:
            raise ValueError(f"Undeclared namespace prefix '{prefix}' in '{name}'")
        return f"{{{self._prefixes[prefix]}}}{local_name}"


def serialize(document: XmlDocument) -> str:
    """Render the document as UTF-8 XML text, declaration included"""
    data = etree.tostring(
        document.tree,
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=True,
    )
    return data.decode("utf-8")
