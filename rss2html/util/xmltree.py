from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple, Union
from xml.etree.ElementTree import Element

# Generic read-only tree the renderers work on. Tag nodes carry a name, attributes
# and ordered children; text nodes carry their literal content as the label.


@dataclass(frozen=True)
class XmlNode:
    label: str
    children: Tuple["XmlNode", ...] = ()
    is_tag: bool = True
    attributes: Mapping[str, str] = field(default_factory=dict)

    @property
    def child_count(self) -> int:
        return len(self.children)

    def child(self, index: int) -> "XmlNode":
        return self.children[index]

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def attribute_value(self, name: str) -> Optional[str]:
        return self.attributes.get(name)


# --------------------------------- builders -----------------------------------

def text(value: str) -> XmlNode:
    return XmlNode(label=value, is_tag=False)

def element(label: str, *children: Union[XmlNode, str], **attributes: str) -> XmlNode:
    """Build a tag node; bare strings become text children."""
    kids = tuple(text(c) if isinstance(c, str) else c for c in children)
    return XmlNode(label=label, children=kids, is_tag=True, attributes=dict(attributes))

def from_element(el: Element) -> XmlNode:
    """Convert an ElementTree element, keeping text and tails in document order."""
    kids = []
    if el.text and el.text.strip():
        kids.append(text(el.text.strip()))
    for sub in el:
        kids.append(from_element(sub))
        if sub.tail and sub.tail.strip():
            kids.append(text(sub.tail.strip()))
    attrs: Dict[str, str] = dict(el.attrib)
    return XmlNode(label=el.tag, children=tuple(kids), is_tag=True, attributes=attrs)


# --------------------------------- lookup -------------------------------------

def child_index(node: XmlNode, tag: str) -> Optional[int]:
    """Index of the first direct child labeled `tag`, or None.

    Only direct children are scanned; nested matches are never returned.
    """
    if not node.is_tag:
        raise ValueError(f"child lookup needs a tag node, got text {node.label!r}")
    for i, kid in enumerate(node.children):
        if kid.label == tag:
            return i
    return None

def find_child(node: XmlNode, tag: str) -> Optional[XmlNode]:
    i = child_index(node, tag)
    return None if i is None else node.child(i)

def first_text(node: Optional[XmlNode]) -> Optional[str]:
    """Label of the node's first child; None if node is missing or childless."""
    if node is None or node.child_count == 0:
        return None
    return node.child(0).label
