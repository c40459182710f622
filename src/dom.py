"""Minimal element tree standing in for the browser DOM.

Supports what the todo view needs: elements with attributes, an ordered
class list, children, text nodes, per-element event listeners, and HTML
serialisation. query_selector understands only the simple forms used to
locate the page's fixed elements at start-up: "tag", ".class",
"tag.class", "#id" and 'tag[attr="value"]'.
"""
from __future__ import annotations
import html
import re
from typing import Any, Callable, Dict, Iterator, List, Optional

Listener = Callable[["Event"], None]

VOID_TAGS = frozenset({'input', 'br', 'hr', 'img', 'meta', 'link'})
_SELECTOR_RE = re.compile(
    r'^(?P<tag>[a-zA-Z][a-zA-Z0-9-]*)?'
    r'(?:#(?P<id>[\w-]+))?'
    r'(?:\.(?P<cls>[\w-]+))?'
    r'(?:\[(?P<attr>[\w-]+)="(?P<val>[^"]*)"\])?$'
)


class Event:
    def __init__(self, type: str, target: "Element", **detail: Any):
        self.type = type
        self.target = target
        self.detail: Dict[str, Any] = detail

    def __getattr__(self, name: str) -> Any:
        try:
            return self.__dict__['detail'][name]
        except KeyError:
            raise AttributeError(name) from None


class ClassList:
    """Ordered set of class names."""

    def __init__(self) -> None:
        self._names: List[str] = []

    def add(self, name: str) -> None:
        if name not in self._names:
            self._names.append(name)

    def remove(self, name: str) -> None:
        if name in self._names:
            self._names.remove(name)

    def toggle(self, name: str, force: Optional[bool] = None) -> bool:
        want = (name not in self._names) if force is None else force
        if want:
            self.add(name)
        else:
            self.remove(name)
        return want

    def contains(self, name: str) -> bool:
        return name in self._names

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __str__(self) -> str:
        return ' '.join(self._names)


class Element:
    def __init__(self, tag: str, text: Optional[str] = None):
        self.tag = tag.lower()
        self.text = text  # only set for '#text' nodes
        self.attributes: Dict[str, str] = {}
        self.class_list = ClassList()
        self.children: List[Element] = []
        self.parent: Optional[Element] = None
        self.value: str = ''
        self._listeners: Dict[str, List[Listener]] = {}

    @property
    def is_text(self) -> bool:
        return self.tag == '#text'

    # -------------------- attributes --------------------
    def set_attribute(self, name: str, value: Any = '') -> None:
        if name == 'class':
            for cls in str(value).split():
                self.class_list.add(cls)
            return
        self.attributes[name] = str(value)

    def get_attribute(self, name: str) -> Optional[str]:
        if name == 'class':
            return str(self.class_list) if len(self.class_list) else None
        return self.attributes.get(name)

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    @property
    def id(self) -> Optional[str]:
        return self.attributes.get('id')

    # -------------------- tree --------------------
    def append_child(self, node: Element) -> Element:
        if node.parent is not None:
            node.parent.remove_child(node)
        node.parent = self
        self.children.append(node)
        return node

    def insert_before(self, node: Element, ref: Optional[Element]) -> Element:
        if ref is None:
            return self.append_child(node)
        if ref.parent is not self:
            raise ValueError('reference node is not a child of this element')
        if node.parent is not None:
            node.parent.remove_child(node)
        node.parent = self
        self.children.insert(self.children.index(ref), node)
        return node

    def prepend(self, node: Element) -> Element:
        return self.insert_before(node, self.first_child)

    def remove_child(self, node: Element) -> Element:
        if node.parent is not self:
            raise ValueError('node is not a child of this element')
        self.children.remove(node)
        node.parent = None
        return node

    def remove(self) -> None:
        if self.parent is not None:
            self.parent.remove_child(self)

    @property
    def first_child(self) -> Optional[Element]:
        return self.children[0] if self.children else None

    @property
    def last_child(self) -> Optional[Element]:
        return self.children[-1] if self.children else None

    def iter(self) -> Iterator[Element]:
        """Depth-first walk including self."""
        yield self
        for child in list(self.children):
            yield from child.iter()

    @property
    def text_content(self) -> str:
        if self.is_text:
            return self.text or ''
        return ''.join(c.text_content for c in self.children)

    # -------------------- events --------------------
    def add_event_listener(self, type: str, listener: Listener) -> None:
        self._listeners.setdefault(type, []).append(listener)

    def remove_event_listener(self, type: str, listener: Listener) -> None:
        listeners = self._listeners.get(type, [])
        if listener in listeners:
            listeners.remove(listener)

    def dispatch(self, type: str, **detail: Any) -> Event:
        event = Event(type, self, **detail)
        for listener in list(self._listeners.get(type, [])):
            listener(event)
        return event

    def click(self) -> Event:
        return self.dispatch('click')

    # -------------------- selection --------------------
    def matches(self, selector: str) -> bool:
        m = _SELECTOR_RE.match(selector.strip())
        if not m or self.is_text:
            return False
        if m.group('tag') and m.group('tag').lower() != self.tag:
            return False
        if m.group('id') and self.id != m.group('id'):
            return False
        if m.group('cls') and not self.class_list.contains(m.group('cls')):
            return False
        if m.group('attr') and self.get_attribute(m.group('attr')) != m.group('val'):
            return False
        return True

    def query_selector(self, selector: str) -> Optional[Element]:
        for node in self.iter():
            if node is not self and node.matches(selector):
                return node
        return None

    def query_selector_all(self, selector: str) -> List[Element]:
        return [n for n in self.iter() if n is not self and n.matches(selector)]

    # -------------------- serialisation --------------------
    def to_html(self) -> str:
        if self.is_text:
            return html.escape(self.text or '', quote=False)
        parts = [self.tag]
        if len(self.class_list):
            parts.append(f'class="{html.escape(str(self.class_list))}"')
        for name, value in self.attributes.items():
            parts.append(name if value == '' else f'{name}="{html.escape(value)}"')
        open_tag = '<' + ' '.join(parts) + '>'
        if self.tag in VOID_TAGS:
            return open_tag
        inner = ''.join(c.to_html() for c in self.children)
        return f'{open_tag}{inner}</{self.tag}>'

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        if self.is_text:
            return f"Text({self.text!r})"
        return f"Element(<{self.tag}> children={len(self.children)})"


class Document:
    def __init__(self, title: str = ''):
        self.title = title
        self.body = Element('body')

    def create_element(self, tag: str) -> Element:
        return Element(tag)

    def create_text_node(self, text: str) -> Element:
        return Element('#text', text=text)

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        for node in self.body.iter():
            if node.id == element_id:
                return node
        return None

    def query_selector(self, selector: str) -> Optional[Element]:
        return self.body.query_selector(selector)

    def to_html(self) -> str:
        return (
            '<!doctype html>\n<html lang="en">\n<head>\n<meta charset="utf-8" />\n'
            f'<title>{html.escape(self.title)}</title>\n</head>\n'
            f'{self.body.to_html()}\n</html>\n'
        )
