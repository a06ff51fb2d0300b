"""Dataclass models for the Catechism text.

The outline types (``Part`` down to ``SubArticle``) only own their children.
Upward navigation goes through :class:`Outline`, which keeps a child → parent
lookup next to the tree instead of storing back-pointers on the nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union


@dataclass(frozen=True)
class Paragraph:
    """One numbered paragraph, e.g. ``CCC 484``."""

    number: int
    text: str
    # Reserved for cross-references; extraction leaves this empty.
    references: tuple[str, ...] = ()


@dataclass(eq=False)
class SubArticle:
    title: str
    paragraphs: list[Paragraph] = field(default_factory=list)


@dataclass(eq=False)
class Article:
    title: str
    sub_articles: list[SubArticle] = field(default_factory=list)


@dataclass(eq=False)
class Chapter:
    title: str
    articles: list[Article] = field(default_factory=list)


@dataclass(eq=False)
class Section:
    title: str
    chapters: list[Chapter] = field(default_factory=list)


@dataclass(eq=False)
class Part:
    title: str
    sections: list[Section] = field(default_factory=list)


OutlineNode = Union[Part, Section, Chapter, Article, SubArticle, Paragraph]

# parent type -> name of the list holding its children
_CHILDREN = {
    Part: "sections",
    Section: "chapters",
    Chapter: "articles",
    Article: "sub_articles",
    SubArticle: "paragraphs",
}

_CHILD_TYPE = {
    Part: Section,
    Section: Chapter,
    Chapter: Article,
    Article: SubArticle,
    SubArticle: Paragraph,
}


class Outline:
    """The four-part document outline with derived parent lookup."""

    def __init__(self) -> None:
        self.parts: list[Part] = []
        self._parents: dict[int, OutlineNode] = {}
        # Keep children alive so their id() stays unique while indexed.
        self._children: dict[int, OutlineNode] = {}

    def add_part(self, part: Part) -> Part:
        self.parts.append(part)
        return part

    def attach(self, parent: OutlineNode, child: OutlineNode) -> OutlineNode:
        """Append *child* under *parent* and record the parent link.

        Raises:
            TypeError: If *child* is not the level directly below *parent*.
        """
        expected = _CHILD_TYPE.get(type(parent))
        if expected is None or not isinstance(child, expected):
            raise TypeError(
                f"cannot attach {type(child).__name__} under {type(parent).__name__}"
            )
        getattr(parent, _CHILDREN[type(parent)]).append(child)
        self._parents[id(child)] = parent
        self._children[id(child)] = child
        return child

    def parent_of(self, node: OutlineNode) -> OutlineNode | None:
        """Return the node one level up, or ``None`` for parts and unknown nodes."""
        if self._children.get(id(node)) is not node:
            return None
        return self._parents.get(id(node))

    def lineage(self, node: OutlineNode) -> Iterator[OutlineNode]:
        """Yield the ancestors of *node*, nearest first."""
        current = self.parent_of(node)
        while current is not None:
            yield current
            current = self.parent_of(current)
