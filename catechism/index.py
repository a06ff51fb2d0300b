"""In-memory index of paragraphs keyed by paragraph number."""

from __future__ import annotations

from catechism.models import Paragraph


class CatechismIndex:
    """Paragraph number → :class:`Paragraph`, first insert wins.

    Running heads and cross-references can look like numbered paragraphs, so
    a number seen again later in the crawl never replaces the original text.
    """

    def __init__(self) -> None:
        self._paragraphs: dict[int, Paragraph] = {}

    def insert(self, number: int, text: str) -> bool:
        """Store a paragraph unless *number* is already present.

        Returns:
            ``True`` if the paragraph was added, ``False`` if it was a duplicate.
        """
        if number in self._paragraphs:
            return False
        self._paragraphs[number] = Paragraph(number=number, text=text)
        return True

    def lookup(self, number: int) -> Paragraph | None:
        return self._paragraphs.get(number)

    def all_paragraphs(self) -> list[Paragraph]:
        """Every paragraph, ordered by number."""
        return [self._paragraphs[n] for n in self.numbers()]

    def numbers(self) -> list[int]:
        return sorted(self._paragraphs)

    def next_number(self, number: int) -> int | None:
        """The smallest indexed number greater than *number*, if any."""
        candidates = [n for n in self._paragraphs if n > number]
        return min(candidates) if candidates else None

    def __len__(self) -> int:
        return len(self._paragraphs)

    def __contains__(self, number: object) -> bool:
        return number in self._paragraphs
