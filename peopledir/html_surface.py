"""
Reconcile an already-rendered HTML people grid with BeautifulSoup.

Cards are the grid's children carrying a `data-person-id` attribute.
Hiding sets `style="display: none"`, showing restores `display: block`,
and moving appends the card tag back onto the grid, so every card keeps
its markup and attributes.
"""

import re
from typing import Dict, List

from bs4 import BeautifulSoup, Tag

from .records import RecordId
from .reconcile import MissingDisplaySurface

PERSON_ID_ATTR = "data-person-id"
_DISPLAY_RE = re.compile(r"display\s*:\s*[^;]*;?\s*")


def _with_display(style: str, value: str) -> str:
    rest = _DISPLAY_RE.sub("", style or "").strip()
    display = f"display: {value}"
    return f"{display}; {rest}" if rest else display


class HtmlGridSurface:
    """
    Display surface over the element with id `container_id` in an HTML page.

    Raises MissingDisplaySurface if the page has no such element.
    """

    def __init__(self, html: str, container_id: str):
        self.soup = BeautifulSoup(html, "html.parser")
        self.container_id = container_id
        grid = self.soup.find(id=container_id)
        if grid is None:
            raise MissingDisplaySurface(f"Container with id '{container_id}' not found")
        self.grid: Tag = grid
        self._cards: Dict[str, Tag] = {}
        for card in self.grid.find_all(attrs={PERSON_ID_ATTR: True}, recursive=False):
            self._cards[str(card[PERSON_ID_ATTR])] = card

    def _card(self, record_id: RecordId) -> Tag:
        return self._cards[str(record_id)]

    def has_element(self, record_id: RecordId) -> bool:
        return str(record_id) in self._cards

    def set_visible(self, record_id: RecordId, visible: bool) -> None:
        card = self._card(record_id)
        card["style"] = _with_display(card.get("style", ""), "block" if visible else "none")

    def move_to_end(self, record_id: RecordId) -> None:
        card = self._card(record_id)
        self.grid.append(card.extract())

    def card_ids(self) -> List[str]:
        """Card ids in current document order."""
        return [str(c[PERSON_ID_ATTR]) for c in self.grid.find_all(attrs={PERSON_ID_ATTR: True}, recursive=False)]

    def visible_ids(self) -> List[str]:
        return [
            cid for cid in self.card_ids()
            if "display: none" not in self._cards[cid].get("style", "")
        ]

    def render(self) -> str:
        return str(self.soup)
