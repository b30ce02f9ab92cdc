"""Static hint definitions grouped by dashboard page.

Pages register their :class:`HintGroup` at import time, the same way the
home page group below does. Definitions carry everything an indicator needs
to render; the controller only ever sees ``id`` and ``priority``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional, Tuple, get_args

HintIcon = Literal["!", "?", "i"]
_VALID_ICONS = set(get_args(HintIcon))

DEFAULT_COLOR = "#A78BFA"
VIEWED_COLOR = "#6B7280"


@dataclass(frozen=True)
class HintDefinition:
    id: str
    title: str
    content: str
    priority: int = 100
    icon: HintIcon = "i"
    color: str = DEFAULT_COLOR
    category: str = "general"

    def __post_init__(self) -> None:
        if self.icon not in _VALID_ICONS:
            object.__setattr__(self, "icon", "i")
        if not self.color:
            object.__setattr__(self, "color", DEFAULT_COLOR)


@dataclass(frozen=True)
class HintGroup:
    id: str
    name: str
    hints: Tuple[HintDefinition, ...]


# Global group registry, populated by page modules at import time.
_GROUPS: Dict[str, HintGroup] = {}


def register_group(group: HintGroup) -> None:
    """Register ``group``. Re-registering an id replaces the previous group."""

    _GROUPS[group.id] = group


def get_group(group_id: str) -> Optional[HintGroup]:
    return _GROUPS.get(group_id)


def get_definition(hint_id: str) -> Optional[HintDefinition]:
    for group in _GROUPS.values():
        for hint in group.hints:
            if hint.id == hint_id:
                return hint
    return None


def definitions_by_category(category: str) -> list[HintDefinition]:
    return [hint for group in _GROUPS.values() for hint in group.hints if hint.category == category]


HOME_HINTS_ID = "home-hints"

HOME_HINTS = HintGroup(
    id=HOME_HINTS_ID,
    name="Home Page",
    hints=(
        HintDefinition(
            id="home-fear-greed",
            title="Market Sentiment",
            content=(
                "The Fear & Greed Index shows current market sentiment. Values below 25 "
                "indicate extreme fear (potential buying opportunity), while values above "
                "75 suggest extreme greed (potential correction ahead)."
            ),
            priority=1,
            icon="i",
            color="#A78BFA",
            category="home",
        ),
        HintDefinition(
            id="home-view-controls",
            title="View Controls",
            content=(
                "Switch between list and chart views, sort by different metrics, and "
                "filter assets. Your preferences are saved automatically."
            ),
            priority=2,
            icon="?",
            color="#3B82F6",
            category="home",
        ),
        HintDefinition(
            id="home-search",
            title="Quick Search",
            content="Find any asset instantly by typing its name or symbol.",
            priority=3,
            icon="!",
            color="#22C55E",
            category="home",
        ),
    ),
)

register_group(HOME_HINTS)
