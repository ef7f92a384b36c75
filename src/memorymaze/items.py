"""Item catalogue.

Raw registry entries carry optional ``health`` / ``isBoost`` / ``isSlow``
fields; they are folded into an explicit :class:`ItemKind` once, when the
catalogue is built, so nothing downstream re-inspects field presence.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple


class ItemKind(Enum):
    PLAIN = "plain"      # score only; these are the level's targets
    HEALTH = "health"    # heals (health > 0) or damages (health < 0)
    SPEED = "speed"      # boost or slow


@dataclass(frozen=True)
class ItemDef:
    id: str
    emoji: str
    name: str
    score: int
    rarity: float
    health: int = 0
    boost: Optional[bool] = None  # True = speed boost, False = slow, None = neither
    kind: ItemKind = field(init=False)

    def __post_init__(self) -> None:
        if self.rarity <= 0:
            raise ValueError(f"item {self.id!r}: rarity must be positive")
        if self.health:
            kind = ItemKind.HEALTH
        elif self.boost is not None:
            kind = ItemKind.SPEED
        else:
            kind = ItemKind.PLAIN
        object.__setattr__(self, "kind", kind)

    @property
    def is_target(self) -> bool:
        return self.kind is ItemKind.PLAIN

    @property
    def is_boost(self) -> bool:
        return self.boost is True

    @property
    def is_slow(self) -> bool:
        return self.boost is False


def item_from_raw(raw: Mapping[str, Any]) -> ItemDef:
    boost: Optional[bool] = None
    if raw.get("isBoost"):
        boost = True
    elif raw.get("isSlow"):
        boost = False
    return ItemDef(
        id=raw["id"],
        emoji=raw.get("emoji", ""),
        name=raw.get("name", raw["id"]),
        score=int(raw.get("score", 0)),
        rarity=float(raw["rarity"]),
        health=int(raw.get("health", 0)),
        boost=boost,
    )


def build_catalogue(entries: Iterable[Mapping[str, Any]]) -> Tuple[ItemDef, ...]:
    items: List[ItemDef] = []
    seen = set()
    for raw in entries:
        item = item_from_raw(raw)
        if item.id in seen:
            raise ValueError(f"duplicate item id {item.id!r}")
        seen.add(item.id)
        items.append(item)
    return tuple(items)


def target_items(catalogue: Iterable[ItemDef]) -> Tuple[ItemDef, ...]:
    return tuple(i for i in catalogue if i.is_target)


def total_rarity(catalogue: Iterable[ItemDef]) -> float:
    return sum(i.rarity for i in catalogue)


def by_id(catalogue: Iterable[ItemDef]) -> Dict[str, ItemDef]:
    return {i.id: i for i in catalogue}


# Order matters: ambient rolls walk this list and the planner places
# targets in this order.
REGISTRY: Tuple[Dict[str, Any], ...] = (
    {"id": "gpu", "emoji": "📼", "name": "RTX 5090 (Paid with Vital Organs)", "score": 800, "rarity": 0.008},
    {"id": "linux", "emoji": "🐧", "name": "Custom Linux Build (Held Together by Dotfiles)", "score": 600, "rarity": 0.01, "health": 128},
    {"id": "offer", "emoji": "💰", "name": "FAANG Job Offer", "score": 1000, "rarity": 0.01},
    {"id": "server", "emoji": "🗄️", "name": "Uptime: 99.9999% (Admin Ascended)", "score": 500, "rarity": 0.012},
    {"id": "css", "emoji": "🖌️", "name": "Perfectly Centered <div>", "score": 450, "rarity": 0.015},
    {"id": "hotfix", "emoji": "⚡", "name": "Hotfix in Production (And It Actually Worked)", "score": 650, "rarity": 0.01},
    {"id": "compile", "emoji": "🧱", "name": "Build Succeeded on First Try", "score": 700, "rarity": 0.009},
    {"id": "monitor", "emoji": "🖥️", "name": "Dual Vertical Monitors", "score": 350, "rarity": 0.015},
    {"id": "laptop", "emoji": "💻", "name": "MacBook Pro M5 (Your Wallet Cried)", "score": 350, "rarity": 0.015},
    {"id": "keeb", "emoji": "⌨️", "name": "Custom Thockboard (ASMR Edition)", "score": 250, "rarity": 0.02},
    {"id": "headphones", "emoji": "🎧", "name": "Noise Cancelling (Silences Real Life)", "score": 200, "rarity": 0.025},
    {"id": "pi", "emoji": "🥧", "name": "Raspberry Pi (Project You'll Never Start)", "score": 150, "rarity": 0.03},
    {"id": "chair", "emoji": "🪑", "name": "Ergo Chair (Posture +200%)", "score": 180, "rarity": 0.025},
    {"id": "standupdesk", "emoji": "📈", "name": "Standing Desk (Focus Multiplier)", "score": 160, "rarity": 0.03},
    {"id": "energy", "emoji": "🥤", "name": "Red Bull IV Drip (No Sleep Mode)", "score": 100, "rarity": 0.03, "isBoost": True},
    {"id": "copilot", "emoji": "🤖", "name": "Copilot Wrote Everything", "score": 200, "rarity": 0.02, "isBoost": True},
    {"id": "fiber", "emoji": "🚀", "name": "10Gbps Fiber (Latency? Never Heard of Her)", "score": 200, "rarity": 0.02, "isBoost": True},
    {"id": "mouse", "emoji": "🖱️", "name": "MX Master (Productivity Overlord)", "score": 150, "rarity": 0.025, "isBoost": True},
    {"id": "darkmode", "emoji": "🌙", "name": "Dark Mode (Instant 10x Developer Mode)", "score": 150, "rarity": 0.03, "isBoost": True},
    {"id": "focus", "emoji": "🎯", "name": "Flow State Achieved", "score": 180, "rarity": 0.025, "isBoost": True},
    {"id": "cleanbuild", "emoji": "🧼", "name": "Clean Build Cache (Everything Feels Faster)", "score": 140, "rarity": 0.03, "isBoost": True},
    {"id": "coffee", "emoji": "☕", "name": "Coffee (Programmer Blood Type)", "score": 50, "rarity": 0.06, "health": 40},
    {"id": "pizza", "emoji": "🍕", "name": "Hackathon Pizza (Cold but Powerful)", "score": 50, "rarity": 0.05, "health": 64},
    {"id": "rubberduck", "emoji": "🦆", "name": "Rubber Duck Debugging Session", "score": 50, "rarity": 0.05, "health": 16},
    {"id": "restart", "emoji": "🔁", "name": "Classic IT Fix (Turn It Off & On)", "score": 100, "rarity": 0.03, "health": 16},
    {"id": "docker", "emoji": "🐳", "name": "\"Works in Docker\" Miracle", "score": 150, "rarity": 0.03, "health": 16},
    {"id": "freshair", "emoji": "🌿", "name": "Touch Grass (Mental RAM Restored)", "score": 40, "rarity": 0.06, "health": 32},
    {"id": "sleep", "emoji": "🛌", "name": "Actual Full Night of Sleep", "score": 80, "rarity": 0.055, "health": 48},
    {"id": "git", "emoji": "🌳", "name": "Pristine Git History (A Rare Sight)", "score": 120, "rarity": 0.03},
    {"id": "json", "emoji": "📄", "name": "JSON That Actually Parses", "score": 80, "rarity": 0.04},
    {"id": "npm", "emoji": "📦", "name": "npm install (Summons Half the Internet)", "score": 50, "rarity": 0.04},
    {"id": "todo", "emoji": "📋", "name": "// TODO: (Future You's Problem)", "score": 30, "rarity": 0.05},
    {"id": "localhost", "emoji": "🏠", "name": "\"Works on Localhost\" Badge", "score": 40, "rarity": 0.04},
    {"id": "comment", "emoji": "💬", "name": "PR Comment Explaining the Magic Number", "score": 60, "rarity": 0.045},
    {"id": "cache", "emoji": "🧹", "name": "Cleared Cache, Still Broken", "score": 55, "rarity": 0.045},
    {"id": "jira", "emoji": "🎫", "name": "New Jira Notification", "score": 10, "rarity": 0.05, "isSlow": True},
    {"id": "meeting", "emoji": "📅", "name": "Meeting That Could've Been an Email", "score": 10, "rarity": 0.04, "isSlow": True},
    {"id": "unplugged", "emoji": "🔌", "name": "Unplugged Server (Surprise Downtime!)", "score": 50, "rarity": 0.03, "isSlow": True},
    {"id": "slackspam", "emoji": "📣", "name": "87 Unread Slack Notifications", "score": 20, "rarity": 0.035, "isSlow": True},
    {"id": "printer", "emoji": "🖨️", "name": "Printer Offline (Again!)", "score": 15, "rarity": 0.04, "isSlow": True},
    {"id": "deployfail", "emoji": "🛑", "name": "Prod Deploy Failed (30MB Stacktrace of Doom)", "score": 40, "rarity": 0.025, "isSlow": True},
    {"id": "ticketstorm", "emoji": "🗃️", "name": "Unexpected Ticket Avalanche", "score": 25, "rarity": 0.03, "isSlow": True},
    {"id": "bsod", "emoji": "🟦", "name": "BSOD (Your Soul Exits the Body)", "score": 0, "rarity": 0.02, "health": -150},
    {"id": "dns", "emoji": "🌐", "name": "It's ALWAYS DNS", "score": 20, "rarity": 0.035, "health": -40},
    {"id": "cors", "emoji": "🚧", "name": "CORS Error (Fun Ends Here)", "score": 20, "rarity": 0.04, "health": -30},
    {"id": "node_modules", "emoji": "🕳️", "name": "Deleting node_modules… Forever", "score": 10, "rarity": 0.05, "health": -20},
    {"id": "syntax", "emoji": "‼️", "name": "Syntax Error at 3am", "score": 10, "rarity": 0.04, "health": -25},
    {"id": "merge", "emoji": "⚔️", "name": "Merge Conflict (Choose Your Fighter)", "score": 20, "rarity": 0.03, "health": -50},
    {"id": "deprecated", "emoji": "📛", "name": "Deprecated Dependency (Good Luck)", "score": 10, "rarity": 0.05, "health": -35},
    {"id": "wifi", "emoji": "🛜", "name": "Wi-Fi Drops During Outage", "score": 10, "rarity": 0.045, "health": -20},
)

CATALOGUE: Tuple[ItemDef, ...] = build_catalogue(REGISTRY)
