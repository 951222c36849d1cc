"""Enumerations for the TARDIS prop."""

from enum import Enum


class LEDSection(str, Enum):
    """Physical LED zones on the prop.

    Values are the section names the device expects on the wire.
    ALL is a pseudo-section meaning "every concrete section"; it is always
    expanded (see expand_section) before storage or transmission.
    """

    TOP_LIGHT = "Top Light"
    FRONT_WINDOW = "Front Windows"
    LEFT_WINDOW = "Left Windows"
    RIGHT_WINDOW = "Right Windows"
    REAR_WINDOW = "Rear Windows"
    FRONT_POLICE_SIGN = "Front Police Sign"
    LEFT_POLICE_SIGN = "Left Police Sign"
    REAR_POLICE_SIGN = "Rear Police Sign"
    RIGHT_POLICE_SIGN = "Right Police Sign"
    ALL = "All"

    @property
    def is_concrete(self) -> bool:
        """False only for the ALL pseudo-section."""
        return self is not LEDSection.ALL

    @classmethod
    def concrete(cls) -> tuple["LEDSection", ...]:
        """All physical sections, in declaration order."""
        return tuple(s for s in cls if s.is_concrete)

    @classmethod
    def parse(cls, value: str) -> "LEDSection":
        """Look up a section by wire value or member name (case-insensitive).

        Accepts "Top Light", "top_light", "TOP-LIGHT", "all", ...

        Raises:
            ValueError: If no section matches
        """
        wanted = value.strip().lower()
        normalized = wanted.replace("-", "_").replace(" ", "_")
        for section in cls:
            if section.value.lower() == wanted or section.name.lower() == normalized:
                return section
        raise ValueError(f"Unknown LED section: {value!r}")


def expand_section(section: LEDSection | None) -> tuple[LEDSection, ...]:
    """Expand a section into the concrete sections it addresses.

    None and ALL both mean every concrete section. This is the only place the
    expansion happens, so the local store and the network fan-out always
    agree on which sections an intent touches.
    """
    if section is None or section is LEDSection.ALL:
        return LEDSection.concrete()
    return (section,)


class CatalogKind(str, Enum):
    """Collections exposed by the device catalog."""

    SECTIONS = "sections"
    SOUNDS = "sounds"
    SCENES = "scenes"


class FadeDirection(str, Enum):
    """Direction of an opacity fade."""

    IN = "in"
    OUT = "out"


class FadeState(str, Enum):
    """Lifecycle of a fade task."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
