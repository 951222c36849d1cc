"""Local model of the color of each LED section."""

import logging
from collections.abc import Mapping

from tardisremote.models import Color, LEDSection, expand_section
from tardisremote.protocols import SectionEvent, SectionObserver
from tardisremote.utils import ObserverManager

logger = logging.getLogger(__name__)


class SectionStateStore:
    """
    Last-known / optimistic color of every concrete LED section.

    This is the single source of truth the UI and renderer read from. It is
    only mutated on the event loop thread, by the dispatcher's optimistic
    step (set_color) and by turn-off, so it needs no lock of its own.

    Invariant: the ALL pseudo-section is never a key; it is expanded to the
    concrete sections before anything is stored.
    """

    def __init__(self, seed: Mapping[LEDSection, Color] | None = None) -> None:
        """
        Initialize the store with every concrete section black.

        Args:
            seed: Optional initial colors for specific sections
                  (e.g. a warm accent for the front windows)
        """
        self._seed: dict[LEDSection, Color] = {}
        for section, color in (seed or {}).items():
            for concrete in expand_section(section):
                self._seed[concrete] = color

        self._colors: dict[LEDSection, Color] = {}
        self._observers = ObserverManager[SectionObserver](observer_type_name="section")
        self._apply_seed()

    def _apply_seed(self) -> None:
        self._colors = {s: self._seed.get(s, Color.off()) for s in LEDSection.concrete()}

    def register_observer(self, observer: SectionObserver) -> None:
        """Register an observer to receive section color changes."""
        self._observers.register(observer)

    def unregister_observer(self, observer: SectionObserver) -> None:
        """Unregister an observer."""
        self._observers.unregister(observer)

    def set_color(self, section: LEDSection, color: Color) -> list[LEDSection]:
        """
        Assign a color to one section, or to every section for ALL.

        Args:
            section: Target section (ALL allowed)
            color: New color

        Returns:
            The concrete sections that were updated
        """
        affected = list(expand_section(section))
        for concrete in affected:
            self._colors[concrete] = color

        logger.debug(f"Stored {color.to_hex()} for {section.value}")
        self._observers.notify("on_section_event", SectionEvent.COLOR_CHANGED, affected, color)
        return affected

    def color_of(self, section: LEDSection) -> Color:
        """
        Get the stored color of a concrete section (black if unset).

        Raises:
            ValueError: For ALL, which has no single color
        """
        if not section.is_concrete:
            raise ValueError("ALL has no single color; query a concrete section")
        return self._colors.get(section, Color.off())

    def snapshot(self) -> dict[LEDSection, Color]:
        """Copy of the current section → color mapping."""
        return dict(self._colors)

    def reset(self) -> None:
        """Restore the seed colors."""
        self._apply_seed()
        self._observers.notify(
            "on_section_event", SectionEvent.RESET, list(LEDSection.concrete()), None
        )

    def __contains__(self, section: object) -> bool:
        return section in self._colors
