"""Catalog records fetched from the device: sections, sounds and scenes."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from tardisremote.models.enums import LEDSection


class SectionInfo(BaseModel):
    """LED section descriptor as reported by the device."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Section name as used on the wire")
    description: str | None = Field(default=None, description="Optional human description")

    @model_validator(mode="before")
    @classmethod
    def accept_bare_name(cls, data: Any) -> Any:
        """Some firmware versions list sections as plain strings."""
        if isinstance(data, str):
            return {"name": data}
        return data

    @property
    def led_section(self) -> LEDSection | None:
        """The matching LEDSection, or None if the device reports an unknown zone."""
        try:
            return LEDSection(self.name)
        except ValueError:
            return None


class AudioFile(BaseModel):
    """A sound the device can play.

    Identity is the file name. Re-fetching the catalog produces new record
    instances, so equality and hashing ignore everything but file_name; this
    keeps "currently playing" comparisons stable across refreshes.
    """

    model_config = ConfigDict(frozen=True)

    friendly_name: str = Field(
        validation_alias=AliasChoices("friendly_name", "friendlyName"),
        description="Display name",
    )
    file_name: str = Field(
        validation_alias=AliasChoices("file_name", "fileName"),
        description="Stable key used to address the sound on the device",
    )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AudioFile):
            return self.file_name == other.file_name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.file_name)


class AnimatedScene(BaseModel):
    """A scripted light/sound scene stored on the device."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Scene name (identity)")
    description: str = Field(default="", description="What the scene does")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AnimatedScene):
            return self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)
