"""Wire schemas for the controller's REST API."""

from pydantic import BaseModel, Field, TypeAdapter

from tardisremote.models import AnimatedScene, AudioFile, Color, LEDSection, SectionInfo


class RGBPayload(BaseModel):
    """Color body as the controller expects it."""

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    @classmethod
    def from_color(cls, color: Color) -> "RGBPayload":
        return cls(r=color.r, g=color.g, b=color.b)


class SetColorRequest(BaseModel):
    """Body of POST /api/led/color."""

    color: RGBPayload
    section: str

    @classmethod
    def build(cls, section: LEDSection, color: Color) -> "SetColorRequest":
        if not section.is_concrete:
            raise ValueError("set_color needs a concrete section; expand ALL first")
        return cls(color=RGBPayload.from_color(color), section=section.value)


class SectionRequest(BaseModel):
    """Body of POST /api/led/on and /api/led/off.

    An omitted section means every section.
    """

    section: str | None = None

    @classmethod
    def build(cls, section: LEDSection | None) -> "SectionRequest":
        if section is None or not section.is_concrete:
            return cls()
        return cls(section=section.value)

    def to_json(self) -> dict:
        return self.model_dump(exclude_none=True)


# Response decoders
SECTION_LIST = TypeAdapter(list[SectionInfo])
SOUND_LIST = TypeAdapter(list[AudioFile])
SCENE_LIST = TypeAdapter(list[AnimatedScene])
