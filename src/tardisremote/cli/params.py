"""Click parameter types for sections and colors."""

import math

import click

from tardisremote.models import Color, LEDSection


class SectionParamType(click.ParamType):
    """LED section given by wire name ("Top Light") or member name (top_light)."""

    name = "section"

    def convert(self, value, param, ctx):
        if isinstance(value, LEDSection):
            return value
        try:
            return LEDSection.parse(value)
        except ValueError:
            choices = ", ".join(s.name.lower() for s in LEDSection)
            self.fail(f"{value!r} is not a known section (choose from {choices})", param, ctx)

    def shell_complete(self, ctx, param, incomplete):
        from click.shell_completion import CompletionItem

        return [
            CompletionItem(s.name.lower(), help=s.value)
            for s in LEDSection
            if s.name.lower().startswith(incomplete.lower())
        ]


class ColorParamType(click.ParamType):
    """
    Color given as '#RRGGBB' hex or as three unit floats 'r,g,b'.

    Unit floats are clamped to [0, 1] and quantized to 8 bits, the same
    conversion a color picker goes through.
    """

    name = "color"

    def convert(self, value, param, ctx):
        if isinstance(value, Color):
            return value

        text = value.strip()
        if "," in text:
            parts = [p.strip() for p in text.split(",")]
            if len(parts) != 3:
                self.fail(f"{value!r} must have exactly three components (r,g,b)", param, ctx)
            try:
                r, g, b = (float(p) for p in parts)
            except ValueError:
                self.fail(f"{value!r} components must be numbers between 0 and 1", param, ctx)
            if not all(math.isfinite(c) for c in (r, g, b)):
                self.fail(f"{value!r} components must be finite numbers", param, ctx)
            return Color.from_unit(r, g, b)

        try:
            return Color.from_hex(text)
        except ValueError as e:
            self.fail(str(e), param, ctx)


SECTION = SectionParamType()
COLOR = ColorParamType()
