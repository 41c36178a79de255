from tilewall.patterns.base import (
    Module,
    ModuleDefinition,
    ModuleKind,
    ModuleRegistry,
    Parameter,
)


@ModuleRegistry.register
class Stripes(Module):
    @classmethod
    def definition(cls) -> ModuleDefinition:
        return ModuleDefinition(
            kind=ModuleKind.STRIPES,
            description="Evenly spaced bands, horizontal or vertical",
            parameters=[
                Parameter(
                    name="bands",
                    type=int,
                    min_value=3,
                    max_value=9,
                    seed_offset=2,
                    time_scale=0.15,
                    description="Number of bands",
                ),
            ],
            fixed=["color", "horizontal"],
        )

    def __init__(self, seed, palette, noise, is_light=False):
        super().__init__(seed, palette, noise, is_light)
        self.color = self.stable_color(23)
        self.horizontal = noise.noise(seed + 3) < 0.5

    def render(self, surface, size, t):
        bands = self.sample("bands", size, t)
        band = size / (bands * 2)
        length = size * 0.98
        for i in range(bands):
            offset = -size / 2 + i * (2 * band) + band / 2
            if self.horizontal:
                surface.rect(0, offset, length, band, self.color)
            else:
                surface.rect(offset, 0, band, length, self.color)
