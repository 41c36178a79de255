from tilewall.patterns.base import (
    Module,
    ModuleDefinition,
    ModuleKind,
    ModuleRegistry,
    Parameter,
)


@ModuleRegistry.register
class SolidBlock(Module):
    @classmethod
    def definition(cls) -> ModuleDefinition:
        return ModuleDefinition(
            kind=ModuleKind.SOLID_BLOCK,
            description="Full-height block that slides and stretches sideways",
            parameters=[
                Parameter(
                    name="width",
                    type=float,
                    min_value=0.45,
                    max_value=0.95,
                    seed_offset=5,
                    time_scale=0.18,
                    relative=True,
                    description="Block width as a fraction of tile size",
                ),
                Parameter(
                    name="offset",
                    type=float,
                    min_value=-0.2,
                    max_value=0.2,
                    seed_offset=6,
                    time_scale=0.1,
                    relative=True,
                    description="Horizontal offset from the tile center",
                ),
            ],
            fixed=["color"],
        )

    def __init__(self, seed, palette, noise, is_light=False):
        super().__init__(seed, palette, noise, is_light)
        self.color = self.stable_color(51)

    def render(self, surface, size, t):
        width = self.sample("width", size, t)
        offset = self.sample("offset", size, t)
        surface.rect(offset, 0, width, size * 0.98, self.color, radius=6)
