from tilewall.patterns.base import (
    Module,
    ModuleDefinition,
    ModuleKind,
    ModuleRegistry,
    Parameter,
)


@ModuleRegistry.register
class Plus(Module):
    @classmethod
    def definition(cls) -> ModuleDefinition:
        return ModuleDefinition(
            kind=ModuleKind.PLUS,
            description="Centered plus sign with breathing stroke thickness",
            parameters=[
                Parameter(
                    name="thickness",
                    type=float,
                    min_value=0.12,
                    max_value=0.32,
                    seed_offset=1,
                    time_scale=0.25,
                    relative=True,
                    description="Bar thickness as a fraction of tile size",
                ),
            ],
            fixed=["color"],
        )

    def __init__(self, seed, palette, noise, is_light=False):
        super().__init__(seed, palette, noise, is_light)
        self.color = self.stable_color(11)

    def render(self, surface, size, t):
        thick = self.sample("thickness", size, t)
        arm = size * 0.84
        surface.rect(0, 0, arm, thick, self.color, radius=5)
        surface.rect(0, 0, thick, arm, self.color, radius=5)
