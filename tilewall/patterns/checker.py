from tilewall.patterns.base import (
    Module,
    ModuleDefinition,
    ModuleKind,
    ModuleRegistry,
    Parameter,
)


@ModuleRegistry.register
class Checker(Module):
    @classmethod
    def definition(cls) -> ModuleDefinition:
        return ModuleDefinition(
            kind=ModuleKind.CHECKER,
            description="Square lattice of stroked lines",
            parameters=[
                Parameter(
                    name="lines",
                    type=int,
                    min_value=3,
                    max_value=6,
                    seed_offset=4,
                    time_scale=0.2,
                    description="Cells per side",
                ),
            ],
            fixed=["color"],
        )

    def __init__(self, seed, palette, noise, is_light=False):
        super().__init__(seed, palette, noise, is_light)
        self.color = self.stable_color(37)

    def render(self, surface, size, t):
        n = self.sample("lines", size, t)
        step = size / n
        half = size / 2
        weight = max(2.0, size * 0.06)
        for i in range(n + 1):
            pos = -half + i * step
            surface.line(pos, -half, pos, half, self.color, weight)
            surface.line(-half, pos, half, pos, self.color, weight)
