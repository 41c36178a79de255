from tilewall.patterns.base import Module, ModuleDefinition, ModuleKind, ModuleRegistry


@ModuleRegistry.register
class Disc(Module):
    @classmethod
    def definition(cls) -> ModuleDefinition:
        return ModuleDefinition(
            kind=ModuleKind.DISC,
            description="Two concentric discs; static geometry",
            fixed=["outer_color", "inner_color"],
        )

    def __init__(self, seed, palette, noise, is_light=False):
        super().__init__(seed, palette, noise, is_light)
        self.outer_color = self.stable_color(71)
        self.inner_color = self.stable_color(83)

    def render(self, surface, size, t):
        surface.circle(0, 0, size * 0.94, self.outer_color)
        surface.circle(0, 0, size * 0.52, self.inner_color)
