from tilewall.patterns.base import (
    Module,
    ModuleDefinition,
    ModuleKind,
    ModuleRegistry,
    Parameter,
)

PLATE_COLOR = (241, 241, 241)


@ModuleRegistry.register
class DotGrid(Module):
    @classmethod
    def definition(cls) -> ModuleDefinition:
        return ModuleDefinition(
            kind=ModuleKind.DOT_GRID,
            description="Square lattice of dots, optionally on a pale plate",
            parameters=[
                Parameter(
                    name="columns",
                    type=int,
                    min_value=3,
                    max_value=6,
                    seed_offset=0,
                    time_scale=0.3,
                    description="Dots per row and column",
                ),
            ],
            fixed=["dot_color", "plate_color"],
        )

    def __init__(self, seed, palette, noise, is_light=False):
        super().__init__(seed, palette, noise, is_light)
        # The dot color is the palette's lead accent; dark tiles get a plate
        self.dot_color = self.palette[0]
        self.plate_color = None if is_light else PLATE_COLOR

    def continuous_params(self, size, t):
        columns = self.sample("columns", size, t)
        step = size / columns
        return {"columns": columns, "step": step, "radius": step * 0.42}

    def render(self, surface, size, t):
        params = self.continuous_params(size, t)
        columns, step, radius = params["columns"], params["step"], params["radius"]

        if self.plate_color is not None:
            surface.rect(0, 0, size * 0.98, size * 0.98, self.plate_color, radius=6)

        origin = -size / 2 + step / 2
        for j in range(columns):
            for i in range(columns):
                surface.circle(origin + i * step, origin + j * step, radius * 2, self.dot_color)
