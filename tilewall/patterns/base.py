import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Type, Optional, Sequence, Tuple

from tilewall.config.wall_config import Color
from tilewall.core.noise_field import NoiseField, lerp
from tilewall.core.surface import Surface


class ModuleKind(Enum):
    """The closed set of pattern kinds a tile can show"""

    DOT_GRID = "dot_grid"
    PLUS = "plus"
    STRIPES = "stripes"
    CHECKER = "checker"
    SOLID_BLOCK = "solid_block"
    DISC = "disc"


@dataclass
class Parameter:
    """Definition of a continuous module parameter.

    The value at time t is noise(seed + seed_offset, t * time_scale) remapped
    into [min_value, max_value]; relative ranges are multiplied by tile size.
    """

    name: str
    type: Type
    min_value: float
    max_value: float
    seed_offset: float = 0.0
    time_scale: float = 1.0
    relative: bool = False
    description: str = ""

    def value_at(self, u: float, size: float = 1.0) -> Any:
        lo, hi = self.min_value, self.max_value
        if self.relative:
            lo, hi = lo * size, hi * size
        value = lerp(lo, hi, u)
        if self.type is int:
            return int(math.floor(value))
        return self.type(value)


@dataclass
class ModuleDefinition:
    """Definition of a module kind and its parameters"""

    kind: ModuleKind
    description: str
    parameters: List[Parameter] = field(default_factory=list)
    fixed: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.kind.value


class Module(ABC):
    """Base class for module instances.

    Fixed parameters are chosen in __init__ and never touched again;
    only the parameters listed in the definition vary per render.
    """

    def __init__(
        self,
        seed: float,
        palette: Sequence[Color],
        noise: NoiseField,
        is_light: bool = False,
    ):
        self.seed = seed
        self.palette = tuple(palette)
        self.noise = noise
        self.is_light = is_light
        self._parameters = {p.name: p for p in self.definition().parameters}

    @classmethod
    @abstractmethod
    def definition(cls) -> ModuleDefinition:
        """Return the module definition"""
        pass

    @property
    def kind(self) -> ModuleKind:
        return self.definition().kind

    @abstractmethod
    def render(self, surface: Surface, size: float, t: float):
        """Draw the module centered on the surface's current origin"""
        pass

    def stable_color(self, salt: float) -> Color:
        return self.noise.stable_choice(self.palette, self.seed, salt)

    def sample(self, name: str, size: float, t: float) -> Any:
        param = self._parameters[name]
        u = self.noise.noise(self.seed + param.seed_offset, t * param.time_scale)
        return param.value_at(u, size)

    def fixed_params(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.definition().fixed}

    def continuous_params(self, size: float, t: float) -> Dict[str, Any]:
        return {name: self.sample(name, size, t) for name in self._parameters}

    def __repr__(self):
        return f"<{type(self).__name__} seed={self.seed:.3f}>"


class ModuleRegistry:
    """Registry of module classes, one per ModuleKind"""

    _modules: Dict[ModuleKind, Type[Module]] = {}

    @classmethod
    def register(cls, module_class: Type[Module]):
        """Register a module class"""
        kind = module_class.definition().kind
        if not isinstance(kind, ModuleKind):
            raise ValueError(f"{module_class.__name__} has no valid ModuleKind")
        existing = cls._modules.get(kind)
        if existing is not None and existing is not module_class:
            raise ValueError(f"Module kind {kind.value} is already registered")
        cls._modules[kind] = module_class
        return module_class

    @classmethod
    def get_module(cls, kind: ModuleKind) -> Optional[Type[Module]]:
        """Get a module class by kind"""
        return cls._modules.get(kind)

    @classmethod
    def kinds(cls) -> Tuple[ModuleKind, ...]:
        """Registered kinds, in declaration order"""
        return tuple(k for k in ModuleKind if k in cls._modules)

    @classmethod
    def list_modules(cls) -> List[ModuleDefinition]:
        """List all registered module definitions"""
        return [cls._modules[k].definition() for k in cls.kinds()]

    @classmethod
    def create(
        cls,
        kind: ModuleKind,
        seed: float,
        palette: Sequence[Color],
        noise: NoiseField,
        is_light: bool = False,
    ) -> Module:
        module_class = cls._modules.get(kind)
        if module_class is None:
            raise KeyError(f"No module registered for {kind}")
        return module_class(seed, palette, noise, is_light)
