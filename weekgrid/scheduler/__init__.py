from .blocks import place_blocks
from .fill import build_pool, fill_class
from .generate import GenerationResult, GeneratorConfig, generate, generate_best
from .invert import TeacherCell, calculate_teacher_schedules, teacher_hours
from .pick import RandomSource, SystemRandomSource, shuffle, try_resolve
from .state import ClassPlacement, GenerationContext

__all__ = [
    "place_blocks",
    "build_pool",
    "fill_class",
    "generate",
    "generate_best",
    "GeneratorConfig",
    "GenerationResult",
    "calculate_teacher_schedules",
    "teacher_hours",
    "TeacherCell",
    "RandomSource",
    "SystemRandomSource",
    "shuffle",
    "try_resolve",
    "ClassPlacement",
    "GenerationContext",
]
